"""Keyword search over a stored search index."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from sqlalchemy import or_, select

from uniqueness.config import SearchModeConfig
from uniqueness.db.models.core import SearchIndex, SearchIndexItem
from uniqueness.domain.models import Candidate, QueryValues, SearchOptions
from uniqueness.logging import logger
from uniqueness.services.exceptions import SearchProviderError
from uniqueness.services.search_modes.base import SearchMode, registry


@registry.register
class SearchIndexSearch(SearchMode):
    """Every keyword from the title and tags must appear in an item's title or body."""

    id = "search_index"
    label = "Search Index"
    subsystem = "search_index"

    async def settings_schema_async(self) -> dict[str, Any]:
        """Like :meth:`settings_schema`, with the index choices loaded from storage."""

        schema = self.settings_schema()
        session = self.context.session
        if session is not None:
            result = await session.execute(select(SearchIndex).order_by(SearchIndex.label))
            schema["search_index"]["options"] = {
                index.machine_name: index.label for index in result.scalars().all()
            }
        return schema

    def settings_schema(self) -> dict[str, Any]:
        return {
            "search_index": {
                "title": "Search index",
                "options": {},
                "default": self.settings.search_mode_config.search_index,
                "required": True,
            }
        }

    def apply_settings(self, submitted: Mapping[str, Any]) -> SearchModeConfig:
        return SearchModeConfig(search_index=submitted.get("search_index"))

    async def search(
        self, values: QueryValues, options: SearchOptions | None = None
    ) -> Sequence[Candidate]:
        keywords = values.keywords()
        if not keywords:
            return []

        index_id = self.settings.search_mode_config.search_index
        if not index_id:
            return []
        session = self.context.session
        if session is None:
            raise SearchProviderError("Search index mode needs a database session.")

        result = await session.execute(
            select(SearchIndex).where(SearchIndex.machine_name == index_id)
        )
        index = result.scalar_one_or_none()
        if index is None:
            logger.warning("search_index_missing", search_index=index_id)
            return []
        if not index.status:
            logger.warning("search_index_disabled", search_index=index_id)
            return []

        stmt = select(SearchIndexItem).where(SearchIndexItem.index_id == index.id)
        for keyword in keywords:
            stmt = stmt.where(
                or_(
                    SearchIndexItem.title.icontains(keyword, autoescape=True),
                    SearchIndexItem.body.icontains(keyword, autoescape=True),
                )
            )
        if values.entity_type:
            stmt = stmt.where(SearchIndexItem.entity_type == values.entity_type)
        if values.bundle:
            stmt = stmt.where(SearchIndexItem.bundle == values.bundle)
        if values.entity_id:
            stmt = stmt.where(SearchIndexItem.entity_id != values.entity_id)
        limit = options.limit if options and options.limit else self.settings.results_max + 2
        stmt = stmt.order_by(SearchIndexItem.id).limit(limit)

        rows = (await session.execute(stmt)).scalars().all()
        return [
            Candidate(
                id=row.entity_id,
                entity_type=row.entity_type,
                bundle=row.bundle,
                title=row.title,
                url=row.url or f"/{row.entity_type}/{row.entity_id}",
                published=row.status,
            )
            for row in rows
        ]


__all__ = ["SearchIndexSearch"]
