"""Title substring search over stored content items."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select

from uniqueness.db.models.core import ContentItem
from uniqueness.domain.models import Candidate, QueryValues, SearchOptions
from uniqueness.services.exceptions import SearchProviderError
from uniqueness.services.search_modes.base import SearchMode, registry


@registry.register
class NodeTitleSearch(SearchMode):
    id = "node_title"
    label = "Node Title"
    subsystem = "content"

    async def search(
        self, values: QueryValues, options: SearchOptions | None = None
    ) -> Sequence[Candidate]:
        if not values.title:
            return []
        session = self.context.session
        if session is None:
            raise SearchProviderError("Node title search needs a database session.")

        stmt = select(ContentItem).where(ContentItem.title.icontains(values.title, autoescape=True))
        if values.entity_type:
            stmt = stmt.where(ContentItem.entity_type == values.entity_type)
        if values.bundle:
            stmt = stmt.where(ContentItem.bundle == values.bundle)
        if values.entity_id and values.entity_id.isdigit():
            stmt = stmt.where(ContentItem.id != int(values.entity_id))
        stmt = stmt.order_by(ContentItem.id)
        limit = options.limit if options and options.limit else self.settings.results_max + 2
        stmt = stmt.limit(limit)

        result = await session.execute(stmt)
        candidates = [_to_candidate(item) for item in result.scalars().all()]
        return [candidate for candidate in candidates if not values.excludes(candidate)]


def _to_candidate(item: ContentItem) -> Candidate:
    return Candidate(
        id=str(item.id),
        entity_type=item.entity_type,
        bundle=item.bundle,
        title=item.title,
        url=item.url,
        published=item.status,
    )


__all__ = ["NodeTitleSearch"]
