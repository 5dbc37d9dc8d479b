"""Full-text search delegated to an external search page."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import httpx
from pydantic import ValidationError

from uniqueness.config import SearchModeConfig, SearchPageSettings
from uniqueness.domain.models import Candidate, QueryValues, SearchOptions
from uniqueness.logging import logger
from uniqueness.services.exceptions import SearchProviderError
from uniqueness.services.search_modes.base import SearchMode, registry
from uniqueness.utils.retry import retry_async


@registry.register
class SearchPageSearch(SearchMode):
    """Query a configured search page and keep the rows that are content items.

    The page is expected to answer ``GET <url>?keys=...&limit=N`` with
    ``{"results": [{"type": "content", "id": ..., "entity_type": ...,
    "bundle": ..., "title": ..., "url": ..., "status": ...}, ...]}``.
    """

    id = "search_page"
    label = "Search Page"
    subsystem = "search"

    def settings_schema(self) -> dict[str, Any]:
        return {
            "search_page": {
                "title": "Search page",
                "options": {
                    page_id: page.label for page_id, page in self.settings.search_pages.items()
                },
                "default": self.settings.search_mode_config.search_page,
                "required": True,
            }
        }

    def apply_settings(self, submitted: Mapping[str, Any]) -> SearchModeConfig:
        return SearchModeConfig(search_page=submitted.get("search_page"))

    async def search(
        self, values: QueryValues, options: SearchOptions | None = None
    ) -> Sequence[Candidate]:
        if not values.title:
            return []

        page_id = self.settings.search_mode_config.search_page
        if not page_id:
            return []
        page = self.settings.search_pages.get(page_id)
        if page is None:
            logger.warning("search_page_missing", search_page=page_id)
            return []
        client = self.context.http_client
        if client is None:
            raise SearchProviderError("Search page mode needs an HTTP client.")

        limit = options.limit if options and options.limit else self.settings.results_max + 2
        rows = await self._fetch_rows(client, page, values.title, limit)

        output: list[Candidate] = []
        for row in rows:
            if not isinstance(row, dict) or row.get("type", page.kind) != "content":
                logger.warning(
                    "search_page_non_content_result",
                    search_page=page_id,
                    detail="cannot obtain entity results from this search page",
                )
                continue
            try:
                candidate = Candidate(
                    id=row.get("id"),
                    entity_type=row.get("entity_type") or "node",
                    bundle=row.get("bundle") or "",
                    title=row.get("title") or "",
                    url=row.get("url") or "",
                    published=row.get("status", True),
                )
            except ValidationError as exc:
                logger.warning("search_page_invalid_row", search_page=page_id, error=str(exc))
                continue
            if not values.in_scope(candidate) or values.excludes(candidate):
                continue
            output.append(candidate)
        return output[:limit]

    async def _fetch_rows(
        self, client: httpx.AsyncClient, page: SearchPageSettings, keys: str, limit: int
    ) -> list[Any]:
        async def _request():
            response = await client.get(
                str(page.url),
                params={"keys": keys, "limit": limit},
                timeout=self.settings.http.request_timeout_seconds,
            )
            response.raise_for_status()
            return response

        try:
            response = await retry_async(
                _request,
                retry_on=(httpx.TransportError,),
                max_attempts=3,
                base_delay=0.5,
                logger=logger,
                operation_name="search_page_request",
            )
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:500] if exc.response is not None else str(exc)
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            raise SearchProviderError(f"Search page request failed ({status_code}): {detail}") from exc
        except httpx.RequestError as exc:
            raise SearchProviderError(f"Search page request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise SearchProviderError("Search page response is not valid JSON.") from exc
        results = data.get("results") if isinstance(data, dict) else None
        return results if isinstance(results, list) else []


__all__ = ["SearchPageSearch"]
