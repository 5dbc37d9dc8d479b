"""Bounded, deduplicated result lists built from the configured search mode."""

from __future__ import annotations

from uniqueness.config import UniquenessSettings, get_settings
from uniqueness.domain.models import AggregationResult, Candidate, QueryValues, SearchOptions
from uniqueness.logging import logger
from uniqueness.services.exceptions import SearchModeNotFound, SearchModeUnavailable
from uniqueness.services.search_modes import SearchContext, SearchModeRegistry, registry

EMPTY_RESULT = AggregationResult()


class ResultAggregator:
    """Drive one search mode and shape its output for display.

    Candidates keep the order the search mode returned them in. Later
    duplicates of an identity are dropped, and ``has_more`` reports whether
    more distinct candidates exist than ``max_results``.
    """

    def __init__(
        self,
        context: SearchContext,
        *,
        settings: UniquenessSettings | None = None,
        modes: SearchModeRegistry | None = None,
    ) -> None:
        self.context = context
        self.settings = settings or context.settings or get_settings()
        self.modes = modes or registry

    async def aggregate(
        self,
        values: QueryValues,
        max_results: int | None = None,
        *,
        limit_results: bool = True,
    ) -> AggregationResult:
        if not values.searchable:
            return EMPTY_RESULT

        limit = max_results if max_results is not None else self.settings.results_max
        mode_id = self.settings.search_mode
        try:
            mode = self.modes.create(mode_id, self.context)
        except (SearchModeNotFound, SearchModeUnavailable) as exc:
            logger.warning("search_mode_unavailable", search_mode=mode_id, error=str(exc))
            return EMPTY_RESULT

        try:
            raw = await mode.search(values, SearchOptions(limit=limit + 2))
        except Exception:
            logger.exception("search_mode_failed", search_mode=mode_id)
            return EMPTY_RESULT

        accepted: list[Candidate] = []
        seen: set[str] = set()
        has_more = False
        for candidate in raw:
            identity = candidate.identity
            if identity in seen:
                continue
            seen.add(identity)
            if len(accepted) >= limit:
                has_more = True
                if limit_results:
                    break
            accepted.append(candidate)

        visible = accepted[:limit] if limit_results else accepted
        logger.debug(
            "search_aggregated",
            search_mode=mode_id,
            returned=len(visible),
            has_more=has_more,
        )
        return AggregationResult(candidates=tuple(visible), has_more=has_more)


__all__ = ["ResultAggregator"]
