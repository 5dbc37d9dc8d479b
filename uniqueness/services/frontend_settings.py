"""Client settings for one rendered entity form."""

from __future__ import annotations

from uniqueness.config import SEARCH_PAGE_MODE, UniquenessSettings, get_settings
from uniqueness.domain.models import FrontendSettings


def minimum_characters(settings: UniquenessSettings) -> int:
    if settings.search_mode == SEARCH_PAGE_MODE:
        return max(settings.query_min, settings.minimum_word_size)
    return settings.query_min


def search_url(settings: UniquenessSettings) -> str:
    return f"{settings.http.route_prefix}/search"


def build_frontend_settings(
    entity_type: str,
    bundle: str,
    entity_id: str | int | None = None,
    *,
    settings: UniquenessSettings | None = None,
    url: str | None = None,
) -> FrontendSettings:
    """Build the immutable settings one widget instance is created with.

    The entity type and bundle scope the search only when the configured
    scope is ``content_type``; the entity id is passed when editing so the
    item does not match itself.
    """

    settings = settings or get_settings()
    payload: dict[str, object] = {
        "url": url or search_url(settings),
        "prepend_results": settings.results_prepend,
        "min_characters": minimum_characters(settings),
        "searching_string": settings.searching_string,
        "no_results_string": settings.no_result_string,
        "description": settings.default_description,
    }
    if settings.scope == "content_type":
        payload["entity_type"] = entity_type
        payload["bundle"] = bundle
    if entity_id is not None:
        payload["entity_id"] = entity_id
    return FrontendSettings(**payload)


__all__ = ["build_frontend_settings", "minimum_characters", "search_url"]
