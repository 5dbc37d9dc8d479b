from uniqueness.services.search_modes.base import (
    SearchContext,
    SearchMode,
    SearchModeRegistry,
    registry,
)
from uniqueness.services.search_modes.node_title import NodeTitleSearch
from uniqueness.services.search_modes.search_index import SearchIndexSearch
from uniqueness.services.search_modes.search_page import SearchPageSearch

__all__ = [
    "NodeTitleSearch",
    "SearchContext",
    "SearchIndexSearch",
    "SearchMode",
    "SearchModeRegistry",
    "SearchPageSearch",
    "registry",
]
