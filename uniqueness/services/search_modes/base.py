"""Search mode contract and registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Iterator, Mapping, Sequence, TypeVar

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from uniqueness.config import SearchModeConfig, UniquenessSettings, get_settings
from uniqueness.domain.models import Candidate, QueryValues, SearchOptions
from uniqueness.services.exceptions import SearchModeNotFound, SearchModeUnavailable


@dataclass(slots=True)
class SearchContext:
    """Collaborators a search mode may need for one request."""

    settings: UniquenessSettings
    session: AsyncSession | None = None
    http_client: httpx.AsyncClient | None = None


class SearchMode(ABC):
    """One pluggable strategy for finding candidate duplicates."""

    id: ClassVar[str]
    label: ClassVar[str]
    subsystem: ClassVar[str | None] = None

    def __init__(self, context: SearchContext) -> None:
        self.context = context

    @classmethod
    def available(cls) -> bool:
        if cls.subsystem is None:
            return False
        return get_settings().subsystem_enabled(cls.subsystem)

    @property
    def settings(self) -> UniquenessSettings:
        return self.context.settings

    def settings_schema(self) -> dict[str, Any]:
        return {}

    def apply_settings(self, submitted: Mapping[str, Any]) -> SearchModeConfig:
        return SearchModeConfig()

    @abstractmethod
    async def search(
        self, values: QueryValues, options: SearchOptions | None = None
    ) -> Sequence[Candidate]:
        """Return candidates in this mode's own order."""


M = TypeVar("M", bound=type[SearchMode])


class SearchModeRegistry:
    def __init__(self) -> None:
        self._modes: dict[str, type[SearchMode]] = {}

    def register(self, mode_cls: M) -> M:
        if mode_cls.id in self._modes:
            raise ValueError(f"Search mode '{mode_cls.id}' is already registered.")
        self._modes[mode_cls.id] = mode_cls
        return mode_cls

    def get(self, mode_id: str) -> type[SearchMode]:
        try:
            return self._modes[mode_id]
        except KeyError:
            raise SearchModeNotFound(f"Unknown search mode: {mode_id!r}.") from None

    def create(self, mode_id: str, context: SearchContext) -> SearchMode:
        mode_cls = self.get(mode_id)
        if not mode_cls.available():
            raise SearchModeUnavailable(f"Search mode '{mode_id}' is not available.")
        return mode_cls(context)

    def options(self) -> dict[str, str]:
        """Labels of the modes that can currently be selected."""

        return {mode_id: cls.label for mode_id, cls in self._modes.items() if cls.available()}

    def __contains__(self, mode_id: object) -> bool:
        return mode_id in self._modes

    def __iter__(self) -> Iterator[str]:
        return iter(self._modes)


registry = SearchModeRegistry()

__all__ = ["SearchContext", "SearchMode", "SearchModeRegistry", "registry"]
