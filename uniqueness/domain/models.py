"""Pydantic models shared across the search service and the client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from uniqueness.utils.markup import strip_tags

FACETS = ("title", "tags", "entity_id", "entity_type", "bundle")
SEARCH_FACETS = ("title", "tags")


def composite_key(entity_type: str | None, bundle: str | None, entity_id: str | None) -> str:
    """Join the non-empty parts of an entity identity with ``--``."""

    return "--".join(chunk for chunk in (entity_type, bundle, entity_id) if chunk)


class Candidate(BaseModel):
    """Snapshot of one content item returned by a search mode."""

    model_config = ConfigDict(frozen=True)

    id: str
    entity_type: str
    bundle: str
    title: str
    url: str
    published: bool = True

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("published", mode="before")
    @classmethod
    def _none_is_unpublished(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def identity(self) -> str:
        return composite_key(self.entity_type, self.bundle, self.id)


class QueryValues(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str | None = None
    tags: str | None = None
    entity_id: str | None = None
    entity_type: str | None = None
    bundle: str | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "QueryValues":
        """Build values from flat request parameters.

        Markup is stripped from every known facet; missing or empty values are
        left out rather than rejected.
        """

        values: dict[str, str] = {}
        for key in FACETS:
            raw = params.get(key)
            if raw is None:
                continue
            cleaned = strip_tags(str(raw)).strip()
            if cleaned:
                values[key] = cleaned
        return cls(**values)

    @property
    def searchable(self) -> bool:
        return any(getattr(self, facet) for facet in SEARCH_FACETS)

    def keywords(self) -> list[str]:
        text = " ".join(filter(None, (self.title, self.tags)))
        return [word for word in text.replace(",", " ").split() if word]

    def in_scope(self, candidate: Candidate) -> bool:
        """Whether ``candidate`` matches the requested entity type and bundle."""

        if self.entity_type and candidate.entity_type != self.entity_type:
            return False
        return not self.bundle or candidate.bundle == self.bundle

    def excludes(self, candidate: Candidate) -> bool:
        """Whether ``candidate`` is the item currently being edited."""

        if not self.entity_id or candidate.id != self.entity_id:
            return False
        return self.entity_type is None or candidate.entity_type == self.entity_type


@dataclass(frozen=True, slots=True)
class SearchOptions:
    limit: int | None = None


@dataclass(frozen=True, slots=True)
class AggregationResult:
    candidates: tuple[Candidate, ...] = field(default_factory=tuple)
    has_more: bool = False

    def __len__(self) -> int:
        return len(self.candidates)

    def __bool__(self) -> bool:
        return bool(self.candidates)


class ResultRecord(BaseModel):
    """One row of the query endpoint response."""

    id: str | None = None
    entity_type: str | None = None
    bundle: str | None = None
    title: str = ""
    status: Literal[0, 1] = 1
    href: str = ""
    more: bool = False

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "ResultRecord":
        return cls(
            id=candidate.id,
            entity_type=candidate.entity_type,
            bundle=candidate.bundle,
            title=candidate.title,
            status=1 if candidate.published else 0,
            href=candidate.url,
        )

    @classmethod
    def sentinel(cls) -> "ResultRecord":
        return cls(more=True)

    @property
    def cache_key(self) -> str:
        return composite_key(self.entity_type, self.bundle, self.id)


class FrontendSettings(BaseModel):
    """Read-only settings handed to one client widget instance."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(alias="URL")
    prepend_results: bool = Field(default=False, alias="prependResults")
    min_characters: int = Field(default=3, ge=1, alias="minCharacters")
    entity_id: str | None = Field(default=None, alias="entityId")
    entity_type: str | None = Field(default=None, alias="entityType")
    bundle: str | None = None
    searching_string: str = Field(default="", alias="searchingString")
    no_results_string: str = Field(default="", alias="noResultsString")
    description: str = ""

    @field_validator("entity_id", mode="before")
    @classmethod
    def _coerce_entity_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def scope_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.entity_id is not None:
            params["entity_id"] = self.entity_id
        if self.entity_type is not None:
            params["entity_type"] = self.entity_type
        if self.bundle is not None:
            params["bundle"] = self.bundle
        return params


__all__ = [
    "AggregationResult",
    "Candidate",
    "FrontendSettings",
    "QueryValues",
    "ResultRecord",
    "SearchOptions",
    "composite_key",
]
