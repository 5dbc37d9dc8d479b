"""Tests for deduplication, overflow and degradation in the aggregator."""

from __future__ import annotations

import pytest

from uniqueness.config import UniquenessSettings
from uniqueness.db.models.core import ContentItem
from uniqueness.domain.models import Candidate, QueryValues
from uniqueness.services.aggregator import ResultAggregator
from uniqueness.services.search_modes import SearchContext, SearchMode, SearchModeRegistry


def _candidate(entity_id: int, bundle: str = "article") -> Candidate:
    return Candidate(
        id=str(entity_id),
        entity_type="node",
        bundle=bundle,
        title=f"Item {entity_id}",
        url=f"/node/{entity_id}",
    )


def _registry(rows: list[Candidate], calls: list | None = None) -> SearchModeRegistry:
    modes = SearchModeRegistry()

    @modes.register
    class StaticSearch(SearchMode):
        id = "static"
        label = "Static"

        @classmethod
        def available(cls) -> bool:
            return True

        async def search(self, values, options=None):
            if calls is not None:
                calls.append((values, options))
            return list(rows)

    @modes.register
    class ExplodingSearch(SearchMode):
        id = "exploding"
        label = "Exploding"

        @classmethod
        def available(cls) -> bool:
            return True

        async def search(self, values, options=None):
            raise RuntimeError("index offline")

    @modes.register
    class MissingSearch(SearchMode):
        id = "missing_subsystem"
        label = "Missing"

        async def search(self, values, options=None):
            raise AssertionError("unavailable modes are never created")

    return modes


def _aggregator(rows, *, mode: str = "static", results_max: int = 5, calls=None):
    settings = UniquenessSettings(_env_file=None, search_mode=mode, results_max=results_max)
    return ResultAggregator(SearchContext(settings=settings), modes=_registry(rows, calls))


@pytest.mark.asyncio
async def test_overflow_is_reported_and_list_is_capped():
    calls: list = []
    aggregator = _aggregator([_candidate(i) for i in range(1, 8)], calls=calls)

    result = await aggregator.aggregate(QueryValues(title="item"))

    assert [c.id for c in result.candidates] == ["1", "2", "3", "4", "5"]
    assert result.has_more is True
    assert calls[0][1].limit == 7


@pytest.mark.parametrize(
    ("distinct", "maximum"),
    [(0, 3), (2, 3), (3, 3), (4, 3), (10, 1)],
)
@pytest.mark.asyncio
async def test_has_more_iff_more_distinct_than_maximum(distinct, maximum):
    rows = [_candidate(i) for i in range(distinct)]
    # Interleave duplicates; they must not count towards the overflow.
    rows = [row for pair in zip(rows, rows) for row in pair]
    aggregator = _aggregator(rows, results_max=maximum)

    result = await aggregator.aggregate(QueryValues(title="item"))

    assert result.has_more is (distinct > maximum)
    assert len(result) == min(distinct, maximum)


@pytest.mark.asyncio
async def test_first_occurrence_wins_and_order_is_kept():
    first = _candidate(2)
    duplicate = first.model_copy(update={"title": "Later copy"})
    aggregator = _aggregator([_candidate(3), first, _candidate(1), duplicate])

    result = await aggregator.aggregate(QueryValues(title="item"))

    assert [c.id for c in result.candidates] == ["3", "2", "1"]
    assert result.candidates[1].title == "Item 2"
    assert len({c.identity for c in result.candidates}) == len(result)


@pytest.mark.asyncio
async def test_same_id_in_different_bundles_is_distinct():
    aggregator = _aggregator([_candidate(1, "article"), _candidate(1, "page")])

    result = await aggregator.aggregate(QueryValues(title="item"))

    assert len(result) == 2


@pytest.mark.asyncio
async def test_unlimited_results_keep_every_distinct_candidate():
    aggregator = _aggregator([_candidate(i) for i in range(8)], results_max=3)

    result = await aggregator.aggregate(QueryValues(title="item"), limit_results=False)

    assert len(result) == 8
    assert result.has_more is True


@pytest.mark.asyncio
async def test_values_without_search_facet_skip_the_provider():
    calls: list = []
    aggregator = _aggregator([_candidate(1)], calls=calls)

    result = await aggregator.aggregate(QueryValues(entity_id="4", bundle="article"))

    assert not result
    assert result.has_more is False
    assert calls == []


@pytest.mark.parametrize("mode", ["exploding", "unknown", "missing_subsystem"])
@pytest.mark.asyncio
async def test_failures_degrade_to_empty_result(mode):
    aggregator = _aggregator([_candidate(1)], mode=mode)

    result = await aggregator.aggregate(QueryValues(title="item"))

    assert result.candidates == ()
    assert result.has_more is False


@pytest.mark.asyncio
async def test_aggregate_is_idempotent_and_excludes_self(session):
    session.add_all(
        [
            ContentItem(entity_type="node", bundle="article", title=f"Duplicate {n}")
            for n in range(4)
        ]
    )
    await session.flush()
    settings = UniquenessSettings(_env_file=None, results_max=2)
    aggregator = ResultAggregator(SearchContext(settings=settings, session=session))
    values = QueryValues(title="duplicate", entity_id="1")

    first = await aggregator.aggregate(values)
    second = await aggregator.aggregate(values)

    assert first == second
    assert [c.id for c in first.candidates] == ["2", "3"]
    assert first.has_more is True
    assert all(c.id != "1" for c in first.candidates)
