from __future__ import annotations

import pytest

from uniqueness.domain.models import Candidate, QueryValues, ResultRecord, composite_key


def _candidate(entity_id="5", entity_type="node") -> Candidate:
    return Candidate(id=entity_id, entity_type=entity_type, bundle="article", title="T", url="/t")


def test_from_params_strips_markup_and_drops_empty_values():
    values = QueryValues.from_params(
        {"title": " <em>Summer</em> trip ", "tags": "", "bundle": "<p></p>", "other": "x"}
    )

    assert values == QueryValues(title="Summer trip")
    assert values.searchable


def test_scope_only_values_are_not_searchable():
    assert not QueryValues(entity_id="3", bundle="page").searchable


def test_keywords_split_title_and_tags():
    values = QueryValues(title="garden  tools", tags="rake,shovel, hoe")

    assert values.keywords() == ["garden", "tools", "rake", "shovel", "hoe"]


@pytest.mark.parametrize(
    ("values", "excluded"),
    [
        (QueryValues(title="t", entity_id="5"), True),
        (QueryValues(title="t", entity_id="5", entity_type="node"), True),
        (QueryValues(title="t", entity_id="5", entity_type="user"), False),
        (QueryValues(title="t", entity_id="6"), False),
        (QueryValues(title="t"), False),
    ],
)
def test_excludes_item_being_edited(values, excluded):
    assert values.excludes(_candidate()) is excluded


def test_candidate_coerces_ids_and_missing_status():
    candidate = Candidate(
        id=42, entity_type="node", bundle="page", title="x", url="/x", published=None
    )

    assert candidate.id == "42"
    assert candidate.published is False
    assert candidate.identity == "node--page--42"


def test_composite_key_skips_missing_parts():
    assert composite_key("node", None, "3") == "node--3"
    assert composite_key(None, None, None) == ""


def test_result_record_from_candidate_and_sentinel():
    record = ResultRecord.from_candidate(_candidate().model_copy(update={"published": False}))

    assert record.status == 0
    assert record.href == "/t"
    assert record.cache_key == "node--article--5"

    sentinel = ResultRecord.sentinel()
    assert sentinel.more is True
    assert sentinel.id is None
    assert sentinel.cache_key == ""


@pytest.mark.parametrize("raw", ["a &amp; b", "<b>a &amp; b</b>", "a & b"])
def test_from_params_decodes_entities_with_or_without_tags(raw):
    assert QueryValues.from_params({"title": raw}).title == "a & b"


def test_in_scope_checks_entity_type_and_bundle():
    candidate = _candidate()

    assert QueryValues(title="t").in_scope(candidate)
    assert QueryValues(title="t", entity_type="node", bundle="article").in_scope(candidate)
    assert not QueryValues(title="t", bundle="page").in_scope(candidate)
    assert not QueryValues(title="t", entity_type="user").in_scope(candidate)
