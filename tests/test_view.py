"""Tests for ResultView rendering and one-shot panel expansion."""

from __future__ import annotations

from pathlib import Path

from uniqueness.client import ResultView
from uniqueness.domain.models import ResultRecord
from uniqueness.i18n import I18nService


class DummyPanel:
    def __init__(self) -> None:
        self.expanded = 0

    def expand(self) -> None:
        self.expanded += 1


def _row(entity_id: str, *, status: int = 1, title: str | None = None) -> ResultRecord:
    return ResultRecord(
        id=entity_id,
        entity_type="node",
        bundle="article",
        title=title or f"Title {entity_id}",
        status=status,
        href=f"/node/{entity_id}",
    )


def test_render_links_unpublished_marker_and_sentinel():
    view = ResultView()
    view.replace([_row("1"), _row("2", status=0), ResultRecord.sentinel()])

    assert view.render() == [
        '<li><a href="/node/1" target="_blank">Title 1</a></li>',
        '<li><a href="/node/2" target="_blank">Title 2</a> (not published)</li>',
        "<li>... and others.</li>",
    ]


def test_render_escapes_titles_and_is_idempotent():
    view = ResultView()
    view.replace([_row("1", title='<script>"x"</script>')])

    first = view.render()
    assert first == view.render()
    assert "&lt;script&gt;&quot;x&quot;&lt;/script&gt;" in first[0]


def test_prepend_puts_new_rows_first():
    view = ResultView()
    view.replace([_row("A"), _row("B")])

    added = view.prepend([_row("C")])

    assert added == 1
    assert [row.id for row in view.rows] == ["C", "A", "B"]


def test_mark_searching_is_idempotent():
    view = ResultView()

    assert view.mark_searching("Searching...") is True
    assert view.mark_searching("Other") is False
    assert view.notifier_text == "Searching..."

    view.clear_searching()
    assert view.searching is False
    assert view.notifier_text == ""


def test_auto_expand_happens_once():
    panel = DummyPanel()
    view = ResultView(panel=panel)

    assert view.auto_expand() is True
    assert view.auto_expand() is False
    assert panel.expanded == 1
    assert ResultView().auto_expand() is False


def test_labels_follow_locale(tmp_path: Path):
    (tmp_path / "en.json").write_text(
        '{"result.not_published": "draft", "result.and_others": "more..."}', encoding="utf-8"
    )
    (tmp_path / "fr.json").write_text('{"result.not_published": "brouillon"}', encoding="utf-8")
    view = ResultView(i18n=I18nService(locales_path=tmp_path), locale="fr-CA")
    view.replace([_row("1", status=0), ResultRecord.sentinel()])

    assert view.render() == [
        '<li><a href="/node/1" target="_blank">Title 1</a> (brouillon)</li>',
        "<li>more...</li>",
    ]
