"""Visible result list of one widget instance."""

from __future__ import annotations

from typing import Iterable, Protocol

from uniqueness.domain.models import ResultRecord
from uniqueness.i18n import I18nService
from uniqueness.utils.markup import escape_text


class Panel(Protocol):
    """Collapsible container the widget lives in."""

    def expand(self) -> None: ...


class ResultView:
    """Hold the rows, notifier text and busy marker the widget shows.

    ``render()`` is a pure function of the current rows. The containing panel
    is expanded at most once for the lifetime of the view.
    """

    def __init__(
        self,
        *,
        panel: Panel | None = None,
        i18n: I18nService | None = None,
        locale: str | None = None,
    ) -> None:
        self.rows: list[ResultRecord] = []
        self.notifier_text = ""
        self.searching = False
        self.description = ""
        self.description_visible = True
        self._panel = panel
        self._t = (i18n or I18nService()).bind(locale)

    def prepend(self, records: Iterable[ResultRecord]) -> int:
        new_rows = list(records)
        self.rows[:0] = new_rows
        return len(new_rows)

    def replace(self, records: Iterable[ResultRecord]) -> int:
        self.rows = list(records)
        return len(self.rows)

    def clear(self) -> None:
        self.rows = []

    def mark_searching(self, text: str) -> bool:
        """Show the busy notifier; returns False when it is already shown."""

        if self.searching:
            return False
        self.searching = True
        self.notifier_text = text
        return True

    def clear_searching(self) -> None:
        self.searching = False
        self.notifier_text = ""

    def show_notice(self, text: str) -> None:
        self.notifier_text = text

    def set_description_visible(self, visible: bool) -> None:
        self.description_visible = visible

    def auto_expand(self) -> bool:
        if self._panel is None:
            return False
        panel, self._panel = self._panel, None
        panel.expand()
        return True

    def render(self) -> list[str]:
        return [self.render_row(row) for row in self.rows]

    def render_row(self, row: ResultRecord) -> str:
        if row.more:
            return f"<li>{escape_text(self._t('result.and_others'))}</li>"
        item = f'<a href="{escape_text(row.href)}" target="_blank">{escape_text(row.title)}</a>'
        if row.status == 0:
            item += f" ({escape_text(self._t('result.not_published'))})"
        return f"<li>{item}</li>"


__all__ = ["Panel", "ResultView"]
