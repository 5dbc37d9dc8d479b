"""Label lookup from JSON locale files."""

from __future__ import annotations

import json
from functools import partial
from pathlib import Path
from typing import Any, Callable, Iterator


class I18nService:
    """Resolve keys from ``<locale>.json`` files.

    ``de-AT`` falls back to ``de`` and then to the default locale; an unknown
    key is returned unchanged.
    """

    def __init__(self, *, locales_path: str | Path | None = None, default_locale: str = "en") -> None:
        self.locales_path = Path(locales_path or Path(__file__).with_name("locales"))
        self.default_locale = _normalize(default_locale)
        self._tables: dict[str, dict[str, str]] = {}

    def gettext(self, key: str, *, locale: str | None = None, **kwargs: Any) -> str:
        text = key
        for candidate in self._fallback_chain(locale):
            found = self._table(candidate).get(key)
            if found is not None:
                text = found
                break
        return text.format(**kwargs) if kwargs else text

    def bind(self, locale: str | None) -> Callable[..., str]:
        return partial(self.gettext, locale=locale)

    def _fallback_chain(self, locale: str | None) -> Iterator[str]:
        requested = _normalize(locale or self.default_locale)
        seen: set[str] = set()
        for candidate in (requested, requested.split("-")[0], self.default_locale):
            if candidate not in seen:
                seen.add(candidate)
                yield candidate

    def _table(self, locale: str) -> dict[str, str]:
        table = self._tables.get(locale)
        if table is None:
            file_path = self.locales_path / f"{locale}.json"
            table = {}
            if file_path.exists():
                with file_path.open("r", encoding="utf-8") as fp:
                    table = json.load(fp)
            self._tables[locale] = table
        return table


def _normalize(locale: str) -> str:
    return locale.strip().lower().replace("_", "-")


__all__ = ["I18nService"]
