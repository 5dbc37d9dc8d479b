"""Markup helpers for request values and rendered rows."""

from __future__ import annotations

from html import escape

from bs4 import BeautifulSoup


def strip_tags(value: str) -> str:
    """Drop every tag from ``value`` and return its text content."""

    return BeautifulSoup(value, "html.parser").get_text()


def escape_text(value: str) -> str:
    return escape(value, quote=True)


__all__ = ["escape_text", "strip_tags"]
