"""
Parser for JSON-wrapped HTML fragments (``{"html": "...", "css": [], "js": []}``).

Tree queries are deliberately forgiving: provider markup differs between
scheduled and completed rows, so a missing element yields None / "" / []
instead of raising.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from courtside.core.text import collapse_whitespace
from courtside.ingestion.providers.base.errors import ProviderParseError


@dataclass(frozen=True)
class MarkupDocument:
    soup: BeautifulSoup

    def _root(self, root: Tag | None) -> Tag:
        return self.soup if root is None else root

    def find_all_by_class(self, class_name: str, root: Tag | None = None) -> list[Tag]:
        return list(self._root(root).find_all(class_=class_name))

    def find_by_class(self, class_name: str, root: Tag | None = None) -> Tag | None:
        found = self._root(root).find(class_=class_name)
        return found if isinstance(found, Tag) else None

    def select(self, css: str, root: Tag | None = None) -> list[Tag]:
        return list(self._root(root).select(css))

    def select_one(self, css: str, root: Tag | None = None) -> Tag | None:
        return self._root(root).select_one(css)

    def find_by_attribute_prefix(
        self, attribute: str, prefix: str, root: Tag | None = None
    ) -> Tag | None:
        """First element (root included) whose ``attribute`` starts with ``prefix``."""
        scope = self._root(root)
        if isinstance(scope, Tag) and _attr_startswith(scope, attribute, prefix):
            return scope
        found = scope.find(lambda el: _attr_startswith(el, attribute, prefix))
        return found if isinstance(found, Tag) else None

    @staticmethod
    def text_of(el: Tag | None) -> str:
        if el is None:
            return ""
        return collapse_whitespace(el.get_text(" "))

    @staticmethod
    def raw_text_of(el: Tag | None) -> str:
        """Text without whitespace normalization (placeholders such as ``&nbsp;`` survive)."""
        if el is None:
            return ""
        return el.get_text()

    @staticmethod
    def attr_of(el: Tag | None, name: str) -> str | None:
        if el is None:
            return None
        value = el.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value or None

    @staticmethod
    def class_tokens(el: Tag | None) -> list[str]:
        if el is None:
            return []
        value = el.get("class") or []
        return list(value) if isinstance(value, list) else value.split()


def _attr_startswith(el: Tag, attribute: str, prefix: str) -> bool:
    value = el.get(attribute)
    if value is None:
        return False
    if isinstance(value, list):
        return any(v.startswith(prefix) for v in value)
    return value.startswith(prefix)


def parse_markup_html(html: str) -> MarkupDocument:
    return MarkupDocument(soup=BeautifulSoup(html, "lxml"))


def parse_markup_envelope(raw: str) -> MarkupDocument:
    """Unwrap the ``html`` field of a JSON envelope and parse it."""
    try:
        envelope = json.loads(raw)
    except ValueError as e:
        raise ProviderParseError("Markup envelope was not valid JSON.") from e

    if not isinstance(envelope, dict):
        raise ProviderParseError(f"Expected JSON object envelope, got {type(envelope)}")

    html = envelope.get("html")
    if not isinstance(html, str):
        raise ProviderParseError("Markup envelope is missing its 'html' field.")

    return parse_markup_html(html)
