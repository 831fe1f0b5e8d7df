"""
XML (markup) export.

One declaration line, then a single element tree with no whitespace between
elements. Object members become elements named by their key, array elements
become <item> elements, and scalars are written as their text.

Keys and text are not escaped: a key that is not a valid element name, or
text containing '<' or '&', produces malformed markup.
"""

from __future__ import annotations

from typing import Any

from ..config import Config
from ..dom import Kind, kind_of, scalar_text
from .base import FormatStrategy, registry

DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


class XMLStrategy(FormatStrategy):
    """Nested elements named by key, with a fixed child name for arrays."""

    def __init__(self, root_name: str | None = None, item_name: str | None = None):
        self._root_name = root_name
        self._item_name = item_name

    @property
    def name(self) -> str:
        return "xml"

    @property
    def extensions(self) -> list[str]:
        return [".xml"]

    @property
    def mime_type(self) -> str:
        return "application/xml"

    def convert(self, value: Any, config: Config) -> str:
        cfg = config.export
        root_name = self._root_name or cfg.xml_root
        item_name = self._item_name or cfg.xml_item

        parts: list[str] = [DECLARATION, "\n"]
        _element(value, root_name, item_name, parts)
        return "".join(parts)


def _element(value: Any, tag: str, item_name: str, parts: list[str]) -> None:
    parts.append(f"<{tag}>")
    kind = kind_of(value)
    if kind is Kind.ARRAY:
        for item in value:
            _element(item, item_name, item_name, parts)
    elif kind is Kind.OBJECT:
        for key, member in value.items():
            _element(member, key, item_name, parts)
    else:
        parts.append(scalar_text(value))
    parts.append(f"</{tag}>")


# Register the strategy
registry.register(XMLStrategy())
