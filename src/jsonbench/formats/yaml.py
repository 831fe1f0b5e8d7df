"""
YAML-like indented block export.

Objects emit "key: value" lines and arrays emit "- value" lines, two spaces
of indent per level. A nested array/object leaves its line open ("key: " or
"- ") and continues on the following lines one level deeper.

Strings are not quoted, so values containing ": ", "- " or line breaks do
not round-trip. A scalar document produces no lines at all.
"""

from __future__ import annotations

from typing import Any

from ..config import Config
from ..dom import Kind, kind_of, scalar_text
from .base import FormatStrategy, registry


class YAMLStrategy(FormatStrategy):
    """Indented key/value block."""

    def __init__(self, indent: int | None = None):
        self._indent = indent

    @property
    def name(self) -> str:
        return "yaml"

    @property
    def extensions(self) -> list[str]:
        return [".yaml", ".yml"]

    @property
    def mime_type(self) -> str:
        return "text/yaml"

    def convert(self, value: Any, config: Config) -> str:
        width = self._indent if self._indent is not None else config.export.indent
        parts: list[str] = []
        _block(value, 0, " " * width, parts)
        return "".join(parts)


def _block(value: Any, level: int, indent: str, parts: list[str]) -> None:
    pad = indent * level
    kind = kind_of(value)

    if kind is Kind.ARRAY:
        for item in value:
            parts.append(f"{pad}- ")
            _entry(item, level, indent, parts)
    elif kind is Kind.OBJECT:
        for key, member in value.items():
            parts.append(f"{pad}{key}: ")
            _entry(member, level, indent, parts)


def _entry(value: Any, level: int, indent: str, parts: list[str]) -> None:
    """Finish an open "key: " / "- " line."""
    if kind_of(value).is_composite:
        parts.append("\n")
        _block(value, level + 1, indent, parts)
    else:
        parts.append(scalar_text(value) + "\n")


# Register the strategy
registry.register(YAMLStrategy())
