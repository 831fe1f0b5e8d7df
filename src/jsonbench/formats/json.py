"""
JSON export, pretty-printed or minified.
"""

from __future__ import annotations

from typing import Any

from ..codec import encode
from ..config import Config
from .base import FormatStrategy, registry


class JSONStrategy(FormatStrategy):
    """Re-encode the document. minify=True drops all insignificant whitespace."""

    def __init__(self, minify: bool = False):
        self._minify = minify

    @property
    def name(self) -> str:
        return "json-min" if self._minify else "json"

    @property
    def extensions(self) -> list[str]:
        return [".json"]

    @property
    def mime_type(self) -> str:
        return "application/json"

    def convert(self, value: Any, config: Config) -> str:
        if self._minify:
            return encode(value, indent=None)
        return encode(value, indent=config.export.indent)


# Register the strategies; ".json" resolves to the pretty one
registry.register(JSONStrategy())
registry.register(JSONStrategy(minify=True))
