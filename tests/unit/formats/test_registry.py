"""
Unit tests for the export registry, the JSON strategies and the shared
export() guard.
"""

import pytest
from jsonbench.config import Config
from jsonbench.errors import ConversionError
from jsonbench.formats import csv as _csv  # noqa: F401 - ensure csv format is registered
from jsonbench.formats import xml as _xml  # noqa: F401 - ensure xml format is registered
from jsonbench.formats import yaml as _yaml  # noqa: F401 - ensure yaml format is registered
from jsonbench.formats.base import FormatRegistry, FormatStrategy, registry
from jsonbench.formats.json import JSONStrategy


class Exploding(FormatStrategy):
    @property
    def name(self) -> str:
        return "boom"

    @property
    def extensions(self) -> list[str]:
        return [".boom"]

    def convert(self, value, config):
        raise TypeError("unexpected shape")


def deep(levels):
    value: list = []
    for _ in range(levels):
        value = [value]
    return value


class TestRegistry:
    def test_builtin_formats(self):
        assert {"csv", "xml", "yaml", "json", "json-min"} <= set(registry.names)

    def test_first_registration_wins_extension(self):
        local = FormatRegistry()
        first = JSONStrategy()
        local.register(first)
        local.register(JSONStrategy(minify=True))
        assert local.get_by_extension("json") is first
        assert local.get_by_name("json-min") is not first

    def test_names_keep_registration_order(self):
        local = FormatRegistry()
        local.register(JSONStrategy(minify=True))
        local.register(Exploding())
        local.register(JSONStrategy())
        assert local.names == ["json-min", "boom", "json"]

    def test_unknown_lookups(self):
        assert registry.get_by_name("toml") is None
        assert registry.get_by_extension(".toml") is None


class TestJSONStrategy:
    def test_pretty(self):
        assert JSONStrategy().export({"a": 1}, Config()) == '{\n  "a": 1\n}'

    def test_indent_comes_from_config(self):
        config = Config()
        config.export.indent = 4
        assert JSONStrategy().export({"a": 1}, config) == '{\n    "a": 1\n}'

    def test_minified(self):
        strategy = JSONStrategy(minify=True)
        assert strategy.name == "json-min"
        assert strategy.export({"a": [1, 2]}) == '{"a":[1,2]}'


class TestExportGuard:
    def test_unexpected_failure_becomes_conversion_error(self):
        with pytest.raises(ConversionError, match="boom export failed: unexpected shape"):
            Exploding().export({})

    def test_default_mime_type(self):
        assert Exploding().mime_type == "text/plain"

    @pytest.mark.parametrize("name", ["csv", "xml", "yaml", "json"])
    def test_nesting_past_the_depth_ceiling_converts(self, name):
        doc = [{"id": 1, "blob": deep(52)}]
        assert "1" in registry.get_by_name(name).export(doc, Config())

    @pytest.mark.parametrize("name", ["csv", "xml", "yaml", "json"])
    def test_stack_exhaustion_becomes_conversion_error(self, name):
        doc = [{"id": 1, "blob": deep(100_000)}]
        with pytest.raises(ConversionError):
            registry.get_by_name(name).export(doc, Config())
