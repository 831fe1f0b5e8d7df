"""
Base export format interface and registry.

Each format strategy converts a decoded document into one text format.
Strategies are pure: no state is shared between calls and nothing is cached.
The registry maps format names and file extensions to strategies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..config import Config, get_config
from ..errors import ConversionError


class FormatStrategy(ABC):
    """Base class for document converters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Format name used for lookup (e.g., 'csv')."""
        ...

    @property
    @abstractmethod
    def extensions(self) -> list[str]:
        """File extensions for this format (e.g., ['.yaml', '.yml'])."""
        ...

    @property
    def mime_type(self) -> str:
        return "text/plain"

    @abstractmethod
    def convert(self, value: Any, config: Config) -> str:
        """Convert a document to text. Called through export()."""
        ...

    def export(self, value: Any, config: Config | None = None) -> str:
        """
        Convert value under config (the global config when omitted).

        Any document converts; failures inside convert(), including running
        out of stack on extreme nesting, surface as ConversionError.
        """
        try:
            return self.convert(value, config or get_config())
        except (TypeError, ValueError, RecursionError) as e:
            raise ConversionError(f"{self.name} export failed: {e}") from e


class FormatRegistry:
    """Registry of export strategies by name and extension."""

    def __init__(self):
        self._by_extension: dict[str, FormatStrategy] = {}
        self._by_name: dict[str, FormatStrategy] = {}

    def register(self, strategy: FormatStrategy) -> None:
        """Register a format strategy."""
        self._by_name[strategy.name] = strategy
        for ext in strategy.extensions:
            # First registered wins for extension conflicts
            if ext not in self._by_extension:
                self._by_extension[ext] = strategy

    def get_by_name(self, name: str) -> FormatStrategy | None:
        """Get strategy by name (for --export)."""
        return self._by_name.get(name.lower())

    def get_by_extension(self, ext: str) -> FormatStrategy | None:
        """Get strategy by file extension."""
        # Normalize extension
        if not ext.startswith('.'):
            ext = '.' + ext
        return self._by_extension.get(ext.lower())

    @property
    def names(self) -> list[str]:
        """Registered format names, in registration order."""
        return list(self._by_name)


# Global registry instance
registry = FormatRegistry()
