"""
Workbench - the caller-side facade over the core.

Holds the canonical document and applies the admission checks that sit in
front of the core: empty input, the input size cap and the content filter.
Every operation reads the document; none of them mutate it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from . import codec
from .config import Config, get_config
from .dom import DisplayNode
from .errors import AdmissionError, ConversionError, NoDocumentError, PathError
from .formats import csv as _csv  # noqa: F401 - ensure csv format is registered
from .formats import json as _json  # noqa: F401 - ensure json formats are registered
from .formats import xml as _xml  # noqa: F401 - ensure xml format is registered
from .formats import yaml as _yaml  # noqa: F401 - ensure yaml format is registered
from .formats.base import registry
from .query import evaluate_path
from .router import ExecutionRouter
from .schema import SchemaViolation, iter_violations
from .traversal import count_nodes, render

logger = logging.getLogger(__name__)

# Markup-injection markers refused in documents and schemas
SUSPICIOUS_CONTENT = re.compile(r"<script|javascript:|onerror=", re.IGNORECASE)


@dataclass
class TreeView:
    """Outcome of the render decision for the current document."""
    node_count: int
    root: DisplayNode | None
    too_large: bool

    @property
    def message(self) -> str:
        if self.too_large:
            return (
                f"Large JSON detected ({self.node_count} nodes). Tree view limited "
                "to prevent freezing. Use export or query instead."
            )
        return f"{self.node_count} nodes"


@dataclass
class Export:
    """A converted document ready to be written somewhere."""
    content: str
    filename: str
    mime_type: str


class Workbench:
    """Loads one document at a time and answers queries about it."""

    def __init__(self, config: Config | None = None, router: ExecutionRouter | None = None):
        self._config = config or get_config()
        self._router = router or ExecutionRouter(threshold=self._config.io.offload_threshold)
        self._document: Any = None
        self._loaded = False

    @property
    def has_document(self) -> bool:
        return self._loaded

    @property
    def document(self) -> Any:
        self._require_document()
        return self._document

    def _require_document(self) -> None:
        if not self._loaded:
            raise NoDocumentError("No document loaded")

    def _admit(self, text: str, what: str) -> str:
        text = text.strip()
        if codec.payload_size(text) > self._config.io.max_input_size:
            limit_mb = self._config.io.max_input_size / (1024 * 1024)
            raise AdmissionError(f"{what} too large. Maximum {limit_mb:g}MB allowed.")
        if SUSPICIOUS_CONTENT.search(text):
            raise AdmissionError("Invalid content detected.")
        return text

    def load(self, text: str) -> Any:
        """
        Decode text and make it the current document.

        Empty input clears the workbench and returns None. On any error the
        previous document is dropped, as the editor shows nothing valid.
        """
        self.clear()
        text = self._admit(text, "File")
        if not text:
            return None

        document = self._router.decode(text)
        self._document = document
        self._loaded = True
        logger.debug("Loaded document (%d bytes)", codec.payload_size(text))
        return document

    def clear(self) -> None:
        self._document = None
        self._loaded = False

    def view(self) -> TreeView:
        """Count nodes and build the display tree only when within the ceiling."""
        self._require_document()
        limits = self._config.limits
        node_count = count_nodes(self._document, limits)
        if node_count > limits.max_nodes:
            return TreeView(node_count=node_count, root=None, too_large=True)
        return TreeView(node_count=node_count, root=render(self._document, limits), too_large=False)

    def query(self, path_text: str) -> str:
        """Evaluate a path and return the result pretty-encoded."""
        self._require_document()
        limits = self._config.limits
        path_text = path_text.strip()
        if not path_text:
            raise PathError("Please enter a JSON path")
        if len(path_text) > limits.max_path_length:
            raise PathError(f"Path too long. Maximum {limits.max_path_length} characters.")

        result = evaluate_path(self._document, path_text, limits)
        text = codec.encode(result, indent=self._config.export.indent)
        if len(text) > limits.max_result_chars:
            return f"Result too large to display ({len(text)} chars)"
        return text

    def check_schema(self, schema_text: str) -> list[SchemaViolation]:
        """Validate the document against a schema given as text. Empty list = valid."""
        self._require_document()
        schema_text = self._admit(schema_text, "Schema")
        if not schema_text:
            raise AdmissionError("Please enter a JSON schema")
        schema = codec.decode(schema_text)
        return list(iter_violations(self._document, schema, limits=self._config.limits))

    def export(self, format_name: str) -> Export:
        """Convert the document with a registered format strategy."""
        self._require_document()
        strategy = registry.get_by_name(format_name)
        if strategy is None:
            known = ", ".join(registry.names)
            raise ConversionError(f"Unknown export format {format_name!r} (known: {known})")

        if self.char_count() > self._config.io.max_input_size:
            raise AdmissionError("JSON too large to export.")

        extension = strategy.extensions[0] if strategy.extensions else ".txt"
        return Export(
            content=strategy.export(self._document, self._config),
            filename=f"export{extension}",
            mime_type=strategy.mime_type,
        )

    def formatted(self) -> str:
        self._require_document()
        return codec.encode(self._document, indent=self._config.export.indent)

    def minified(self) -> str:
        self._require_document()
        return codec.encode(self._document, indent=None)

    def char_count(self) -> int:
        """Minified size of the document, 0 when nothing is loaded."""
        if not self._loaded:
            return 0
        return codec.char_count(self._document)

    def close(self) -> None:
        self._router.shutdown()

    def __enter__(self) -> Workbench:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
