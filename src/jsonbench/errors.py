"""
Error kinds raised by jsonbench.

The core never logs or retries; it raises one of these to its immediate
caller. Messages are meant to be shown to the user as-is.
"""

from __future__ import annotations


class WorkbenchError(Exception):
    """Base class for every error the workbench surfaces."""


class DecodeError(WorkbenchError):
    """Malformed input text. The decoder's message is kept verbatim."""


class PathError(WorkbenchError):
    """A path expression could not be evaluated."""

    def __init__(self, message: str, segment: str | None = None, position: int | None = None):
        super().__init__(message)
        self.segment = segment
        self.position = position

    def __str__(self) -> str:
        message = super().__str__()
        if self.segment is None:
            return message
        return f"{message}: {self.segment!r} (segment {self.position})"


class ConversionError(WorkbenchError):
    """A converter met a shape it cannot handle."""


class AdmissionError(WorkbenchError):
    """Input rejected before it reaches the core (size cap, content filter)."""


class NoDocumentError(WorkbenchError):
    """An operation needs a loaded document and there is none."""
