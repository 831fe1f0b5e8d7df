"""
CSV (tabular) export.

Rows are the elements of the top-level array; any other document becomes a
single row. The header is the keys of the first row in source order and
every row emits one field per header. Nested arrays/objects are written as
minified JSON in their field.

Fields are joined as-is: nothing is quoted or escaped, so a value holding
the delimiter or a line break makes the output ambiguous. When the first
row is not an object there are no headers, and every row is an empty line.
"""

from __future__ import annotations

from typing import Any

from ..config import Config
from ..dom import Kind, compact_json, kind_of, scalar_text
from .base import FormatStrategy, registry


class CSVStrategy(FormatStrategy):
    """Array of objects -> header line plus one line per row."""

    def __init__(self, delimiter: str | None = None):
        self._delimiter = delimiter

    @property
    def name(self) -> str:
        return "csv"

    @property
    def extensions(self) -> list[str]:
        return [".csv"]

    @property
    def mime_type(self) -> str:
        return "text/csv"

    def convert(self, value: Any, config: Config) -> str:
        delimiter = self._delimiter or config.export.csv_delimiter
        rows = value if kind_of(value) is Kind.ARRAY else [value]
        if not rows:
            return ""

        first = rows[0]
        headers = list(first.keys()) if kind_of(first) is Kind.OBJECT else []

        lines = [delimiter.join(headers)]
        for row in rows:
            lines.append(delimiter.join(_field(row, h) for h in headers))
        return "\n".join(lines)


def _field(row: Any, header: str) -> str:
    if kind_of(row) is not Kind.OBJECT or header not in row:
        return ""
    cell = row[header]
    if kind_of(cell).is_composite:
        return compact_json(cell)
    return scalar_text(cell)


# Register the strategy
registry.register(CSVStrategy())
