"""
DOM - Document model for jsonbench

Tree Values are the plain objects the standard decoder produces: None, bool,
int/float, str, list and dict (insertion ordered). Every component dispatches
on the closed Kind tag from kind_of() rather than on Python types directly.

DisplayNode is the render-side tree built by traversal.render(). It never
holds a reference back into the document's containers, only scalars.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Kind(Enum):
    """Runtime shape of a Tree Value."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_composite(self) -> bool:
        return self in (Kind.ARRAY, Kind.OBJECT)


def kind_of(value: Any) -> Kind:
    """Classify a decoded value. bool is checked before numbers."""
    if value is None:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, (int, float)):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, list):
        return Kind.ARRAY
    if isinstance(value, dict):
        return Kind.OBJECT
    raise TypeError(f"Not a tree value: {type(value).__name__}")


def scalar_text(value: Any) -> str:
    """
    Textual form of a scalar, as the wire format prints it.

    Integral floats lose their trailing ".0" (2.0 -> "2"), exponents are not
    zero-padded (1e-7, 1e+21) and strings are returned verbatim, without
    quotes.
    """
    kind = kind_of(value)
    if kind is Kind.NULL:
        return "null"
    if kind is Kind.BOOLEAN:
        return "true" if value else "false"
    if kind is Kind.NUMBER:
        if isinstance(value, int):
            return str(value)
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return _float_text(value)
    if kind is Kind.STRING:
        return value
    raise TypeError(f"Not a scalar: {kind.value}")


def _float_text(value: float) -> str:
    # fixed notation down to 1e-6, exponent below that, never zero-padded
    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if not sep:
        return text
    power = int(exponent)
    if -7 < power < 0:
        sign = "-" if mantissa.startswith("-") else ""
        digits = mantissa.lstrip("-").replace(".", "")
        return f"{sign}0.{'0' * (-power - 1)}{digits}"
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def compact_json(value: Any) -> str:
    """Minified encoding used when a composite is embedded in text output."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


@dataclass
class DisplayNode:
    """A node in the display tree."""
    key: str | int | None
    kind: Kind
    value: Any = None  # scalars only; composites keep their children instead
    children: list[DisplayNode] = field(default_factory=list)
    expanded: bool = True
    truncated: bool = False  # children beyond the depth ceiling were left out
    size: int = 0  # member count of the source composite

    @property
    def is_composite(self) -> bool:
        return self.kind.is_composite

    @property
    def label(self) -> str:
        """One-line text: '"name": "Ada"', '[0]: 3', '"tags": [2]', '{4}'."""
        if isinstance(self.key, int):
            prefix = f"[{self.key}]: "
        elif self.key is not None:
            prefix = f'"{self.key}": '
        else:
            prefix = ""

        if self.kind is Kind.ARRAY:
            return f"{prefix}[{self.size}]"
        if self.kind is Kind.OBJECT:
            return f"{prefix}{{{self.size}}}"
        if self.kind is Kind.STRING:
            return f'{prefix}"{self.value}"'
        return prefix + scalar_text(self.value)

    def depth_first(self) -> Iterator[DisplayNode]:
        """Traverse tree depth-first, yielding self then children."""
        yield self
        for child in self.children:
            yield from child.depth_first()

    def breadth_first(self) -> Iterator[DisplayNode]:
        """Traverse tree breadth-first."""
        queue: list[DisplayNode] = [self]
        while queue:
            node = queue.pop(0)
            yield node
            queue.extend(node.children)

    def add_child(self, child: DisplayNode) -> DisplayNode:
        """Add a child node and return it for chaining."""
        self.children.append(child)
        return child
