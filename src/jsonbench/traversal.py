"""
Bounded traversal for safe rendering.

Implements:
- Node counting with a node-count ceiling and a per-branch depth ceiling
- Display tree construction under the same ceilings

Only composites (arrays and objects) count as nodes. A composite at depth d
is counted iff d <= max_depth, so render() and count_nodes() agree on which
composites exist for any tree whose count is within the ceiling.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .config import LimitsConfig, get_config
from .dom import DisplayNode, Kind, kind_of

def members(value: Any) -> Iterator[tuple[str | int, Any]]:
    """(key, child) pairs of a composite, in source order. Scalars have none."""
    kind = kind_of(value)
    if kind is Kind.OBJECT:
        yield from value.items()
    elif kind is Kind.ARRAY:
        yield from enumerate(value)

def count_nodes(value: Any, limits: LimitsConfig | None = None) -> int:
    """
    Count composite nodes depth-first.

    Stops as soon as the count exceeds max_nodes and does not descend below
    max_depth, so very deep documents are undercounted rather than
    over-explored.
    """
    limits = limits or get_config().limits
    return _count(value, 0, 0, limits.max_nodes, limits.max_depth)

def _count(value: Any, count: int, depth: int, max_nodes: int, max_depth: int) -> int:
    if depth > max_depth:
        return count
    if not kind_of(value).is_composite:
        return count

    count += 1
    if count > max_nodes:
        return count

    for _key, child in members(value):
        count = _count(child, count, depth + 1, max_nodes, max_depth)
        if count > max_nodes:
            break
    return count

def is_renderable(value: Any, limits: LimitsConfig | None = None) -> bool:
    """True when the document is small enough for render()."""
    limits = limits or get_config().limits
    return count_nodes(value, limits) <= limits.max_nodes

class _Budget:
    """Composite nodes still allowed in the display tree."""

    def __init__(self, remaining: int):
        self.remaining = remaining

    def take(self) -> bool:
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True

def render(value: Any, limits: LimitsConfig | None = None) -> DisplayNode:
    """
    Build a display tree for value, every composite initially expanded.

    Callers check count_nodes() first. When a ceiling is hit anyway the
    affected composite gets truncated=True and keeps the children built so
    far.
    """
    limits = limits or get_config().limits
    budget = _Budget(limits.max_nodes)
    return _build(value, None, 0, limits.max_depth, budget)

def _build(value: Any, key: str | int | None, depth: int, max_depth: int, budget: _Budget) -> DisplayNode:
    kind = kind_of(value)
    if not kind.is_composite:
        return DisplayNode(key=key, kind=kind, value=value)

    budget.take()
    node = DisplayNode(key=key, kind=kind, size=len(value))
    if depth >= max_depth:
        node.truncated = len(value) > 0
        return node

    for child_key, child in members(value):
        if kind_of(child).is_composite and budget.remaining <= 0:
            node.truncated = True
            break
        node.add_child(_build(child, child_key, depth + 1, max_depth, budget))
    return node


def expand_all(root: DisplayNode) -> None:
    for node in root.depth_first():
        if node.is_composite:
            node.expanded = True

def collapse_all(root: DisplayNode) -> None:
    for node in root.depth_first():
        if node.is_composite:
            node.expanded = False

def format_display_tree(root: DisplayNode, indent: str = "  ") -> list[str]:
    """
    Text lines for a display tree.

    Composites are prefixed with [-] when expanded and [+] when collapsed;
    children of collapsed nodes are hidden. A truncated composite ends with
    a '...' line.
    """
    lines: list[str] = []
    _format(root, 0, indent, lines)
    return lines

def _format(node: DisplayNode, level: int, indent: str, lines: list[str]) -> None:
    pad = indent * level
    if not node.is_composite:
        lines.append(pad + node.label)
        return

    marker = "[-]" if node.expanded else "[+]"
    lines.append(f"{pad}{marker} {node.label}")
    if not node.expanded:
        return
    for child in node.children:
        _format(child, level + 1, indent, lines)
    if node.truncated:
        lines.append(indent * (level + 1) + "...")
