"""
Restricted path queries.

Grammar (dot separated, optional leading "$" or "$."):
    key        member of an object
    key[N]     member, then element N
    [N]        element N of the current value
    *          all values of the current object / elements of the array

N is a decimal integer in [0, max_index]. "$" alone addresses the whole
document. Only one wildcard hop is meaningful: segments after "*" apply to
the resulting list itself, not to each of its elements.

The result may alias nodes inside the source document; callers treat it as
read-only.
"""

from __future__ import annotations

import re
from typing import Any

from .config import LimitsConfig, get_config
from .dom import Kind, kind_of
from .errors import PathError

ROOT = "$"
WILDCARD = "*"

# Any occurrence anywhere in the text rejects the whole path.
RESERVED_TOKENS = ("__proto__", "constructor", "prototype")

ROOT_PREFIX = re.compile(r"^\$\.?")
INDEXED_SEGMENT = re.compile(r"^(?P<key>[^\[\]]*)\[(?P<index>[^\[\]]*)\]$")
DIGITS = re.compile(r"[0-9]+")

_MISSING = object()


def evaluate_path(value: Any, text: str, limits: LimitsConfig | None = None) -> Any:
    """
    Evaluate a path expression against a decoded document.

    Raises PathError for a reserved token ("invalid path"), a segment that
    is not one of the grammar forms ("malformed segment"), an index that is
    not a number in range ("invalid index"), a missing member ("path not
    found") and more segments than max_depth allows ("path too deep").
    """
    limits = limits or get_config().limits

    if any(token in text for token in RESERVED_TOKENS):
        raise PathError("invalid path")

    if text == ROOT:
        return value

    current = value
    for position, segment in enumerate(ROOT_PREFIX.sub("", text, count=1).split(".")):
        if position > limits.max_depth:
            raise PathError("path too deep", segment, position)

        current = _step(current, segment, position, limits)
        if current is _MISSING:
            raise PathError("path not found", segment, position)

    return current


def _step(current: Any, segment: str, position: int, limits: LimitsConfig) -> Any:
    if "[" in segment or "]" in segment:
        match = INDEXED_SEGMENT.match(segment)
        if not match:
            raise PathError("malformed segment", segment, position)

        index = _parse_index(match["index"], segment, position, limits.max_index)
        key = match["key"]
        container = _lookup(current, key) if key else current
        if container is _MISSING:
            return _MISSING
        return _lookup(container, index)

    if segment == WILDCARD:
        kind = kind_of(current)
        if kind is Kind.OBJECT:
            return list(current.values())
        if kind is Kind.ARRAY:
            return list(current)
        return _MISSING

    return _lookup(current, segment)


def _parse_index(text: str, segment: str, position: int, max_index: int) -> int:
    if not DIGITS.fullmatch(text):
        raise PathError("invalid index", segment, position)
    index = int(text)
    if index > max_index:
        raise PathError("invalid index", segment, position)
    return index


def _lookup(container: Any, key: str | int) -> Any:
    """
    Member access through the closed set of container kinds.

    Objects are keyed by text, so an integer index looks up its decimal
    form. Arrays accept integers or canonical decimal strings.
    """
    kind = kind_of(container)
    if kind is Kind.OBJECT:
        return container.get(str(key), _MISSING)

    if kind is Kind.ARRAY:
        if isinstance(key, str):
            if not DIGITS.fullmatch(key) or str(int(key)) != key:
                return _MISSING
            key = int(key)
        return container[key] if key < len(container) else _MISSING

    return _MISSING
