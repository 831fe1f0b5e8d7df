"""
Structural schema validation.

A schema is itself a decoded document using three keywords:

    type        one of object, array, string, number, boolean, null
    required    list of member names an object must have
    properties  member name -> nested schema, checked only for members
                present in the value (absence is enforced by `required`)

Malformed keyword values are ignored rather than rejected. Recursion stops
at max_depth and everything below that depth is accepted: deep documents
are passed, not over-rejected.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .config import LimitsConfig, get_config
from .dom import Kind, kind_of


@dataclass(frozen=True)
class SchemaViolation:
    """One failed check, located by a $-rooted path."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def validate(value: Any, schema: Any, depth: int = 0, limits: LimitsConfig | None = None) -> bool:
    """True when value satisfies schema. Never raises for well-formed documents."""
    return next(iter_violations(value, schema, depth=depth, limits=limits), None) is None


def iter_violations(
    value: Any,
    schema: Any,
    path: str = "$",
    depth: int = 0,
    limits: LimitsConfig | None = None,
) -> Iterator[SchemaViolation]:
    """Yield every violation, type check first, then required, then properties."""
    limits = limits or get_config().limits
    yield from _check(value, schema, path, depth, limits.max_depth)


def _check(value: Any, schema: Any, path: str, depth: int, max_depth: int) -> Iterator[SchemaViolation]:
    if depth > max_depth:
        return
    if kind_of(schema) is not Kind.OBJECT:
        return

    kind = kind_of(value)

    expected = schema.get("type")
    if isinstance(expected, str) and expected and kind.value != expected:
        yield SchemaViolation(path, f"expected {expected}, got {kind.value}")

    if kind is not Kind.OBJECT:
        return

    required = schema.get("required")
    if isinstance(required, list):
        for key in required:
            if isinstance(key, str) and key not in value:
                yield SchemaViolation(path, f"missing required property {key!r}")

    properties = schema.get("properties")
    if isinstance(properties, dict):
        for key, subschema in properties.items():
            if key in value:
                yield from _check(value[key], subschema, f"{path}.{key}", depth + 1, max_depth)
