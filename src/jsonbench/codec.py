"""
Decoding and encoding, delegated to the standard json module.

The core never tokenizes the wire format itself. NaN and Infinity are not
part of the wire format and are rejected on decode.
"""

from __future__ import annotations

import json
from typing import Any

from .errors import ConversionError, DecodeError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} is not valid JSON")


def decode(text: str) -> Any:
    """Decode text into a tree value. The decoder's message is kept verbatim."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:  # JSONDecodeError is a ValueError
        raise DecodeError(str(e)) from e
    except RecursionError as e:
        raise DecodeError("Document nested too deeply to decode") from e


def encode(value: Any, indent: int | None = 2) -> str:
    """Pretty encoding with indent spaces, or minified when indent is None."""
    separators = (",", ": ") if indent is not None else (",", ":")
    try:
        return json.dumps(value, indent=indent, separators=separators, ensure_ascii=False, allow_nan=False)
    except RecursionError as e:
        raise ConversionError("Document nested too deeply to encode") from e
    except (TypeError, ValueError) as e:
        raise ConversionError(str(e)) from e


def char_count(value: Any) -> int:
    """Length of the minified encoding."""
    return len(encode(value, indent=None))


def payload_size(text: str) -> int:
    """Size of text in UTF-8 bytes."""
    return len(text.encode("utf-8", errors="surrogatepass"))
