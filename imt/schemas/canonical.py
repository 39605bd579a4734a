"""
Canonical JSON for leaf hashing and proof records.

Encoding Rules:
1. Object keys sorted, separators "," and ":" with no whitespace
2. Object members whose value is None are left out
3. bytes become 0x-prefixed lowercase hex strings
4. NaN and +/-Infinity are rejected
5. Anything that is not a JSON scalar, dict, list/tuple or bytes is rejected

Two equal inputs always produce byte-identical output, so the result can
be hashed.
"""

import json
import math
from typing import Any

from .errors import CanonicalizationException

CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")

_SCALARS = (bool, int, str)


def _child_path(path: str, key: Any) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else str(key)


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Reduce a value to JSON-native types following the encoding rules.

    Raises:
        CanonicalizationException: Non-finite float or unsupported type,
            with the offending location in details["path"]
    """
    if value is None or isinstance(value, _SCALARS):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationException(
                f"Non-finite float value encountered: {value}",
                details={"path": path, "value": str(value)},
            )
        return value

    if isinstance(value, bytes):
        return "0x" + value.hex()

    if isinstance(value, dict):
        return {
            str(key): canonicalize_value(item, _child_path(path, key))
            for key, item in value.items()
            if item is not None
        }

    if isinstance(value, (list, tuple)):
        return [canonicalize_value(item, _child_path(path, i)) for i, item in enumerate(value)]

    raise CanonicalizationException(
        f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize to canonical JSON.

    Example:
        >>> dumps_canonical({"b": 2, "a": b"\\x01"})
        '{"a":"0x01","b":2}'
    """
    return json.dumps(
        canonicalize_value(obj),
        sort_keys=True,
        separators=CANONICAL_JSON_SEPARATORS,
        ensure_ascii=False,
    )


def loads_canonical(json_str: str) -> Any:
    """Parse canonical JSON. Hex strings stay strings."""
    return json.loads(json_str)
