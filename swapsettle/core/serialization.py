"""Canonical serialization and content-addressed hashing.

canonical_bytes(obj) -> Result[bytes, str]: deterministic JSON bytes.
content_hash(obj) -> Result[str, str]: SHA-256 hex of canonical bytes.

These bytes are what an oracle signs, so the encoding is part of the
signing contract: sorted keys, compact separators, Fraction as "n/d",
single-field newtypes (Slot, PublicKey, PubKeyHash) collapsed to their value.
"""

from __future__ import annotations

import dataclasses
import hashlib
import json
from enum import Enum
from fractions import Fraction
from typing import Any

from swapsettle.core.rational import format_rational
from swapsettle.core.result import Err, Ok


def _to_serializable(obj: object) -> Any:  # noqa: PLR0911
    """Recursively convert a domain object to a JSON-compatible Python value."""
    # bool is an int, so it passes through unchanged as well
    if obj is None or isinstance(obj, (int, str)):
        return obj
    if isinstance(obj, Fraction):
        return format_rational(obj)
    if isinstance(obj, float):
        msg = f"Cannot serialize float {obj!r}: rates and amounts must be Fraction or int"
        raise TypeError(msg)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (tuple, list)):
        return [_to_serializable(x) for x in obj]
    if isinstance(obj, frozenset):
        return sorted(_to_serializable(x) for x in obj)
    if isinstance(obj, dict):
        return {str(k): _to_serializable(v) for k, v in sorted(obj.items())}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        fields = dataclasses.fields(obj)
        if len(fields) == 1 and fields[0].name == "value":
            return _to_serializable(obj.value)  # type: ignore[attr-defined]
        result: dict[str, Any] = {"_type": type(obj).__name__}
        for name in sorted(f.name for f in fields):
            result[name] = _to_serializable(getattr(obj, name))
        return result
    msg = f"Cannot serialize {type(obj).__name__}"
    raise TypeError(msg)


def canonical_bytes(obj: object) -> Ok[bytes] | Err[str]:
    """Convert any domain type to canonical JSON bytes. Never raises."""
    try:
        serializable = _to_serializable(obj)
    except TypeError as e:
        return Err(f"Unsupported type in canonical serialization: {e}")
    return Ok(
        json.dumps(serializable, sort_keys=True, separators=(",", ":")).encode("utf-8")
    )


def content_hash(obj: object) -> Ok[str] | Err[str]:
    """SHA-256 hex digest of canonical_bytes(obj)."""
    match canonical_bytes(obj):
        case Err() as e:
            return e
        case Ok(b):
            return Ok(hashlib.sha256(b).hexdigest())
