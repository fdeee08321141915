"""
Canonical serialization for deterministic comparison and hashing.

State and Command values are converted to plain JSON-compatible structures
so that equal snapshots always produce identical bytes.
"""

import hashlib
import json
from dataclasses import fields, is_dataclass
from types import MappingProxyType
from typing import Any

from .commands import Command
from .state import State


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested value to canonical form.

    Rules:
    - dict keys sorted alphabetically
    - State becomes its field dict, Command becomes {"tag", "payload"}
    - other dataclasses become dicts
    - tuples converted to lists
    - recursive normalization
    """
    if isinstance(obj, State):
        return canonicalize(obj.to_dict())
    if isinstance(obj, Command):
        return {"payload": canonicalize(obj.payload), "tag": obj.tag}
    if is_dataclass(obj) and not isinstance(obj, type):
        return canonicalize({f.name: getattr(obj, f.name) for f in fields(obj)})
    if isinstance(obj, (dict, MappingProxyType)):
        return {k: canonicalize(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for hashing.

    Guarantees:
    - sort_keys=True (secondary safety)
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 stable
    - canonical preprocessing via canonicalize()

    Returns:
        UTF-8 encoded JSON bytes
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    """
    Deterministic JSON string (for display or storage).

    Same guarantees as canonical_json_bytes but returns string.
    """
    return canonical_json_bytes(obj).decode("utf-8")


def state_hash(state: Any) -> str:
    """
    Compute SHA-256 hash of a state snapshot.

    Returns:
        Hex string (64 characters)
    """
    return hashlib.sha256(canonical_json_bytes(state)).hexdigest()
