"""
GXAccount SDK - Request Payloads

Canonical JSON for signed faucet requests. Only top-level keys are
sorted; nested values are passed through as given.
"""

import json
from typing import Any, Dict, Mapping


def sort_json(obj: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new dict with top-level keys in lexicographic order."""
    return {key: obj[key] for key in sorted(obj)}


def canonical_json(obj: Mapping[str, Any]) -> str:
    """Compact, key-sorted JSON text; the exact string that gets signed."""
    return json.dumps(sort_json(obj), separators=(",", ":"), ensure_ascii=False)


def attach_signature(body: Mapping[str, Any], signature: str) -> Dict[str, Any]:
    """Sorted copy of body with the signature appended last."""
    signed = sort_json(body)
    signed["signature"] = signature
    return signed
