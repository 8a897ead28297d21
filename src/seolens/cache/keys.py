"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Deterministic cache key derivation.
"""

from __future__ import annotations

import hashlib
import json
import re
from collections.abc import Iterable

_WHITESPACE = re.compile(r"\s+")


def normalize_part(part: object) -> str:
    """Lower-case one key part and collapse runs of whitespace."""
    text = "" if part is None else str(part)
    return _WHITESPACE.sub(" ", text).strip().lower()


def compute_key(parts: Iterable[object], *, normalize: bool = True) -> str:
    """
    Build an order-sensitive SHA-256 hex digest from ordered key parts.

    Parts are serialized as a JSON array so that part boundaries stay
    unambiguous (`["ab", "c"]` and `["a", "bc"]` hash differently).
    """
    if normalize:
        items = [normalize_part(p) for p in parts]
    else:
        items = ["" if p is None else str(p) for p in parts]
    payload = json.dumps(items, ensure_ascii=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
