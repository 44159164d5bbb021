"""JSON-safety and fingerprint utilities for tool responses.

Engine results are deterministic, so two responses for the same theme
snapshot and period must fingerprint identically once runtime fields are
removed. The normalization contract:
1. NaN/inf become null, -0.0 becomes 0.0
2. Key ordering: sorted at every level
3. Runtime fields (meta.duration_ms, provenance timestamps) are excluded
   from the fingerprint
"""

from __future__ import annotations

import copy
import hashlib
import json
import math
from typing import Any

# Fingerprint format version - bump when fingerprinted fields change
FINGERPRINT_VERSION = "1"

# Top-level keys that vary run to run and never enter the fingerprint
RUNTIME_KEYS: tuple[str, ...] = ("meta", "data_provenance", "fingerprint")


def canonical_dumps(obj: Any) -> str:
    """Produce canonical JSON string with sorted keys and minimal separators.

    Uses allow_nan=False to fail fast if NaN/inf values slip through
    sanitization.
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def _is_nan_or_inf(x: Any) -> bool:
    return isinstance(x, float) and (math.isnan(x) or math.isinf(x))


def _is_negative_zero(x: Any) -> bool:
    return isinstance(x, float) and x == 0.0 and math.copysign(1.0, x) < 0


def sanitize_nan_inf(obj: Any) -> Any:
    """Recursively replace NaN, inf, -inf with None and -0.0 with 0.0.

    Tuples are emitted as lists so the result is plain JSON data.
    """
    if isinstance(obj, dict):
        return {k: sanitize_nan_inf(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [sanitize_nan_inf(item) for item in obj]
    if _is_nan_or_inf(obj):
        return None
    if _is_negative_zero(obj):
        return 0.0
    return obj


def result_fingerprint(response: dict[str, Any]) -> str:
    """
    SHA-256 (first 16 hex chars) of a response's deterministic content.

    Args:
        response: Tool response dict

    Returns:
        Fingerprint string
    """
    data = copy.deepcopy(response)
    for key in RUNTIME_KEYS:
        data.pop(key, None)
    data = sanitize_nan_inf(data)
    data["fingerprint_version"] = FINGERPRINT_VERSION
    return hashlib.sha256(canonical_dumps(data).encode("utf-8")).hexdigest()[:16]


def finalize_response(response: dict[str, Any]) -> dict[str, Any]:
    """Sanitize a tool response and stamp its fingerprint."""
    clean = sanitize_nan_inf(response)
    clean["fingerprint"] = result_fingerprint(clean)
    return clean
