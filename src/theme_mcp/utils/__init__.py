"""Utility modules."""

from theme_mcp.utils.formatting import (
    PLACEHOLDER,
    fmt_int,
    fmt_int_delta,
    fmt_pct,
    fmt_pp,
    is_finite_number,
)
from theme_mcp.utils.normalize import canonical_dumps, finalize_response, sanitize_nan_inf
from theme_mcp.utils.provenance import build_error_response, build_meta, build_provenance
from theme_mcp.utils.sanitize import normalize_keyword, sanitize_label
from theme_mcp.utils.stats import clamp, mean, median, percentile

__all__ = [
    "PLACEHOLDER",
    "fmt_int",
    "fmt_int_delta",
    "fmt_pct",
    "fmt_pp",
    "is_finite_number",
    "canonical_dumps",
    "finalize_response",
    "sanitize_nan_inf",
    "build_error_response",
    "build_meta",
    "build_provenance",
    "normalize_keyword",
    "sanitize_label",
    "clamp",
    "mean",
    "median",
    "percentile",
]
