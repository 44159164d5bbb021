"""Tests for normalize module."""

import math

import pytest

from theme_mcp.utils.normalize import (
    FINGERPRINT_VERSION,
    canonical_dumps,
    finalize_response,
    result_fingerprint,
    sanitize_nan_inf,
)


class TestCanonicalDumps:
    """Tests for canonical_dumps function."""

    def test_sorted_keys(self):
        """Keys should be sorted at every level."""
        obj = {"z": 1, "a": 2, "m": {"z": 3, "a": 4}}
        assert canonical_dumps(obj) == '{"a":2,"m":{"a":4,"z":3},"z":1}'

    def test_minimal_separators(self):
        """Output should use minimal separators (no spaces)."""
        assert canonical_dumps({"a": [1, 2, 3]}) == '{"a":[1,2,3]}'

    def test_unicode_preserved(self):
        """Unicode should be preserved (not escaped)."""
        assert "반도체" in canonical_dumps({"name": "반도체"})

    def test_rejects_nan(self):
        """Should raise ValueError for NaN (allow_nan=False)."""
        with pytest.raises(ValueError, match="Out of range float values"):
            canonical_dumps({"value": float("nan")})


class TestSanitizeNanInf:
    """Tests for sanitize_nan_inf function."""

    def test_nan_and_inf_become_none(self):
        result = sanitize_nan_inf({"a": float("nan"), "b": [float("inf"), float("-inf"), 1.0]})
        assert result == {"a": None, "b": [None, None, 1.0]}

    def test_negative_zero(self):
        result = sanitize_nan_inf({"a": -0.0})
        assert math.copysign(1.0, result["a"]) == 1.0

    def test_tuples_become_lists(self):
        assert sanitize_nan_inf({"leaders": ("A", "B")}) == {"leaders": ["A", "B"]}

    def test_passthrough(self):
        obj = {"s": "x", "i": 1, "b": True, "n": None}
        assert sanitize_nan_inf(obj) == obj


class TestFingerprint:
    """Tests for result_fingerprint and finalize_response."""

    def test_runtime_keys_ignored(self):
        """meta and data_provenance never change the fingerprint."""
        a = {"meta": {"duration_ms": 1.0}, "data_provenance": {"as_of": "x"}, "value": 1}
        b = {"meta": {"duration_ms": 99.0}, "data_provenance": {"as_of": "y"}, "value": 1}
        assert result_fingerprint(a) == result_fingerprint(b)

    def test_content_changes_fingerprint(self):
        assert result_fingerprint({"value": 1}) != result_fingerprint({"value": 2})

    def test_length(self):
        assert len(result_fingerprint({"value": 1})) == 16

    def test_version_is_string(self):
        assert isinstance(FINGERPRINT_VERSION, str)

    def test_finalize_response(self):
        result = finalize_response({"meta": {}, "value": float("nan")})
        assert result["value"] is None
        assert result["fingerprint"] == result_fingerprint(result)

    def test_finalize_does_not_mutate_input(self):
        original = {"value": float("inf")}
        finalize_response(original)
        assert math.isinf(original["value"])
