"""Tests for the theme description sentence."""

from conftest import assets_with_returns
from theme_mcp.analytics.models import Period, ThemeRef, ThemeSnapshot
from theme_mcp.analytics.sentence import (
    SELF_COMPARE_CLAUSE,
    ClauseBuilder,
    compose,
    is_self_compare,
)
from theme_mcp.analytics.summary import summarize

BASE = '"AI Semiconductors" theme is composed of ASSET 6 · FIELD 2 nodes.'
KPI = "7-day basis Core +5.50% · Mom +15.00% · Breadth 67%."


class TestCompose:
    """Tests for compose()."""

    def test_base_only(self, sample_snapshot) -> None:
        """Without a compare theme: structure and KPI clauses only."""
        summary = summarize(sample_snapshot, Period.D7)
        assert compose(sample_snapshot, Period.D7, summary) == f"{BASE} {KPI}"

    def test_missing_kpis(self, sample_snapshot) -> None:
        """No summary reads as insufficient data."""
        sentence = compose(sample_snapshot, Period.D7)
        assert sentence == f"{BASE} 7-day KPIs were not computed due to insufficient data."

    def test_failed_summary_counts_as_missing(self) -> None:
        """A failure summary is treated like no summary."""
        snapshot = ThemeSnapshot.from_json({"themeId": "T_9", "themeName": "Tiny", "nodes": assets_with_returns([5])})
        summary = summarize(snapshot, Period.M1)
        sentence = compose(snapshot, Period.M1, summary)
        assert sentence == (
            '"Tiny" theme is composed of ASSET 1 nodes. '
            "1-month KPIs were not computed due to insufficient data."
        )

    def test_field_clause_omitted_without_fields(self, compare_theme_payload) -> None:
        """Zero business fields drops the FIELD clause."""
        snapshot = ThemeSnapshot.from_json(compare_theme_payload)
        assert compose(snapshot, Period.D7).startswith('"Robotics" theme is composed of ASSET 5 nodes.')

    def test_delta_clause(self, sample_snapshot, compare_theme_payload) -> None:
        """Deltas are current minus compare, signed, in %p."""
        compare = ThemeSnapshot.from_json(compare_theme_payload)
        sentence = compose(
            sample_snapshot,
            Period.D7,
            summarize(sample_snapshot, Period.D7),
            compare=compare.ref,
            compare_summary=summarize(compare, Period.D7),
        )
        assert sentence == (
            f"{BASE} {KPI} Versus the compare theme (Robotics): "
            "ΔCore +1.50%p · ΔMom +8.00%p · ΔBreadth -13.33%p · ΔASSET +1."
        )

    def test_self_compare_by_id(self, sample_snapshot) -> None:
        """Same id suppresses the deltas."""
        summary = summarize(sample_snapshot, Period.D7)
        sentence = compose(
            sample_snapshot,
            Period.D7,
            summary,
            compare=ThemeRef(" T_001 ", "Whatever"),
            compare_summary=summary,
        )
        assert sentence == f"{BASE} {KPI} {SELF_COMPARE_CLAUSE}"

    def test_self_compare_by_name(self, sample_snapshot) -> None:
        """A compare name containing "self" is a self-comparison."""
        sentence = compose(
            sample_snapshot,
            Period.D7,
            summarize(sample_snapshot, Period.D7),
            compare=ThemeRef("T_002", "Self (current)"),
        )
        assert sentence.endswith(SELF_COMPARE_CLAUSE)

    def test_compare_lacks_kpis(self, sample_snapshot) -> None:
        """Missing compare summary: the notice uses the id when there is no name."""
        sentence = compose(
            sample_snapshot,
            Period.D7,
            summarize(sample_snapshot, Period.D7),
            compare=ThemeRef("T_404"),
        )
        assert sentence.endswith(
            "The compare theme (T_404) lacks KPI data, so the Δ comparison cannot be shown."
        )

    def test_blank_compare_id_ignored(self, sample_snapshot) -> None:
        """A blank compare id behaves like no compare theme."""
        summary = summarize(sample_snapshot, Period.D7)
        sentence = compose(sample_snapshot, Period.D7, summary, compare=ThemeRef("  "))
        assert sentence == f"{BASE} {KPI}"


class TestIsSelfCompare:
    """Tests for is_self_compare()."""

    def test_different_ids(self) -> None:
        assert is_self_compare("T_001", ThemeRef("T_002", "Robotics")) is False

    def test_case_insensitive_name(self) -> None:
        assert is_self_compare("T_001", ThemeRef("T_002", "SELF")) is True

    def test_missing_current_id(self) -> None:
        assert is_self_compare(None, ThemeRef("T_002")) is False


class TestClauseBuilder:
    """Tests for ClauseBuilder."""

    def test_drops_empty_clauses(self) -> None:
        builder = ClauseBuilder().add("One.").add(None).add("   ").add("Two.")
        assert builder.clauses == ("One.", "Two.")
        assert builder.build() == "One. Two."

    def test_extend(self) -> None:
        assert ClauseBuilder().extend(["a", None, "b"]).build() == "a b"
