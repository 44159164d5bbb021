"""Theme description sentence with an optional compare-theme delta clause."""

from theme_mcp.analytics.models import (
    NodeKind,
    Period,
    ThemeRef,
    ThemeReturnSuccess,
    ThemeReturnSummary,
    ThemeSnapshot,
)
from theme_mcp.utils.formatting import PLACEHOLDER, fmt_int, fmt_int_delta, fmt_pct, fmt_pp

SELF_COMPARE_CLAUSE = "Self compare: the same theme is selected, so Δ is not shown."


class ClauseBuilder:
    """Ordered list of optional clauses joined by single spaces."""

    def __init__(self) -> None:
        self._clauses: list[str] = []

    def add(self, clause: str | None) -> "ClauseBuilder":
        """Append a clause. None and blank clauses are dropped."""
        if clause and clause.strip():
            self._clauses.append(clause.strip())
        return self

    def extend(self, clauses: "list[str | None]") -> "ClauseBuilder":
        for clause in clauses:
            self.add(clause)
        return self

    @property
    def clauses(self) -> tuple[str, ...]:
        return tuple(self._clauses)

    def build(self) -> str:
        return " ".join(self._clauses)


def is_self_compare(current_id: str | None, compare: ThemeRef) -> bool:
    """Same theme by trimmed id, or a compare name that signals self-comparison."""
    a = (current_id or "").strip()
    b = (compare.theme_id or "").strip()
    if a and b and a == b:
        return True
    return "self" in (compare.theme_name or "").lower()


def _ok(summary: ThemeReturnSummary | None) -> ThemeReturnSuccess | None:
    return summary if isinstance(summary, ThemeReturnSuccess) else None


def base_clauses(
    current: ThemeSnapshot,
    period: Period,
    current_summary: ThemeReturnSummary | None = None,
) -> ClauseBuilder:
    """Structure clause plus the current-period KPI clause (or its absence)."""
    assets = current.count_kind(NodeKind.ASSET)
    fields = current.count_kind(NodeKind.BUSINESS_FIELD)

    builder = ClauseBuilder()
    builder.add(f'"{current.theme_name}" theme is composed of')
    builder.add(f"ASSET {assets}")
    if fields > 0:
        builder.add(f"· FIELD {fields}")
    builder.add("nodes.")

    cur = _ok(current_summary)
    if cur is not None:
        breadth = fmt_int(cur.breadth_pct)
        if breadth != PLACEHOLDER:
            breadth += "%"
        builder.add(
            f"{period.label} basis Core {fmt_pct(cur.core_median_pct)} · "
            f"Mom {fmt_pct(cur.momentum_top_pct)} · Breadth {breadth}."
        )
    else:
        builder.add(f"{period.label} KPIs were not computed due to insufficient data.")
    return builder


def delta_clause(
    compare: ThemeRef,
    current_summary: ThemeReturnSuccess,
    compare_summary: ThemeReturnSuccess,
) -> str:
    """Current minus compare for core, momentum, breadth and asset count."""
    d_core = current_summary.core_median_pct - compare_summary.core_median_pct
    d_mom = current_summary.momentum_top_pct - compare_summary.momentum_top_pct
    d_breadth = current_summary.breadth_pct - compare_summary.breadth_pct
    d_asset = current_summary.asset_count - compare_summary.asset_count
    return (
        f"Versus the compare theme ({compare.display_name}): "
        f"ΔCore {fmt_pp(d_core)} · ΔMom {fmt_pp(d_mom)} · "
        f"ΔBreadth {fmt_pp(d_breadth)} · ΔASSET {fmt_int_delta(d_asset)}."
    )


def compose(
    current: ThemeSnapshot,
    period: Period,
    current_summary: ThemeReturnSummary | None = None,
    compare: ThemeRef | None = None,
    compare_summary: ThemeReturnSummary | None = None,
) -> str:
    """
    Compose the theme description sentence.

    Clause order: structure, current KPIs, then exactly one of self-compare
    notice, unavailable-delta notice or the delta listing. Without a compare
    theme only the first two are emitted.

    Args:
        current: Current theme snapshot (node counts come from here)
        period: Selected period
        current_summary: Current theme's return summary
        compare: Compare theme identity
        compare_summary: Compare theme's return summary

    Returns:
        Sentence string
    """
    builder = base_clauses(current, period, current_summary)

    if compare is None or not (compare.theme_id or "").strip():
        return builder.build()

    if is_self_compare(current.theme_id, compare):
        return builder.add(SELF_COMPARE_CLAUSE).build()

    cur = _ok(current_summary)
    cmp = _ok(compare_summary)
    if cur is None or cmp is None:
        return builder.add(
            f"The compare theme ({compare.display_name}) lacks KPI data, "
            "so the Δ comparison cannot be shown."
        ).build()

    return builder.add(delta_clause(compare, cur, cmp)).build()
