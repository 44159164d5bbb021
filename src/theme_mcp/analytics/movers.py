"""Top/bottom movers and the per-asset returns table."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from theme_mcp.analytics.models import AssetObservation, Period, ThemeSnapshot, to_observations
from theme_mcp.analytics.returns import extract_return

RETURNS_COLUMNS = ["id", "name"] + [p.value for p in Period]


@dataclass(frozen=True)
class AssetReturn:
    id: str
    name: str
    return_pct: float

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "return_pct": self.return_pct}


@dataclass(frozen=True)
class MoversResult:
    count: int
    top: tuple[AssetReturn, ...]
    bottom: tuple[AssetReturn, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "top": [m.to_dict() for m in self.top],
            "bottom": [m.to_dict() for m in self.bottom],
        }


def asset_return(node: AssetObservation | None, period: Period) -> float | None:
    """Return of a selected node for the period; None unless it is an ASSET."""
    if node is None or not node.is_asset:
        return None
    return extract_return(node.metrics, period)


def top_movers(
    nodes: ThemeSnapshot | Iterable[AssetObservation | Mapping[str, Any]] | None,
    period: Period,
    limit: int = 3,
) -> MoversResult:
    """
    Best and worst performing assets for a period.

    Args:
        nodes: Theme snapshot, observations or raw node dicts
        period: Period to rank by
        limit: Entries per side (default: 3)

    Returns:
        MoversResult with top (descending) and bottom (ascending) lists;
        assets without a return for the period are left out
    """
    ranked: list[AssetReturn] = []
    for node in to_observations(nodes):
        ret = asset_return(node, period)
        if ret is not None:
            ranked.append(AssetReturn(id=node.id, name=node.name, return_pct=ret))

    limit = max(0, limit)
    top = sorted(ranked, key=lambda m: m.return_pct, reverse=True)[:limit]
    bottom = sorted(ranked, key=lambda m: m.return_pct)[:limit]
    return MoversResult(count=len(ranked), top=tuple(top), bottom=tuple(bottom))


def returns_frame(
    nodes: ThemeSnapshot | Iterable[AssetObservation | Mapping[str, Any]] | None,
) -> pd.DataFrame:
    """
    One row per ASSET node with its normalized return for every period.

    Output columns (always, in this order): id, name, 3D, 7D, 1M, YTD, 1Y, 3Y.
    Absent returns are NaN.
    """
    rows: list[dict[str, Any]] = []
    for node in to_observations(nodes):
        if not node.is_asset:
            continue
        row: dict[str, Any] = {"id": node.id, "name": node.name}
        for p in Period:
            ret = extract_return(node.metrics, p)
            row[p.value] = np.nan if ret is None else ret
        rows.append(row)

    df = pd.DataFrame(rows, columns=RETURNS_COLUMNS)
    for p in Period:
        df[p.value] = pd.to_numeric(df[p.value], errors="coerce").astype("float64")
    return df


def returns_to_csv(df: pd.DataFrame) -> str:
    """CSV text for the returns table (cache/resource form)."""
    return df.to_csv(index=False)
