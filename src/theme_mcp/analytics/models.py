"""Data model for theme snapshots and analytics results.

String-valued enums use the str mixin so they serialize cleanly to JSON and
stay comparable to the raw strings found in theme files.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from theme_mcp.utils.sanitize import sanitize_label


class Period(str, Enum):
    D3 = "3D"
    D7 = "7D"
    M1 = "1M"
    YTD = "YTD"
    Y1 = "1Y"
    Y3 = "3Y"

    @property
    def label(self) -> str:
        """Human label used in composed sentences."""
        return {
            Period.D3: "3-day",
            Period.D7: "7-day",
            Period.M1: "1-month",
            Period.YTD: "YTD",
            Period.Y1: "1-year",
            Period.Y3: "3-year",
        }[self]


class NodeKind(str, Enum):
    ASSET = "ASSET"
    THEME = "THEME"
    BUSINESS_FIELD = "BUSINESS_FIELD"
    MACRO = "MACRO"
    OTHER = "OTHER"

    @classmethod
    def from_raw(cls, raw: Any) -> "NodeKind":
        """Map a raw node type string to a kind, case-insensitively."""
        value = str(raw or "").strip().upper()
        if "FIELD" in value:
            return cls.BUSINESS_FIELD
        if value == "ASSET":
            return cls.ASSET
        if value == "THEME":
            return cls.THEME
        if value == "MACRO":
            return cls.MACRO
        return cls.OTHER


class FailureReason(str, Enum):
    MIN_ASSET_NOT_MET = "MIN_ASSET_NOT_MET"
    NO_RETURN_DATA = "NO_RETURN_DATA"


class VolatilityTier(str, Enum):
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"


class HotCold(str, Enum):
    HOT = "HOT"
    NEUTRAL = "NEUTRAL"
    COLD = "COLD"


@dataclass(frozen=True)
class AssetObservation:
    """One node of a theme graph with its (unstandardized) metric bag."""

    id: str
    name: str
    kind: NodeKind
    metrics: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_asset(self) -> bool:
        return self.kind is NodeKind.ASSET

    @classmethod
    def from_node(cls, node: Mapping[str, Any]) -> "AssetObservation | None":
        """
        Build an observation from a raw theme-JSON node.

        Returns None for nodes without an id. A non-mapping metrics value is
        treated as an empty bag.
        """
        node_id = str(node.get("id") or "").strip()
        if not node_id:
            return None
        metrics = node.get("metrics")
        return cls(
            id=node_id,
            name=sanitize_label(node.get("name")) or node_id,
            kind=NodeKind.from_raw(node.get("type")),
            metrics=dict(metrics) if isinstance(metrics, Mapping) else {},
        )


@dataclass(frozen=True)
class ThemeRef:
    """Theme identity without its composition."""

    theme_id: str
    theme_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.theme_name or self.theme_id


@dataclass(frozen=True)
class ThemeSnapshot:
    """A theme's composition at computation time. Node order is irrelevant."""

    theme_id: str
    theme_name: str
    nodes: tuple[AssetObservation, ...] = ()
    edge_count: int = 0

    @property
    def ref(self) -> ThemeRef:
        return ThemeRef(theme_id=self.theme_id, theme_name=self.theme_name)

    @property
    def assets(self) -> tuple[AssetObservation, ...]:
        return tuple(n for n in self.nodes if n.is_asset)

    def count_kind(self, kind: NodeKind) -> int:
        return sum(1 for n in self.nodes if n.kind is kind)

    @classmethod
    def from_json(
        cls,
        payload: Mapping[str, Any],
        theme_id: str | None = None,
    ) -> "ThemeSnapshot":
        """
        Build a snapshot from a theme JSON document.

        Expected shape: {"themeId", "themeName", "nodes": [...], "edges": [...]}.
        Missing or malformed lists are treated as empty.

        Args:
            payload: Parsed theme JSON
            theme_id: Fallback id when the payload carries none

        Returns:
            ThemeSnapshot
        """
        tid = str(payload.get("themeId") or payload.get("id") or theme_id or "").strip()
        name = sanitize_label(payload.get("themeName") or payload.get("name")) or tid
        raw_nodes = payload.get("nodes")
        raw_edges = payload.get("edges")
        return cls(
            theme_id=tid,
            theme_name=name,
            nodes=to_observations(raw_nodes if isinstance(raw_nodes, list) else []),
            edge_count=len(raw_edges) if isinstance(raw_edges, list) else 0,
        )


def to_observations(
    nodes: "ThemeSnapshot | Iterable[AssetObservation | Mapping[str, Any]] | None",
) -> tuple[AssetObservation, ...]:
    """Coerce a snapshot, observations or raw node dicts to observations."""
    if nodes is None:
        return ()
    if isinstance(nodes, ThemeSnapshot):
        return nodes.nodes
    out: list[AssetObservation] = []
    for n in nodes:
        if isinstance(n, AssetObservation):
            out.append(n)
        elif isinstance(n, Mapping):
            obs = AssetObservation.from_node(n)
            if obs is not None:
                out.append(obs)
    return tuple(out)


@dataclass(frozen=True)
class ThemeReturnSuccess:
    """Theme-level return statistics for one period."""

    asset_count: int
    valid_return_count: int
    core_median_pct: float
    momentum_top_pct: float
    breadth_pct: float
    tone: str
    sentence: str
    ok: Literal[True] = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": True,
            "asset_count": self.asset_count,
            "valid_return_count": self.valid_return_count,
            "core_median_pct": self.core_median_pct,
            "momentum_top_pct": self.momentum_top_pct,
            "breadth_pct": self.breadth_pct,
            "tone": self.tone,
            "sentence": self.sentence,
        }


@dataclass(frozen=True)
class ThemeReturnFailure:
    """Why theme-level return statistics could not be produced."""

    asset_count: int
    valid_return_count: int
    reason: FailureReason
    sentence: str
    ok: Literal[False] = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": False,
            "asset_count": self.asset_count,
            "valid_return_count": self.valid_return_count,
            "reason": self.reason.value,
            "sentence": self.sentence,
        }


ThemeReturnSummary = ThemeReturnSuccess | ThemeReturnFailure


@dataclass(frozen=True)
class BarometerResult:
    """Composite theme-health scorecard."""

    ok: bool
    health: float
    momentum: float
    diversification: float
    volatility: VolatilityTier
    hot_cold: HotCold
    tail_ratio: float
    breadth_pct: float
    avg_pct: float
    gap: float
    bias_warning: bool
    leaders: tuple[str, ...]
    summary: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "health": self.health,
            "momentum": self.momentum,
            "diversification": self.diversification,
            "volatility": self.volatility.value,
            "hot_cold": self.hot_cold.value,
            "tail_ratio": self.tail_ratio,
            "breadth_pct": self.breadth_pct,
            "avg_pct": self.avg_pct,
            "gap": self.gap,
            "bias_warning": self.bias_warning,
            "leaders": list(self.leaders),
            "summary": self.summary,
        }
