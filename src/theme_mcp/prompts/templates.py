"""Prompt templates for theme analysis."""

from typing import Any

# Prompt definitions
PROMPTS = {
    "theme_briefing": {
        "description": "Briefing on one theme's returns, barometer and movers",
        "arguments": [
            {"name": "theme_id", "required": True},
            {"name": "period", "required": False},
        ],
    },
    "theme_comparison": {
        "description": "Side-by-side comparison of two themes",
        "arguments": [
            {"name": "theme_id", "required": True},
            {"name": "compare_theme_id", "required": True},
            {"name": "period", "required": False},
        ],
    },
}


def list_prompts() -> list[dict[str, Any]]:
    """List available prompts."""
    return [
        {
            "name": name,
            "description": info["description"],
            "arguments": info["arguments"],
        }
        for name, info in PROMPTS.items()
    ]


def get_prompt(name: str, arguments: dict[str, Any]) -> dict[str, Any] | None:
    """Get a prompt by name with arguments filled in."""
    period = arguments.get("period") or "7D"

    if name == "theme_briefing":
        theme_id = arguments.get("theme_id", "")
        return {
            "messages": [
                {
                    "role": "user",
                    "content": f"""Brief me on theme {theme_id} over the {period} period.

Use these tools:
1. get_theme_return_summary("{theme_id}", period="{period}")
2. get_theme_barometer("{theme_id}", period="{period}")
3. get_top_movers("{theme_id}", period="{period}")

Then provide:
1. **Summary**: Quote the returned sentence as-is
2. **Barometer**: Health, Momentum, Diversification (integers), volatility tier, HOT/NEUTRAL/COLD
3. **Leaders & Laggards**: Top and bottom movers with returns
4. **Caveats**: Mention any failure reason (MIN_ASSET_NOT_MET, NO_RETURN_DATA) in plain words

Report numbers exactly as returned. Do not invent data for missing fields.""",
                }
            ]
        }

    if name == "theme_comparison":
        theme_id = arguments.get("theme_id", "")
        compare_theme_id = arguments.get("compare_theme_id", "")
        return {
            "messages": [
                {
                    "role": "user",
                    "content": f"""Compare theme {theme_id} against {compare_theme_id} over the {period} period.

Use these tools:
1. compare_themes("{theme_id}", compare_theme_id="{compare_theme_id}", period="{period}")
2. get_theme_barometer("{theme_id}", period="{period}")
3. get_theme_barometer("{compare_theme_id}", period="{period}")

Then provide:
1. **Comparison sentence**: Quote it as returned
2. **Deltas**: ΔCore, ΔMom, ΔBreadth (%p) and ΔASSET
3. **Barometers**: Both themes' health, momentum and volatility tier
4. **Takeaway**: Which theme shows broader participation and why

If deltas are null, explain which side lacks data instead of estimating.""",
                }
            ]
        }

    return None
