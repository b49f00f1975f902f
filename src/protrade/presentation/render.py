"""Formatting of calculation results for cards, summary and chart."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

import pandas as pd

from protrade.types import CalculationResult, TargetLevel

ChartKind = Literal["entry", "tp", "stop_loss"]


@dataclass(slots=True, frozen=True)
class ChartPoint:
    """One bar of the price ladder chart."""

    name: str
    price: float
    kind: ChartKind


def format_roe(roe: float) -> str:
    """Render a fractional ROE as a signed whole percentage."""
    percent = roe * 100
    sign = "+" if roe > 0 else ""
    return f"{sign}{percent:.0f}%"


def format_target_card(target: TargetLevel) -> dict[str, str]:
    """Display strings for one take-profit card."""
    return {
        "label": target.label,
        "quantity": f"Sell {target.qty_fraction * 100:g}% Qty",
        "price": f"{target.price:.4f}",
        "profit": f"{target.pnl:.2f}",
        "roe": format_roe(target.roe),
    }


def format_ratio(ratio: float) -> str:
    return f"1:{ratio:.2f}"


def format_summary(result: CalculationResult) -> dict[str, str]:
    """Display strings for the totals block."""
    summary = {"total_profit": f"{result.total_profit:.2f}"}
    if result.stop_loss is not None:
        summary["stop_loss"] = f"{result.stop_loss:.4f}"
    if result.risk_amount is not None:
        summary["risk_amount"] = f"{result.risk_amount:.2f}"
    if result.risk_reward_ratio is not None:
        summary["risk_reward"] = format_ratio(result.risk_reward_ratio)
    return summary


def build_chart_points(result: CalculationResult) -> list[ChartPoint]:
    """Chart bars for a result.

    ROE multiple results keep the Entry, TP1, TP2, TP3 order. Results with a
    stop loss include it and are sorted by price.
    """
    points = [ChartPoint(name="Entry", price=result.entry_price, kind="entry")]
    points.extend(
        ChartPoint(name=f"TP{index}", price=target.price, kind="tp")
        for index, target in enumerate(result.targets, start=1)
    )
    if result.stop_loss is None:
        return points
    points.append(ChartPoint(name="SL", price=result.stop_loss, kind="stop_loss"))
    return sorted(points, key=lambda point: point.price)


def chart_frame(points: list[ChartPoint]) -> pd.DataFrame:
    """Tabular view of chart points with the move from entry in percent."""
    frame = pd.DataFrame([asdict(point) for point in points], columns=["name", "price", "kind"])
    entry = frame.loc[frame["kind"] == "entry", "price"]
    if not entry.empty:
        frame["move_pct"] = (frame["price"] / float(entry.iloc[0]) - 1.0) * 100
    return frame


def result_to_dict(result: CalculationResult) -> dict[str, Any]:
    """JSON-ready representation of a result."""
    payload = asdict(result)
    payload["targets"] = [asdict(target) for target in result.targets]
    return payload
