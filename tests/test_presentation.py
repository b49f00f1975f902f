from __future__ import annotations

import json

import pytest

from protrade.engine import compute
from protrade.presentation import (
    build_chart_points,
    chart_frame,
    format_roe,
    format_summary,
    format_target_card,
    result_to_dict,
)
from protrade.types import CalculationResult, TradeInput


def _result(policy: str, side: str = "LONG") -> CalculationResult:
    stop_loss = 95.0 if side == "LONG" else 105.0
    result = compute(
        TradeInput(entry_price=100.0, margin=1000.0, leverage=10, side=side, stop_loss=stop_loss),  # type: ignore[arg-type]
        policy,  # type: ignore[arg-type]
    )
    assert isinstance(result, CalculationResult)
    return result


def test_format_roe() -> None:
    assert format_roe(1.0) == "+100%"
    assert format_roe(3.5) == "+350%"
    assert format_roe(0.0) == "0%"


def test_format_target_card() -> None:
    card = format_target_card(_result("roe_multiple").tp2)
    assert card == {
        "label": "TP2 1:1.5",
        "quantity": "Sell 30% Qty",
        "price": "115.0000",
        "profit": "450.00",
        "roe": "+150%",
    }


def test_format_summary_by_policy() -> None:
    assert format_summary(_result("roe_multiple")) == {"total_profit": "1650.00"}
    assert format_summary(_result("risk_reward")) == {
        "total_profit": "675.00",
        "stop_loss": "95.0000",
        "risk_amount": "500.00",
        "risk_reward": "1:1.35",
    }


def test_chart_points_fixed_order_for_roe_policy() -> None:
    points = build_chart_points(_result("roe_multiple", side="SHORT"))
    assert [p.name for p in points] == ["Entry", "TP1", "TP2", "TP3"]


def test_chart_points_sorted_by_price_with_stop_loss() -> None:
    long_points = build_chart_points(_result("risk_reward"))
    short_points = build_chart_points(_result("risk_reward", side="SHORT"))
    assert [p.name for p in long_points] == ["SL", "Entry", "TP1", "TP2", "TP3"]
    assert [p.name for p in short_points] == ["TP3", "TP2", "TP1", "Entry", "SL"]


def test_chart_frame_move_from_entry() -> None:
    frame = chart_frame(build_chart_points(_result("risk_reward")))
    assert list(frame["name"]) == ["SL", "Entry", "TP1", "TP2", "TP3"]
    assert list(frame["move_pct"]) == pytest.approx([-5.0, 0.0, 5.0, 7.5, 10.0])


def test_result_to_dict_is_json_ready() -> None:
    payload = result_to_dict(_result("risk_reward"))
    decoded = json.loads(json.dumps(payload))
    assert len(decoded["targets"]) == 3
    assert decoded["targets"][0]["qty_fraction"] == 0.5
    assert decoded["risk_amount"] == pytest.approx(500.0)
