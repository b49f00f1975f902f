"""Take-profit target computation for leveraged positions."""

from __future__ import annotations

import math
from typing import NamedTuple

from protrade.types import (
    POLICIES,
    CalculationPolicy,
    CalculationResult,
    TargetLevel,
    TradeInput,
    ValidationFailure,
)

MIN_LEVERAGE = 1
MAX_LEVERAGE = 100


class Rung(NamedTuple):
    """Fixed multiple, share of position closed, and display label."""

    multiple: float
    qty_fraction: float
    label: str


# ROE multiples: 1.0 means the price move that doubles the margin.
ROE_MULTIPLE_RUNGS: tuple[Rung, Rung, Rung] = (
    Rung(1.0, 0.5, "TP1 1:1"),
    Rung(1.5, 0.3, "TP2 1:1.5"),
    Rung(3.5, 0.2, "TP3 1:3.5"),
)

# Reward multiples of the distance to the stop loss.
RISK_REWARD_RUNGS: tuple[Rung, Rung, Rung] = (
    Rung(1.0, 0.5, "TP1 1:1"),
    Rung(1.5, 0.3, "TP2 1:1.5"),
    Rung(2.0, 0.2, "TP3 1:2"),
)


def compute(
    trade: TradeInput,
    policy: CalculationPolicy = "risk_reward",
) -> CalculationResult | ValidationFailure:
    """Compute three take-profit targets under the given policy."""
    if policy == "roe_multiple":
        return compute_roe_targets(trade)
    if policy == "risk_reward":
        return compute_risk_reward_targets(trade)
    raise ValueError(f"unsupported_policy: {policy} (expected one of {POLICIES})")


def compute_roe_targets(trade: TradeInput) -> CalculationResult | ValidationFailure:
    """Targets at fixed ROE multiples; the stop loss is not used."""
    failure = _check_common(trade)
    if failure is not None:
        return failure

    unit_move = 1 / trade.leverage
    direction = 1 if trade.side == "LONG" else -1
    targets = tuple(
        TargetLevel(
            price=trade.entry_price * (1 + direction * unit_move * rung.multiple),
            pnl=trade.margin * rung.multiple * rung.qty_fraction,
            roe=rung.multiple,
            qty_fraction=rung.qty_fraction,
            label=rung.label,
        )
        for rung in ROE_MULTIPLE_RUNGS
    )
    return CalculationResult(
        targets=targets,  # type: ignore[arg-type]
        entry_price=trade.entry_price,
        leverage=trade.leverage,
        side=trade.side,
        policy="roe_multiple",
        total_profit=sum(target.pnl for target in targets),
    )


def compute_risk_reward_targets(trade: TradeInput) -> CalculationResult | ValidationFailure:
    """Targets at reward multiples of the distance to the stop loss."""
    failure = _check_common(trade) or _check_stop_loss(trade)
    if failure is not None:
        return failure
    stop_loss = float(trade.stop_loss)  # type: ignore[arg-type]

    risk_price_move = abs(trade.entry_price - stop_loss)
    risk_percent = risk_price_move / trade.entry_price
    risk_amount = trade.margin * risk_percent * trade.leverage
    if not (risk_amount > 0 and math.isfinite(risk_amount)):
        return ValidationFailure(
            reason="out_of_range",
            field="margin",
            message="margin is too small or too large to size a risk amount",
        )

    targets: list[TargetLevel] = []
    for rung in RISK_REWARD_RUNGS:
        reward_amount = risk_amount * rung.multiple
        targets.append(
            TargetLevel(
                price=_project(trade, risk_price_move * rung.multiple),
                pnl=reward_amount * rung.qty_fraction,
                roe=reward_amount / trade.margin,
                qty_fraction=rung.qty_fraction,
                label=rung.label,
            )
        )

    total_profit = sum(target.pnl for target in targets)
    return CalculationResult(
        targets=tuple(targets),  # type: ignore[arg-type]
        entry_price=trade.entry_price,
        leverage=trade.leverage,
        side=trade.side,
        policy="risk_reward",
        total_profit=total_profit,
        stop_loss=stop_loss,
        risk_amount=risk_amount,
        risk_reward_ratio=total_profit / risk_amount,
    )


def _project(trade: TradeInput, price_move: float) -> float:
    """Shift entry by ``price_move`` in the profitable direction."""
    if trade.side == "LONG":
        return trade.entry_price + price_move
    return trade.entry_price - price_move


def _check_common(trade: TradeInput) -> ValidationFailure | None:
    for field_name in ("entry_price", "margin", "leverage"):
        if not _is_finite(getattr(trade, field_name)):
            return ValidationFailure(
                reason="missing_or_non_numeric",
                field=field_name,
                message=f"{field_name} must be a finite number",
            )
    if trade.entry_price <= 0:
        return ValidationFailure(
            reason="out_of_range",
            field="entry_price",
            message="entry_price must be greater than zero",
        )
    if trade.margin <= 0:
        return ValidationFailure(
            reason="out_of_range",
            field="margin",
            message="margin must be greater than zero",
        )
    if not float(trade.leverage).is_integer() or not MIN_LEVERAGE <= trade.leverage <= MAX_LEVERAGE:
        return ValidationFailure(
            reason="out_of_range",
            field="leverage",
            message=f"leverage must be a whole number between {MIN_LEVERAGE} and {MAX_LEVERAGE}",
        )
    return None


def _check_stop_loss(trade: TradeInput) -> ValidationFailure | None:
    stop_loss = trade.stop_loss
    if stop_loss is None or not _is_finite(stop_loss):
        return ValidationFailure(
            reason="missing_or_non_numeric",
            field="stop_loss",
            message="stop_loss is required for the risk_reward policy",
        )
    if stop_loss <= 0:
        return ValidationFailure(
            reason="out_of_range",
            field="stop_loss",
            message="stop_loss must be greater than zero",
        )
    on_loss_side = (
        stop_loss < trade.entry_price if trade.side == "LONG" else stop_loss > trade.entry_price
    )
    if not on_loss_side:
        expected = "below" if trade.side == "LONG" else "above"
        return ValidationFailure(
            reason="invalid_stop_loss_direction",
            field="stop_loss",
            message=f"stop_loss must be {expected} entry_price for a {trade.side} position",
        )
    return None


def _is_finite(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
