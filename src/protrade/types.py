"""Shared domain types for the position calculator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Side = Literal["LONG", "SHORT"]
CalculationPolicy = Literal["roe_multiple", "risk_reward"]
FailureReason = Literal[
    "missing_or_non_numeric",
    "out_of_range",
    "invalid_stop_loss_direction",
]

SIDES: tuple[Side, ...] = ("LONG", "SHORT")
POLICIES: tuple[CalculationPolicy, ...] = ("roe_multiple", "risk_reward")


@dataclass(slots=True, frozen=True)
class TradeInput:
    """Parsed numeric inputs for one recomputation."""

    entry_price: float
    margin: float
    leverage: int
    side: Side
    stop_loss: float | None = None


@dataclass(slots=True, frozen=True)
class TargetLevel:
    """One take-profit rung.

    ``roe`` is a fraction of margin (1.0 means 100%) for every policy.
    """

    price: float
    pnl: float
    roe: float
    qty_fraction: float
    label: str


@dataclass(slots=True, frozen=True)
class CalculationResult:
    """Targets and aggregates derived from a valid TradeInput."""

    targets: tuple[TargetLevel, TargetLevel, TargetLevel]
    entry_price: float
    leverage: int
    side: Side
    policy: CalculationPolicy
    total_profit: float
    stop_loss: float | None = None
    risk_amount: float | None = None
    risk_reward_ratio: float | None = None

    @property
    def tp1(self) -> TargetLevel:
        return self.targets[0]

    @property
    def tp2(self) -> TargetLevel:
        return self.targets[1]

    @property
    def tp3(self) -> TargetLevel:
        return self.targets[2]


@dataclass(slots=True, frozen=True)
class ValidationFailure:
    """Explicit "no result" signal carrying the first rejected field."""

    reason: FailureReason
    field: str
    message: str


@dataclass(slots=True)
class RawTradeFields:
    """Raw per-side form strings, as typed by the user."""

    price: str = ""
    amount: str = ""
    stop_loss: str = ""
