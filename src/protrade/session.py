"""Calculator session holding the current form state for both sides."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal

from protrade.config import Settings
from protrade.engine import MAX_LEVERAGE, MIN_LEVERAGE, compute, suggest_margin
from protrade.inputs import parse_trade_input
from protrade.types import (
    SIDES,
    CalculationPolicy,
    CalculationResult,
    RawTradeFields,
    Side,
    ValidationFailure,
)
from protrade.utils.logging import get_logger, log_calculation, log_rejection

FieldName = Literal["price", "amount", "stop_loss"]
_FIELD_NAMES = ("price", "amount", "stop_loss")


@dataclass(slots=True)
class _SessionState:
    side: Side
    leverage: int
    total_capital: str
    slots: dict[Side, RawTradeFields] = field(
        default_factory=lambda: {side: RawTradeFields() for side in SIDES}
    )


class CalculatorSession:
    """Form state for one user, with inputs retained separately per side."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._logger = get_logger("protrade.session")
        self._state = _SessionState(
            side=settings.default_side,
            leverage=settings.default_leverage,
            total_capital=_format_capital(settings.default_total_capital),
        )

    @property
    def side(self) -> Side:
        return self._state.side

    @property
    def leverage(self) -> int:
        return self._state.leverage

    @property
    def total_capital(self) -> str:
        return self._state.total_capital

    @property
    def active_fields(self) -> RawTradeFields:
        return self._state.slots[self._state.side]

    def fields_for(self, side: Side) -> RawTradeFields:
        """Return the raw inputs kept for one side."""
        return self._state.slots[side]

    def select_side(self, side: Side) -> None:
        """Switch the active side; the other side's inputs are kept."""
        if side not in SIDES:
            raise ValueError(f"unsupported_side: {side}")
        self._state.side = side

    def set_leverage(self, value: float) -> int:
        """Set leverage as an integer clamped to the slider range."""
        if isinstance(value, float) and math.isnan(value):
            raise ValueError("leverage_is_nan")
        leverage = max(MIN_LEVERAGE, min(MAX_LEVERAGE, int(value)))
        self._state.leverage = leverage
        return leverage

    def set_total_capital(self, value: str) -> None:
        self._state.total_capital = value

    def update_field(self, name: FieldName, value: str) -> None:
        """Write one raw input into the active side's slot."""
        if name not in _FIELD_NAMES:
            raise ValueError(f"unsupported_field: {name}")
        setattr(self.active_fields, name, value)

    def apply_standard_margin(self) -> int | None:
        """Fill the margin with the standard share of total capital."""
        amount = suggest_margin(self._state.total_capital, self._settings.standard_margin_pct)
        if amount is not None:
            self.update_field("amount", str(amount))
        return amount

    def recompute(self, policy: CalculationPolicy | None = None) -> CalculationResult | None:
        """Run the engine on the active side; None when inputs are incomplete."""
        outcome = self.evaluate(policy)
        if isinstance(outcome, ValidationFailure):
            return None
        return outcome

    def evaluate(
        self, policy: CalculationPolicy | None = None
    ) -> CalculationResult | ValidationFailure:
        """Like recompute, but keep the failure for callers that show it."""
        active_policy = policy or self._settings.policy
        parsed = parse_trade_input(
            self.active_fields,
            side=self._state.side,
            leverage=self._state.leverage,
        )
        outcome = parsed if isinstance(parsed, ValidationFailure) else compute(parsed, active_policy)

        if isinstance(outcome, ValidationFailure):
            log_rejection(
                self._logger,
                reason=outcome.reason,
                field=outcome.field,
                side=self._state.side,
                policy=active_policy,
            )
        else:
            log_calculation(
                self._logger,
                side=outcome.side,
                policy=outcome.policy,
                total_profit=outcome.total_profit,
                leverage=outcome.leverage,
            )
        return outcome


def _format_capital(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
