"""Raw input schemas and lenient parsing helpers."""

from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from protrade.engine import compute
from protrade.types import (
    CalculationPolicy,
    CalculationResult,
    RawTradeFields,
    Side,
    TradeInput,
    ValidationFailure,
)


class TradeRequest(BaseModel):
    """Structured calculation request, e.g. from the CLI or a JSON payload.

    Numbers may arrive as strings; they are parsed the same way form input is.
    """

    model_config = ConfigDict(extra="forbid")

    price: str
    amount: str
    leverage: int = Field(default=100)
    side: Literal["LONG", "SHORT"] = "LONG"
    stop_loss: str = ""
    policy: CalculationPolicy | None = None

    @field_validator("price", "amount", "stop_loss", mode="before")
    @classmethod
    def stringify_number(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return repr(float(v))
        return v

    @field_validator("side", mode="before")
    @classmethod
    def normalize_side(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def parse_strict(cls, payload: dict[str, Any]) -> "TradeRequest | ValidationFailure":
        """Validate a raw dict. Schema violations map to a failure value."""
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            error = exc.errors()[0]
            loc = error["loc"]
            return ValidationFailure(
                reason="missing_or_non_numeric",
                field=str(loc[0]) if loc else "request",
                message=f"schema_validation_error: {error['msg']}",
            )

    def to_trade_input(self) -> TradeInput | ValidationFailure:
        fields = RawTradeFields(price=self.price, amount=self.amount, stop_loss=self.stop_loss)
        return parse_trade_input(fields, side=self.side, leverage=self.leverage)

    def evaluate(
        self, default_policy: CalculationPolicy = "risk_reward"
    ) -> CalculationResult | ValidationFailure:
        """Parse and compute, using the request's own policy when it names one."""
        trade = self.to_trade_input()
        if isinstance(trade, ValidationFailure):
            return trade
        return compute(trade, self.policy or default_policy)


def parse_trade_input(
    fields: RawTradeFields,
    *,
    side: Side,
    leverage: int,
) -> TradeInput | ValidationFailure:
    """Parse raw form strings into a TradeInput.

    Only numeric shape is checked here. Range and stop loss direction are
    checked by the engine.
    """
    entry_price = parse_number(fields.price)
    if entry_price is None:
        return _non_numeric("entry_price", fields.price)
    margin = parse_number(fields.amount)
    if margin is None:
        return _non_numeric("margin", fields.amount)

    stop_loss: float | None = None
    if fields.stop_loss.strip():
        stop_loss = parse_number(fields.stop_loss)
        if stop_loss is None:
            return _non_numeric("stop_loss", fields.stop_loss)

    return TradeInput(
        entry_price=entry_price,
        margin=margin,
        leverage=leverage,
        side=side,
        stop_loss=stop_loss,
    )


def parse_number(raw: str) -> float | None:
    """Parse a decimal string; empty, NaN and infinite values give None."""
    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _non_numeric(field: str, raw: str) -> ValidationFailure:
    message = f"{field} is required" if not raw.strip() else f"{field} is not a number: {raw!r}"
    return ValidationFailure(reason="missing_or_non_numeric", field=field, message=message)
