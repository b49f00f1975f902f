"""Input parsing exports."""

from protrade.inputs.schemas import TradeRequest, parse_number, parse_trade_input

__all__ = ["TradeRequest", "parse_number", "parse_trade_input"]
