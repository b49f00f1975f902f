"""Presentation helpers exports."""

from protrade.presentation.render import (
    ChartPoint,
    build_chart_points,
    chart_frame,
    format_ratio,
    format_roe,
    format_summary,
    format_target_card,
    result_to_dict,
)

__all__ = [
    "ChartPoint",
    "build_chart_points",
    "chart_frame",
    "format_ratio",
    "format_roe",
    "format_summary",
    "format_target_card",
    "result_to_dict",
]
