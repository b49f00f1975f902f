"""Position engine exports."""

from protrade.engine.capital import STANDARD_MARGIN_PCT, suggest_margin
from protrade.engine.targets import (
    MAX_LEVERAGE,
    MIN_LEVERAGE,
    RISK_REWARD_RUNGS,
    ROE_MULTIPLE_RUNGS,
    Rung,
    compute,
    compute_risk_reward_targets,
    compute_roe_targets,
)

__all__ = [
    "MAX_LEVERAGE",
    "MIN_LEVERAGE",
    "RISK_REWARD_RUNGS",
    "ROE_MULTIPLE_RUNGS",
    "Rung",
    "STANDARD_MARGIN_PCT",
    "compute",
    "compute_risk_reward_targets",
    "compute_roe_targets",
    "suggest_margin",
]
