"""Configuration loading from environment variables and a .env file."""

from enum import Enum
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from protrade.types import CalculationPolicy, Side


class LogFormat(str, Enum):
    """Log output format."""

    JSON = "json"
    CONSOLE = "console"


class Settings(BaseSettings):
    """Calculator settings.

    Loaded from ``PROTRADE_*`` environment variables and the .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROTRADE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== Engine ====================
    policy: CalculationPolicy = Field(
        default="risk_reward",
        description="Target policy: roe_multiple (no stop loss) or risk_reward",
    )
    default_leverage: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Leverage selected when a session starts",
    )
    default_side: Side = Field(default="LONG", description="Side selected when a session starts")

    # ==================== Capital helper ====================
    default_total_capital: float = Field(
        default=10_000.0,
        description="Total capital pre-filled in the standard margin helper",
    )
    standard_margin_pct: float = Field(
        default=0.05,
        gt=0.0,
        le=1.0,
        description="Fraction of total capital used as standard margin",
    )

    # ==================== Logging ====================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: LogFormat = Field(
        default=LogFormat.CONSOLE,
        description="Log output format",
    )

    @field_validator("default_side", mode="before")
    @classmethod
    def normalize_side(cls, v: str) -> str:
        """Accept lower-case side names from the environment."""
        return v.upper() if isinstance(v, str) else v

    @property
    def uses_stop_loss(self) -> bool:
        """Whether the configured policy requires a stop loss."""
        return self.policy == "risk_reward"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from the environment."""
    global _settings
    _settings = Settings()
    return _settings
