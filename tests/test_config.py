from __future__ import annotations

import pytest
from pydantic import ValidationError

from protrade.config import LogFormat, Settings, get_settings, reload_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PROTRADE_POLICY",
        "PROTRADE_DEFAULT_LEVERAGE",
        "PROTRADE_DEFAULT_SIDE",
        "PROTRADE_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.policy == "risk_reward"
    assert settings.uses_stop_loss
    assert settings.default_leverage == 100
    assert settings.default_side == "LONG"
    assert settings.standard_margin_pct == 0.05
    assert settings.log_format == LogFormat.CONSOLE


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROTRADE_POLICY", "roe_multiple")
    monkeypatch.setenv("PROTRADE_DEFAULT_LEVERAGE", "25")
    monkeypatch.setenv("PROTRADE_DEFAULT_SIDE", "short")
    settings = reload_settings()
    assert settings is get_settings()
    assert settings.policy == "roe_multiple"
    assert not settings.uses_stop_loss
    assert settings.default_leverage == 25
    assert settings.default_side == "SHORT"


@pytest.mark.parametrize(
    "overrides",
    [{"default_leverage": 0}, {"default_leverage": 101}, {"standard_margin_pct": 0}, {"policy": "fib"}],
)
def test_settings_bounds(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)  # type: ignore[arg-type]
