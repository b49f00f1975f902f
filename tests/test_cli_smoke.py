import json

import pytest
from click.testing import CliRunner

from protrade import __version__
from protrade.config import reload_settings
from protrade.main import cli


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROTRADE_POLICY", "risk_reward")
    monkeypatch.setenv("PROTRADE_LOG_LEVEL", "WARNING")
    reload_settings()


def test_cli_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_calc_risk_reward() -> None:
    result = CliRunner().invoke(
        cli,
        ["calc", "-p", "100", "-m", "1000", "-l", "10", "--sl", "95", "--chart"],
    )
    assert result.exit_code == 0
    assert "TP1 1:1" in result.output
    assert "Total projected profit: $675.00" in result.output
    assert "Risk/Reward: 1:1.35" in result.output
    assert "move_pct" in result.output


def test_cli_calc_json_roe_multiple() -> None:
    result = CliRunner().invoke(
        cli,
        ["calc", "-p", "100", "-m", "1000", "-l", "10", "--side", "short", "--policy", "roe_multiple", "--json"],
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["side"] == "SHORT"
    assert payload["policy"] == "roe_multiple"
    assert payload["targets"][0]["price"] == pytest.approx(90.0)
    assert payload["stop_loss"] is None


def test_cli_calc_capital_fills_margin() -> None:
    result = CliRunner().invoke(
        cli,
        ["calc", "-p", "100", "--capital", "10000", "--policy", "roe_multiple", "--json"],
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["total_profit"] == pytest.approx(500 * (0.5 + 0.45 + 0.7))


def test_cli_calc_invalid_stop_loss_exits_non_zero() -> None:
    result = CliRunner().invoke(cli, ["calc", "-p", "100", "-m", "1000", "--sl", "110"])
    assert result.exit_code == 2
    assert "invalid_stop_loss_direction" in result.output


def test_cli_standard_margin() -> None:
    runner = CliRunner()
    ok = runner.invoke(cli, ["standard-margin", "10000"])
    bad = runner.invoke(cli, ["standard-margin", "abc"])
    assert ok.exit_code == 0
    assert ok.output.strip() == "500"
    assert bad.exit_code == 2


def test_cli_status() -> None:
    result = CliRunner().invoke(cli, ["status"])
    assert result.exit_code == 0
    assert "Policy: risk_reward" in result.output


def test_cli_evaluate_json_request() -> None:
    request = {"price": 100, "amount": 1000, "leverage": 10, "side": "long", "policy": "roe_multiple"}
    result = CliRunner().invoke(cli, ["evaluate"], input=json.dumps(request))
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["policy"] == "roe_multiple"
    assert payload["total_profit"] == pytest.approx(1650.0)


def test_cli_evaluate_rejects_bad_request() -> None:
    runner = CliRunner()
    not_json = runner.invoke(cli, ["evaluate"], input="price=100")
    bad_field = runner.invoke(cli, ["evaluate"], input='{"price": "1", "amount": "1", "lev": 3}')
    assert not_json.exit_code == 2
    assert bad_field.exit_code == 2


def test_cli_standard_margin_huge_capital() -> None:
    result = CliRunner().invoke(cli, ["standard-margin", "1e30"])
    assert result.exit_code == 0
    assert int(result.output.strip()) == pytest.approx(5e28)
