"""CLI entry point for the ProTrade position calculator."""

import json
import sys
from typing import TextIO

import click

from protrade import __version__
from protrade.config import get_settings
from protrade.engine import MAX_LEVERAGE, MIN_LEVERAGE, suggest_margin
from protrade.inputs import TradeRequest
from protrade.presentation import (
    build_chart_points,
    chart_frame,
    format_summary,
    format_target_card,
    result_to_dict,
)
from protrade.session import CalculatorSession
from protrade.types import POLICIES, CalculationResult, ValidationFailure
from protrade.utils.logging import get_logger, setup_logging

EXIT_INVALID_INPUT = 2


@click.group(invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show the version and exit")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """ProTrade - leverage position take-profit calculator.

    Derives three take-profit targets with partial-close sizes, profit and
    ROE from an entry price, margin, leverage and optional stop loss.
    """
    if version:
        click.echo(f"protrade version {__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option("--price", "-p", required=True, help="Entry price")
@click.option("--margin", "-m", default="", help="Margin amount (principal)")
@click.option(
    "--leverage",
    "-l",
    type=click.IntRange(MIN_LEVERAGE, MAX_LEVERAGE, clamp=True),
    default=None,
    help="Leverage, clamped to 1-100",
)
@click.option(
    "--side",
    "-s",
    type=click.Choice(["long", "short"], case_sensitive=False),
    default=None,
    help="Position side",
)
@click.option("--stop-loss", "--sl", "stop_loss", default="", help="Stop loss price")
@click.option(
    "--policy",
    type=click.Choice(POLICIES),
    default=None,
    help="Target policy (defaults to settings)",
)
@click.option("--capital", default=None, help="Total capital; fills margin with the standard share")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON")
@click.option("--chart", is_flag=True, default=False, help="Print the price ladder table")
def calc(
    price: str,
    margin: str,
    leverage: int | None,
    side: str | None,
    stop_loss: str,
    policy: str | None,
    capital: str | None,
    as_json: bool,
    chart: bool,
) -> None:
    """Calculate take-profit targets for one position."""
    setup_logging()
    logger = get_logger("protrade.main")
    settings = get_settings()

    session = CalculatorSession(settings)
    if side is not None:
        session.select_side(side.upper())  # type: ignore[arg-type]
    if leverage is not None:
        session.set_leverage(leverage)
    session.update_field("price", price)
    session.update_field("amount", margin)
    session.update_field("stop_loss", stop_loss)
    if capital is not None:
        session.set_total_capital(capital)
        session.apply_standard_margin()

    outcome = session.evaluate(policy)  # type: ignore[arg-type]
    if isinstance(outcome, ValidationFailure):
        logger.warning("invalid_input", reason=outcome.reason, field=outcome.field)
        click.echo(f"[ERROR] {outcome.reason}: {outcome.message}", err=True)
        sys.exit(EXIT_INVALID_INPUT)

    if as_json:
        click.echo(json.dumps(result_to_dict(outcome), indent=2))
        return

    _echo_result(outcome)
    if chart:
        click.echo()
        click.echo(chart_frame(build_chart_points(outcome)).to_string(index=False))


@cli.command()
@click.argument("request_file", type=click.File("r"), default="-")
def evaluate(request_file: TextIO) -> None:
    """Calculate targets for a JSON request read from a file or stdin.

    The request carries price, amount, leverage, side, stop_loss and an
    optional policy; the result is printed as JSON.
    """
    setup_logging()
    logger = get_logger("protrade.main")
    settings = get_settings()

    try:
        payload = json.load(request_file)
    except json.JSONDecodeError as e:
        click.echo(f"[ERROR] request is not valid JSON: {e}", err=True)
        sys.exit(EXIT_INVALID_INPUT)
    if not isinstance(payload, dict):
        click.echo("[ERROR] request must be a JSON object", err=True)
        sys.exit(EXIT_INVALID_INPUT)

    request = TradeRequest.parse_strict(payload)
    outcome = request if isinstance(request, ValidationFailure) else request.evaluate(settings.policy)
    if isinstance(outcome, ValidationFailure):
        logger.warning("invalid_request", reason=outcome.reason, field=outcome.field)
        click.echo(f"[ERROR] {outcome.reason}: {outcome.message}", err=True)
        sys.exit(EXIT_INVALID_INPUT)

    click.echo(json.dumps(result_to_dict(outcome), indent=2))


@cli.command("standard-margin")
@click.argument("capital")
@click.option("--pct", type=float, default=None, help="Share of capital (defaults to settings)")
def standard_margin(capital: str, pct: float | None) -> None:
    """Suggest a standard margin from total capital."""
    settings = get_settings()
    amount = suggest_margin(capital, pct if pct is not None else settings.standard_margin_pct)
    if amount is None:
        click.echo(f"[ERROR] capital is not a number: {capital!r}", err=True)
        sys.exit(EXIT_INVALID_INPUT)
    click.echo(str(amount))


@cli.command()
def status() -> None:
    """Show the effective configuration."""
    settings = get_settings()

    click.echo("=" * 50)
    click.echo("ProTrade - Status")
    click.echo("=" * 50)
    click.echo()

    click.echo("[Engine]")
    click.echo(f"   Policy: {settings.policy}")
    click.echo(f"   Stop loss required: {'Yes' if settings.uses_stop_loss else 'No'}")
    click.echo(f"   Default leverage: {settings.default_leverage}x")
    click.echo(f"   Default side: {settings.default_side}")
    click.echo()

    click.echo("[Capital Helper]")
    click.echo(f"   Total capital: {settings.default_total_capital:g}")
    click.echo(f"   Standard margin: {settings.standard_margin_pct * 100:g}%")
    click.echo()

    click.echo("[Logging]")
    click.echo(f"   Log level: {settings.log_level}")
    click.echo(f"   Log format: {settings.log_format.value}")
    click.echo()
    click.echo("=" * 50)


def _echo_result(result: CalculationResult) -> None:
    marker = "[LONG]" if result.side == "LONG" else "[SHORT]"
    click.echo(f"{marker} Entry {result.entry_price:g} @ {result.leverage:g}x ({result.policy})")
    click.echo()
    for target in result.targets:
        card = format_target_card(target)
        click.echo(f"{card['label']:<10} {card['price']:>14}   {card['quantity']}")
        click.echo(f"{'':<10} profit ${card['profit']}   ROE {card['roe']}")
    click.echo()

    summary = format_summary(result)
    click.echo(f"Total projected profit: ${summary['total_profit']}")
    if "stop_loss" in summary:
        click.echo(f"Stop loss: {summary['stop_loss']}")
    if "risk_amount" in summary:
        click.echo(f"Risk amount: ${summary['risk_amount']}")
    if "risk_reward" in summary:
        click.echo(f"Risk/Reward: {summary['risk_reward']}")


if __name__ == "__main__":
    cli()
