"""
Click CLI for the wheel tracker.

Runs the API server, applies database migrations and prints portfolio
reports straight from the local database.

CLI Usage:
    wheeltracker serve --port 8000
    wheeltracker db upgrade
    wheeltracker summary
    wheeltracker summary --ticker AAPL
    wheeltracker allocation AAPL
    wheeltracker tickers
"""

import json
import logging
import sys
from dataclasses import asdict
from typing import Optional

import click

from wheeltracker.server.config import Settings, configure_logging
from wheeltracker.server.database.migrate import current_revision
from wheeltracker.server.database.session import Database
from wheeltracker.server.services.analytics_service import AnalyticsService
from wheeltracker.wheel.exceptions import WheelError
from wheeltracker.wheel.models import CoveredCallAllocation, PortfolioMetrics, TickerMetrics

logger = logging.getLogger(__name__)


def print_error(message: str) -> None:
    """Print error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def print_success(message: str) -> None:
    """Print success message."""
    click.secho(message, fg="green")


def print_portfolio(metrics: PortfolioMetrics) -> None:
    """Print portfolio metrics in a formatted way."""
    click.echo()
    click.secho("=== Portfolio ===", bold=True)
    click.echo(f"Premium collected: ${metrics.total_premium_collected:,.2f}")
    click.echo(f"Net premium:       ${metrics.total_premium:,.2f}")
    click.echo(f"Realized P&L:      ${metrics.total_realized_pnl:,.2f}")
    click.echo(f"Capital deployed:  ${metrics.total_capital_deployed:,.2f}")
    click.echo(
        f"Trades:            {metrics.total_trades} "
        f"({metrics.active_trades} open, {metrics.closed_trades} closed)"
    )
    click.echo(f"Open positions:    {metrics.active_positions}")
    click.echo(f"Win rate:          {metrics.win_rate:.1f}%")
    click.echo(f"Annualized return: {metrics.annualized_return:.1f}%")
    click.echo(f"Avg DTE:           {metrics.avg_days_to_expiration:.1f}")


def print_ticker(metrics: TickerMetrics) -> None:
    """Print ticker metrics in a formatted way."""
    click.echo()
    click.secho(f"=== {metrics.ticker} ===", bold=True)
    click.echo(f"Net premium:       ${metrics.total_premium:,.2f}")
    click.echo(f"Realized P&L:      ${metrics.realized_pnl:,.2f}")
    click.echo(
        f"Trades:            {metrics.total_trades} "
        f"({metrics.open_trades} open, {metrics.closed_trades} closed)"
    )
    click.echo(f"Open positions:    {metrics.open_positions}")
    click.echo(f"Win rate:          {metrics.win_rate:.1f}%")
    click.echo(f"Annualized return: {metrics.annualized_return:.1f}%")
    click.echo(f"Avg DTE:           {metrics.avg_days_to_expiration:.1f}")


def print_allocation(allocation: CoveredCallAllocation) -> None:
    """Print covered call allocation for a ticker."""
    click.echo()
    click.secho(f"=== {allocation.ticker} covered calls ===", bold=True)
    click.echo(f"Shares:      {allocation.total_shares} ({allocation.total_lots:g} lots)")
    click.echo(
        f"Allocated:   {allocation.allocated_shares} ({allocation.allocated_lots:g} lots)"
    )
    click.echo(
        f"Unallocated: {allocation.unallocated_shares} "
        f"({allocation.unallocated_lots:g} lots)"
    )


def open_database(ctx: click.Context, migrate: bool = True) -> Database:
    """Open the database for this invocation and close it on exit."""
    settings: Settings = ctx.obj["settings"]
    database = Database(settings.database_url).init(migrate=migrate)
    ctx.call_on_close(database.dispose)
    return database


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.option(
    "--db",
    default=None,
    help="Database file path (':memory:' for a throwaway database)",
    envvar="WHEELTRACKER_DATABASE_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--json", "output_json", is_flag=True, help="JSON output (where supported)")
@click.pass_context
def cli(ctx: click.Context, db: Optional[str], verbose: bool, output_json: bool) -> None:
    """
    Wheel Tracker - Record option trades and share lots, report performance.
    """
    ctx.ensure_object(dict)

    settings = Settings(database_path=db) if db else Settings()
    if verbose:
        settings.debug = True
    configure_logging(settings)

    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose
    ctx.obj["json"] = output_json


@cli.command()
@click.option("--host", default=None, help="Bind address (default: from settings)")
@click.option("--port", type=int, default=None, help="Port (default: from settings)")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """
    Run the HTTP API server.

    Example: wheeltracker serve --port 8080
    """
    from wheeltracker.server.main import run

    settings: Settings = ctx.obj["settings"]
    if host:
        settings.host = host
    if port:
        settings.port = port

    click.echo(f"Serving {settings.app_name} on http://{settings.host}:{settings.port}")
    run(settings)


@cli.group()
def db() -> None:
    """Database maintenance commands."""


@db.command()
@click.pass_context
def upgrade(ctx: click.Context) -> None:
    """
    Apply pending schema migrations.

    Example: wheeltracker db upgrade
    """
    try:
        database = open_database(ctx)
    except Exception as e:
        logger.error(f"Migration failed: {e}", exc_info=ctx.obj["verbose"])
        print_error(f"Migration failed: {e}")
        sys.exit(1)

    print_success(f"Database at revision {current_revision(database.engine)}")


@cli.command()
@click.option("--ticker", "-t", default=None, help="Limit to one ticker")
@click.pass_context
def summary(ctx: click.Context, ticker: Optional[str]) -> None:
    """
    Show portfolio or ticker performance.

    Example: wheeltracker summary
    Example: wheeltracker summary --ticker AAPL
    """
    database = open_database(ctx)
    with database.session_scope() as session:
        service = AnalyticsService(session)
        if ticker:
            metrics = service.get_ticker_metrics(ticker)
            printer = print_ticker
        else:
            metrics = service.get_portfolio_metrics()
            printer = print_portfolio

    if ctx.obj["json"]:
        _echo_json(asdict(metrics))
    else:
        printer(metrics)


@cli.command()
@click.argument("ticker")
@click.pass_context
def allocation(ctx: click.Context, ticker: str) -> None:
    """
    Show how many shares are covered by open calls.

    Example: wheeltracker allocation AAPL
    """
    database = open_database(ctx)
    try:
        with database.session_scope() as session:
            result = AnalyticsService(session).get_covered_call_allocation(ticker)
    except WheelError as e:
        print_error(str(e))
        sys.exit(1)

    if ctx.obj["json"]:
        _echo_json(
            {
                **asdict(result),
                "total_lots": result.total_lots,
                "allocated_lots": result.allocated_lots,
                "unallocated_lots": result.unallocated_lots,
            }
        )
    else:
        print_allocation(result)


@cli.command()
@click.pass_context
def tickers(ctx: click.Context) -> None:
    """
    List every ticker with a trade or position.

    Example: wheeltracker tickers
    """
    database = open_database(ctx)
    with database.session_scope() as session:
        symbols = AnalyticsService(session).get_all_tickers()

    if ctx.obj["json"]:
        _echo_json(symbols)
    elif not symbols:
        click.echo("No tickers recorded yet.")
    else:
        for symbol in symbols:
            click.echo(symbol)


def main() -> None:
    """Entry point for the wheeltracker console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
