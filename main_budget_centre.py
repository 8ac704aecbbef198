"""Mini README: Entry point CLI for the Campus Ledger service.

This script exposes a Typer CLI with two commands: ``run`` starts the
FastAPI application under uvicorn with configurable host, port, and
production flags, and ``summary`` prints the budget cards for one
department straight from the configured document store.
"""

from __future__ import annotations

import typer
import uvicorn

from campusledger.configuration import get_settings
from campusledger.ledger import create_board
from campusledger.logging_utils import configure_root_logger, level_for_environment

cli = typer.Typer(help="Launch and inspect the Campus Ledger budget service.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(level_for_environment(settings.environment))

    # 0.0.0.0 is a bind address only; browsers need a concrete host.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        "Starting Campus Ledger on "
        f"{effective_host}:{effective_port}.\n"
        "Budget summary at "
        f"http://{browser_host}:{effective_port}/budget/summary"
    )
    uvicorn.run(
        "campusledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary(
    department: str = typer.Option("ALL", help="Department id, or ALL for the overall ledger."),
) -> None:
    """Print the available, revenue, expenditure, and fund cards."""

    settings = get_settings()
    configure_root_logger(level_for_environment(settings.environment))
    board = create_board(settings)
    try:
        try:
            totals = board.totals(department)
        except ValueError as error:
            raise typer.BadParameter(str(error), param_hint="--department") from error
        typer.echo(f"Scope:        {totals.scope}")
        typer.echo(f"Available:    {totals.available:,.2f}")
        typer.echo(f"Revenue:      {totals.revenue:,.2f}")
        typer.echo(f"Expenditure:  {totals.expenditure:,.2f}")
        for fund, amount in totals.fund_utilization.as_dict().items():
            typer.echo(f"  {fund:<12}{amount:,.2f}")
        if board.stale:
            typer.echo(f"Warning: showing cached data ({board.last_error})", err=True)
    finally:
        board.close()


if __name__ == "__main__":
    cli()
