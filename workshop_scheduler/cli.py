"""Command-line interface for the workshop scheduler."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from .algorithm import run_request
from .errors import ValidationError
from .loader import load_import_file
from .report import format_metrics, format_schedule
from .server import configure_logging, run_server
from .types import POLICY_ALIASES, Policy, ScheduleRequest
from .validation import build_jobs


app = typer.Typer(
    name="workshop-scheduler",
    help="Order jobs by a policy and schedule them on parallel machines",
    add_completion=False,
)


def _parse_policy(value: str) -> Policy:
    try:
        return Policy.parse(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from None


@app.command()
def run(
    file: Annotated[Path, typer.Argument(help="Import file (name;duration;priority;deadline)")],
    policy: Annotated[
        str,
        typer.Option("--policy", "-p", help="Ordering policy: name, alias or id"),
    ] = Policy.BY_PRIORITY.value,
    machines: Annotated[
        int,
        typer.Option("--machines", "-m", help="Number of parallel machines"),
    ] = 1,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log each assignment"),
    ] = False,
) -> None:
    """Schedule the jobs in FILE and print the result."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    selected = _parse_policy(policy)

    try:
        rows = load_import_file(file)
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"Error: cannot read {file}: {e}", err=True)
        raise typer.Exit(1) from None

    try:
        jobs = build_jobs(rows)
        response = run_request(ScheduleRequest(jobs, selected, machines))
    except ValidationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"Policy: {selected.label} | Machines: {machines}")
    for line in format_schedule(response.schedule, show_machine=machines > 1):
        typer.echo(line)

    typer.echo("")
    for line in format_metrics(response.metrics):
        typer.echo(line)


@app.command()
def policies() -> None:
    """List the available ordering policies."""
    aliases = {p: a for a, p in POLICY_ALIASES.items()}
    for p in Policy:
        typer.echo(f"{p.id}  {p.value:<25} ({aliases[p]})  {p.label}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Host to bind to")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port to listen on")] = 8001,
    debug: Annotated[bool, typer.Option(help="Enable Flask debug mode")] = False,
) -> None:
    """Run the HTTP API."""
    run_server(host=host, port=port, debug=debug)
