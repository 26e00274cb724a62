"""Command line interface for inspecting configured gates."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer

from accessgate import (
    AccessContext,
    AccessSecurityError,
    GateResult,
    InMemoryGateRegistry,
    Operation,
    ResourceAccessSecurity,
    load_gates,
)
from accessgate.config import AccessGateConfig, load_config

app = typer.Typer(help="CLI for accessgate decisions")

gates_app = typer.Typer(help="Commands for inspecting gate registrations")
app.add_typer(gates_app, name="gates")


@app.callback()
def main() -> None:
    """accessgate CLI entry point."""
    pass


def _setup(config_path: Optional[str]) -> tuple[AccessGateConfig, InMemoryGateRegistry]:
    config = load_config(config_path)
    logging.basicConfig(level=config.log_level)
    registry = InMemoryGateRegistry()
    load_gates(config.gates, registry)
    return config, registry


def _parse_context(value: str) -> AccessContext:
    try:
        return AccessContext(value)
    except ValueError:
        typer.secho(f"Unknown context: {value}", fg=typer.colors.RED)
        raise typer.Exit(code=2)


@gates_app.command("list")
def gates_list(config: Optional[str] = typer.Option(None, help="Config file")) -> None:
    """
    List configured gates in evaluation order.

    Example:
        accessgate gates list --config accessgate.yaml
        # Output: [application]
        #           deny-secret context=application ranking=100 path=/secret/.* ...
    """
    _, registry = _setup(config)
    found = False
    for context in AccessContext:
        registrations = registry.snapshot(context)
        if not registrations:
            continue
        found = True
        typer.echo(f"[{context.value}]")
        for registration in registrations:
            typer.echo(f"  {registration.describe()}")
    if not found:
        typer.echo("No gates registered")


@app.command("check")
def check(
    path: str,
    operation: str,
    context: str = typer.Option(AccessContext.APPLICATION.value, help="Gate context"),
    value: Optional[str] = typer.Option(None, help="Check a single value"),
    config: Optional[str] = typer.Option(None, help="Config file"),
) -> None:
    """
    Print the combined verdict for an operation on a path.

    Exits with 0 when granted and 1 when denied.

    Example:
        accessgate check /secret/doc read
        # Output: denied
    """
    op = Operation.from_string(operation)
    if op is None:
        typer.secho(f"Unknown operation: {operation}", fg=typer.colors.RED)
        raise typer.Exit(code=2)
    access_context = _parse_context(context)
    settings, registry = _setup(config)
    security = ResourceAccessSecurity(access_context, registry, settings.engine)

    try:
        result = asyncio.run(security.check(path, op, value_name=value))
    except ValueError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=2)

    typer.echo(result.value)
    if result is not GateResult.GRANTED:
        raise typer.Exit(code=1)


@app.command("query")
def query(
    text: str,
    language: str = typer.Option("sql", help="Query language"),
    context: str = typer.Option(AccessContext.APPLICATION.value, help="Gate context"),
    config: Optional[str] = typer.Option(None, help="Config file"),
) -> None:
    """
    Print a query as transformed by the configured gates.

    Example:
        accessgate query "SELECT *"
        # Output: SELECT * AND x=1
    """
    access_context = _parse_context(context)
    settings, registry = _setup(config)
    security = ResourceAccessSecurity(access_context, registry, settings.engine)
    try:
        typer.echo(asyncio.run(security.transform_query(text, language)))
    except AccessSecurityError as exc:
        typer.secho(f"Query rejected: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
