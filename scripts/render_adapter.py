"""CLI entry point for previewing generated adapter source.

Usage::

    python scripts/render_adapter.py --manifest adapters.yaml
    python scripts/render_adapter.py --manifest adapters.yaml --target My::Clear \\
        --log-level DEBUG
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from classadapter.config.adapter import normalize_target
from classadapter.config.manifest import AdapterManifest
from classadapter.exceptions import ConfigError
from classadapter.logger import set_log_level

app = typer.Typer(help="classadapter source preview CLI.")
console = Console()


@app.callback(invoke_without_command=True)
def render(
    manifest: Path = typer.Option(
        ..., "--manifest", exists=True, help="YAML adapter manifest."
    ),
    target: str | None = typer.Option(
        None, "--target", help="Only render this adapter class."
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."
    ),
) -> None:
    """Render every adapter in a manifest without installing it."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        console.print(f"[red]Invalid log level: {escape(log_level)}[/red]")
        raise SystemExit(1)
    set_log_level(log_level.upper())

    try:
        loaded = AdapterManifest.from_yaml(manifest)
    except ConfigError as exc:
        console.print(f"[red]Invalid manifest: {escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    wanted = None
    if target is not None:
        try:
            wanted = normalize_target(target)
        except ValueError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise SystemExit(1) from exc

    rendered = 0
    for builder in loaded.builders():
        if wanted is not None and builder.config.target != wanted:
            continue
        try:
            source = builder.render()
        except ConfigError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise SystemExit(1) from exc
        console.rule(builder.config.target)
        console.print(Syntax(source, "python", line_numbers=False))
        rendered += 1

    if rendered == 0:
        console.print("[yellow]No matching adapters in manifest.[/yellow]")
        raise SystemExit(2)


if __name__ == "__main__":
    app()
