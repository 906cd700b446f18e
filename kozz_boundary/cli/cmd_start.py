"""Start command."""

import asyncio
import click

from . import cli
from .shared import console


@cli.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--url", default=None, help="Hub URL (overrides KOZZ_URL)")
@click.option("--name", default=None, help="Boundary name (overrides KOZZ_NAME)")
def start(debug, url, name):
    """Connect a console boundary to the hub."""
    from kozz_boundary.config import load_settings
    from kozz_boundary.main import run, setup_logging

    overrides = {k: v for k, v in {"url": url, "name": name}.items() if v}
    if debug:
        overrides["debug"] = True
    settings = load_settings(**overrides)
    setup_logging(settings)

    console.print(f"[bold blue]Starting boundary '{settings.name}' → {settings.url}...[/bold blue]")
    asyncio.run(run(settings))
