"""kozz-boundary CLI — command line interface."""

import click
from kozz_boundary import __version__
from .shared import console


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="kozz-boundary")
@click.pass_context
def cli(ctx):
    """kozz-boundary — connect a chat platform to a kozz hub"""
    if ctx.invoked_subcommand is None:
        _show_help()


def _show_help():
    """Show all available commands grouped by category."""
    console.print(f"[bold]kozz-boundary v{__version__}[/bold] — connect a chat platform to a kozz hub\n")

    groups = {
        "Inline commands": [
            ("tokens", "Show how a message body is tokenized"),
            ("render", "Render a message body (--style plain|telegram|whatsapp)"),
        ],
        "Usage": [
            ("start", "Connect a console boundary to the hub"),
        ],
    }

    for category, commands in groups.items():
        console.print(f"  [bold cyan]{category}[/bold cyan]")
        for name, desc in commands:
            console.print(f"    [bold]kozz-boundary {name:8s}[/bold] {desc}")
        console.print()

    console.print("[dim]Run 'kozz-boundary <command> --help' for details on a specific command.[/dim]")


# Import all command modules (registers commands onto cli group)
from . import cmd_render  # noqa: E402, F401
from . import cmd_start  # noqa: E402, F401


@cli.command(name="help", hidden=True)
def help_cmd():
    """Show all available commands."""
    _show_help()


def main():
    """CLI entry point."""
    cli()
