"""Inline command inspection: tokens and render."""

import asyncio
import click

from . import cli
from .shared import console

from rich.markup import escape
from rich.table import Table


@cli.command()
@click.argument("body")
def tokens(body):
    """Show the tokens a message BODY parses into."""
    from kozz_boundary.inline import PlainText, parse_message_body

    table = Table(title="Tokens", show_header=True)
    table.add_column("#", style="dim")
    table.add_column("Kind", style="bold")
    table.add_column("Data")

    for i, token in enumerate(parse_message_body(body)):
        if isinstance(token, PlainText):
            table.add_row(str(i), "text", escape(repr(token.value)))
        else:
            table.add_row(str(i), token.name.value, escape(repr(token.data)))

    console.print(table)


@cli.command()
@click.argument("body")
@click.option(
    "--style",
    type=click.Choice(["plain", "telegram", "whatsapp"]),
    default="plain",
    show_default=True,
    help="Target platform markup",
)
@click.option("--member", "members", multiple=True, help="Chat member id used by {tageveryone} (repeatable)")
def render(body, style, members):
    """Render a message BODY the way a boundary would."""
    from kozz_boundary.communication.formatting import REGISTRY_STYLES
    from kozz_boundary.inline import InlineCommandEngine

    registry = REGISTRY_STYLES[style](members=lambda _context: list(members))
    engine = InlineCommandEngine(registry)
    companion, rendered = asyncio.run(engine.render(body, {"body": body}))

    console.print(rendered, markup=False, highlight=False)
    if companion.mentions:
        console.print(f"[dim]mentions: {escape(', '.join(companion.mentions))}[/dim]")
