"""kozz-boundary — console boundary entry point."""

import asyncio
import logging
import os
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from .boundary import Boundary
from .communication.formatting import plain_registry
from .config import BoundarySettings, load_settings
from .inline.registry import Companion
from .transport import SocketIOTransport

_log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("kozz_boundary")
console = Console()


def setup_logging(settings: BoundarySettings):
    """Log to stderr and to the configured log file."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=_log_format,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(os.path.expanduser(settings.log_file), encoding="utf-8"),
        ],
    )
    # Socket.IO internals are chatty even at INFO
    logging.getLogger("socketio").setLevel(logging.WARNING)
    logging.getLogger("engineio").setLevel(logging.WARNING)


def _print_reply(title: str):
    def reply(payload: dict, companion: Companion, rendered: str):
        subtitle = f"mentions: {', '.join(companion.mentions)}" if companion.mentions else None
        body = Text(rendered) if rendered else Text("(empty)", style="dim")
        console.print(Panel(body, title=title, subtitle=subtitle))

    return reply


def build_console_boundary(settings: BoundarySettings, transport=None) -> Boundary:
    """Boundary that prints everything the hub sends to the terminal."""
    boundary = Boundary(
        transport or SocketIOTransport(),
        platform=settings.platform,
        name=settings.name,
        registry=plain_registry(),
        signing_secret=settings.signing_secret,
    )
    boundary.handle_reply_with_text(_print_reply("reply"))
    boundary.handle_reply_with_media(_print_reply("reply (media)"))
    boundary.handle_reply_with_sticker(_print_reply("reply (sticker)"))
    boundary.handle_send_message(_print_reply("message"))
    boundary.handle_send_message_with_sticker(_print_reply("message (sticker)"))
    boundary.handle_send_message_with_media(
        lambda payload: console.print(f"[bold]media[/bold] {escape(payload.get('body') or '')}")
    )
    boundary.handle_react_message(
        lambda payload: console.print(f"[bold]react[/bold] {escape(str(payload.get('emote', '')))}")
    )
    boundary.handle_delete_message(
        lambda payload: console.print(f"[bold]delete[/bold] {escape(str(payload.get('messageId', '')))}")
    )
    return boundary


async def run(settings: Optional[BoundarySettings] = None):
    """Main run loop."""
    settings = settings or load_settings()
    boundary = build_console_boundary(settings)

    try:
        await boundary.start(settings.url, settings.socket_path)
        logger.info("Boundary is running. Press Ctrl+C to stop.")
        await boundary.transport.wait()
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.critical(f"Fatal error: {type(e).__name__}: {e}", exc_info=True)
    finally:
        await boundary.stop()


def main():
    """Entry point."""
    settings = load_settings()
    setup_logging(settings)
    asyncio.run(run(settings))


if __name__ == "__main__":
    main()
