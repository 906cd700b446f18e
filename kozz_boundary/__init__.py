"""kozz-boundary — connect a chat platform to a kozz hub."""

__version__ = "0.1.0"

from .boundary import Boundary  # noqa: E402
from .inline import CommandRegistry, Companion, InlineCommandEngine, parse_message_body  # noqa: E402

__all__ = [
    "__version__",
    "Boundary",
    "CommandRegistry",
    "Companion",
    "InlineCommandEngine",
    "parse_message_body",
]
