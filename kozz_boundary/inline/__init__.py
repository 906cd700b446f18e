"""Inline commands — markup embedded in hub message bodies.

- Tokens: plain text and the closed set of command variants
- Parser: body string → token tuple (never fails)
- Registry: optional handler per command, plus the companion object
- Engine: sequential resolution into (companion, rendered text)
"""

from .engine import InlineCommandEngine, Resolution
from .parser import parse, parse_message_body
from .registry import Companion, CommandRegistry, InlineCommandHandler
from .tokens import (
    Bold,
    Command,
    CommandName,
    ContentData,
    InvisibleMention,
    Italic,
    ListItem,
    Mention,
    MentionData,
    Monospace,
    Paragraph,
    PlainText,
    Stroke,
    TagEveryone,
    TagEveryoneData,
    Token,
    Underscore,
)

__all__ = [
    # Engine
    "InlineCommandEngine",
    "Resolution",
    # Parser
    "parse",
    "parse_message_body",
    # Registry
    "Companion",
    "CommandRegistry",
    "InlineCommandHandler",
    # Tokens
    "Token",
    "PlainText",
    "Command",
    "CommandName",
    "MentionData",
    "TagEveryoneData",
    "ContentData",
    "Mention",
    "InvisibleMention",
    "TagEveryone",
    "Bold",
    "Italic",
    "Underscore",
    "Stroke",
    "Paragraph",
    "ListItem",
    "Monospace",
]
