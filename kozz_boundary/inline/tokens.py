"""Token types produced by the inline-command parser.

A parsed body is a tuple of tokens. Each token is either a run of
``PlainText`` or one of the ``Command`` variants below. Every variant
pins its own data type, so a command can never carry data that
disagrees with its name.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class CommandName(str, Enum):
    """Closed vocabulary of inline commands (value = marker name)."""

    MENTION = "mention"
    INVISIBLE_MENTION = "invisiblemention"
    TAG_EVERYONE = "tageveryone"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERSCORE = "underscore"
    STROKE = "stroke"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "listitem"
    MONOSPACE = "monospace"


@dataclass(frozen=True)
class PlainText:
    value: str


@dataclass(frozen=True)
class MentionData:
    id: str


@dataclass(frozen=True)
class TagEveryoneData:
    except_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class ContentData:
    content: str


@dataclass(frozen=True)
class Command:
    """Base class for inline commands. Use the concrete variants."""

    name: ClassVar[CommandName]


@dataclass(frozen=True)
class Mention(Command):
    name: ClassVar[CommandName] = CommandName.MENTION
    data: MentionData


@dataclass(frozen=True)
class InvisibleMention(Command):
    name: ClassVar[CommandName] = CommandName.INVISIBLE_MENTION
    data: MentionData


@dataclass(frozen=True)
class TagEveryone(Command):
    name: ClassVar[CommandName] = CommandName.TAG_EVERYONE
    data: TagEveryoneData


@dataclass(frozen=True)
class Bold(Command):
    name: ClassVar[CommandName] = CommandName.BOLD
    data: ContentData


@dataclass(frozen=True)
class Italic(Command):
    name: ClassVar[CommandName] = CommandName.ITALIC
    data: ContentData


@dataclass(frozen=True)
class Underscore(Command):
    name: ClassVar[CommandName] = CommandName.UNDERSCORE
    data: ContentData


@dataclass(frozen=True)
class Stroke(Command):
    name: ClassVar[CommandName] = CommandName.STROKE
    data: ContentData


@dataclass(frozen=True)
class Paragraph(Command):
    name: ClassVar[CommandName] = CommandName.PARAGRAPH
    data: ContentData


@dataclass(frozen=True)
class ListItem(Command):
    name: ClassVar[CommandName] = CommandName.LIST_ITEM
    data: ContentData


@dataclass(frozen=True)
class Monospace(Command):
    name: ClassVar[CommandName] = CommandName.MONOSPACE
    data: ContentData


Token = Union[PlainText, Command]

# Marker name -> variant class
COMMAND_TYPES: dict[CommandName, type[Command]] = {
    cls.name: cls
    for cls in (
        Mention,
        InvisibleMention,
        TagEveryone,
        Bold,
        Italic,
        Underscore,
        Stroke,
        Paragraph,
        ListItem,
        Monospace,
    )
}

MENTION_COMMANDS = frozenset({CommandName.MENTION, CommandName.INVISIBLE_MENTION})
CONTENT_COMMANDS = frozenset(set(CommandName) - MENTION_COMMANDS - {CommandName.TAG_EVERYONE})


def tokens_to_text(tokens) -> str:
    """Concatenate the plain-text values of a token sequence."""
    return "".join(t.value for t in tokens if isinstance(t, PlainText))
