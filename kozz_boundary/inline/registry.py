"""Command registry — which inline commands a boundary knows how to render."""

import inspect
from dataclasses import dataclass, fields
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional, TypeVar, Union

from .tokens import CommandName, ContentData, MentionData, TagEveryoneData

_D = TypeVar("_D")


@dataclass(frozen=True, init=False, repr=False)
class Companion:
    """Side-channel data accumulated while resolving one message.

    Mentions are stored as a tuple, so a companion is hashable and cannot
    change once built. ``mentions`` hands out a fresh list each time;
    editing that list does not touch the companion. Use
    :meth:`with_mention` / :meth:`with_mentions` to get an updated one.
    """

    _mentions: tuple[str, ...]

    def __init__(self, mentions: Iterable[str] = ()):
        object.__setattr__(self, "_mentions", tuple(mentions))

    def __repr__(self) -> str:
        return f"Companion(mentions={list(self._mentions)!r})"

    @property
    def mentions(self) -> list[str]:
        return list(self._mentions)

    def with_mention(self, user_id: str) -> "Companion":
        return Companion((*self._mentions, user_id))

    def with_mentions(self, user_ids: Iterable[str]) -> "Companion":
        return Companion((*self._mentions, *user_ids))


HandlerResult = tuple[Companion, str]

# (companion, command data, inbound payload) -> (new companion, replacement text)
InlineCommandHandler = Callable[
    [Companion, _D, Any],
    Union[HandlerResult, Awaitable[HandlerResult]],
]


@dataclass(frozen=True)
class CommandRegistry:
    """One optional handler per command in the vocabulary.

    Field names equal the marker names. A command left as ``None`` is
    not rendered by this boundary and resolves to an empty string.
    """

    mention: Optional[InlineCommandHandler[MentionData]] = None
    invisiblemention: Optional[InlineCommandHandler[MentionData]] = None
    tageveryone: Optional[InlineCommandHandler[TagEveryoneData]] = None
    bold: Optional[InlineCommandHandler[ContentData]] = None
    italic: Optional[InlineCommandHandler[ContentData]] = None
    underscore: Optional[InlineCommandHandler[ContentData]] = None
    stroke: Optional[InlineCommandHandler[ContentData]] = None
    paragraph: Optional[InlineCommandHandler[ContentData]] = None
    listitem: Optional[InlineCommandHandler[ContentData]] = None
    monospace: Optional[InlineCommandHandler[ContentData]] = None

    @classmethod
    def from_mapping(cls, handlers: Mapping[str, Callable]) -> "CommandRegistry":
        """Build a registry from a ``{marker name: handler}`` mapping.

        Raises:
            ValueError: If a key is not a known command name.
        """
        normalized = {
            (key.value if isinstance(key, CommandName) else key): handler
            for key, handler in handlers.items()
        }
        unknown = sorted(str(key) for key in normalized if key not in _FIELD_NAMES)
        if unknown:
            raise ValueError(f"Unknown inline command(s): {', '.join(unknown)}")
        return cls(**normalized)

    def handler_for(self, name: CommandName) -> Optional[InlineCommandHandler]:
        return getattr(self, name.value)

    def supported(self) -> frozenset[CommandName]:
        """Command names that have a handler."""
        return frozenset(name for name in CommandName if self.handler_for(name) is not None)


_FIELD_NAMES = frozenset(f.name for f in fields(CommandRegistry))


async def maybe_await(value):
    """Await ``value`` if it is awaitable, otherwise return it as-is."""
    if inspect.isawaitable(value):
        return await value
    return value
