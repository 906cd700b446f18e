"""Resolution engine — turn a token sequence into rendered text.

Tokens are resolved strictly one after another. Each handler sees the
companion produced by every token before it, so a handler is awaited to
completion before the next token is touched.
"""

import logging
from typing import Any, Iterable, NamedTuple, Optional

from .parser import parse_message_body
from .registry import Companion, CommandRegistry, HandlerResult, maybe_await
from .tokens import Command, PlainText, Token

logger = logging.getLogger("kozz_boundary.inline.engine")


class Resolution(NamedTuple):
    companion: Companion
    rendered: str


class InlineCommandEngine:
    """Resolves parsed message bodies against a command registry."""

    def __init__(self, registry: Optional[CommandRegistry] = None):
        self.registry = registry or CommandRegistry()

    async def resolve(self, tokens: Iterable[Token], context: Any = None) -> Resolution:
        """Resolve tokens left to right.

        Args:
            tokens: Token sequence from ``parse_message_body``.
            context: Inbound payload, passed unchanged to every handler.

        Returns:
            Resolution with the final companion and the concatenated text.

        Raises:
            Whatever a registered handler raises; nothing is retried.
        """
        companion = Companion()
        parts: list[str] = []

        for token in tokens:
            companion, text = await self._resolve_token(token, companion, context)
            parts.append(text)

        return Resolution(companion, "".join(parts))

    async def render(self, body: str, context: Any = None) -> Resolution:
        """Parse and resolve a message body in one call."""
        return await self.resolve(parse_message_body(body), context)

    async def _resolve_token(
        self, token: Token, companion: Companion, context: Any
    ) -> HandlerResult:
        if isinstance(token, PlainText):
            return companion, token.value

        if not isinstance(token, Command):
            raise TypeError(f"Not an inline token: {token!r}")

        handler = self.registry.handler_for(token.name)
        if handler is None:
            logger.warning(
                f"Tried to handle inline command '{token.name.value}' "
                f"but there is no handler registered for it."
            )
            return companion, ""

        result = await maybe_await(handler(companion, token.data, context))
        try:
            new_companion, text = result
        except (TypeError, ValueError):
            raise TypeError(
                f"Handler for '{token.name.value}' must return (Companion, str), got {result!r}"
            ) from None
        if not isinstance(new_companion, Companion) or not isinstance(text, str):
            raise TypeError(
                f"Handler for '{token.name.value}' must return (Companion, str), got {result!r}"
            )
        return new_companion, text
