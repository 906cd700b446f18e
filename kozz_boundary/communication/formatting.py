"""Ready-made command registries for common chat platforms.

Telegram supports a limited HTML subset:
  <b>bold</b>, <i>italic</i>, <u>underline</u>, <s>strikethrough</s>,
  <code>inline code</code>, <a href="tg://user?id=...">mention</a>

WhatsApp uses its own lightweight markup:
  *bold*, _italic_, ~strikethrough~, ```monospace```
  (no underline — content is passed through)

Plain rendering drops all formatting and keeps the content.

Mention handlers append the mentioned id to the companion; the platform
send function uses ``companion.mentions`` to notify those users.
"""

import html as _html
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from ..inline.registry import Companion, CommandRegistry, maybe_await
from ..inline.tokens import ContentData, MentionData, TagEveryoneData

# (user id, inbound payload) -> display name
DisplayNameResolver = Callable[[str, Any], Union[str, Awaitable[str]]]
# (inbound payload) -> member ids of the chat the payload targets
MembersResolver = Callable[[Any], Union[Iterable[str], Awaitable[Iterable[str]]]]


def _escape(text: str) -> str:
    """Escape HTML special characters in plain text segments."""
    return _html.escape(text, quote=False)


def _default_display_name(user_id: str, context: Any) -> str:
    return user_id


def _no_members(context: Any) -> list[str]:
    return []


def _mention_handlers(
    render_mention: Callable[[str, str], str],
    display_name: Optional[DisplayNameResolver],
    members: Optional[MembersResolver],
) -> dict[str, Callable]:
    """Build mention, invisiblemention and tageveryone handlers."""
    resolve_name = display_name or _default_display_name
    list_members = members or _no_members

    async def mention(companion: Companion, data: MentionData, context: Any):
        name = await maybe_await(resolve_name(data.id, context))
        return companion.with_mention(data.id), render_mention(data.id, name)

    async def invisiblemention(companion: Companion, data: MentionData, context: Any):
        return companion.with_mention(data.id), ""

    async def tageveryone(companion: Companion, data: TagEveryoneData, context: Any):
        skip = set(data.except_ids) | set(companion.mentions)
        ids = []
        for member_id in await maybe_await(list_members(context)):
            if member_id in skip:
                continue
            skip.add(member_id)
            ids.append(member_id)
        return companion.with_mentions(ids), ""

    return {
        "mention": mention,
        "invisiblemention": invisiblemention,
        "tageveryone": tageveryone,
    }


def _wrap(template: str, escape: Callable[[str], str] = lambda s: s):
    """Handler rendering ``template`` with the command's content."""
    def handler(companion: Companion, data: ContentData, context: Any):
        return companion, template.format(escape(data.content))

    return handler


# ============================================================
# TELEGRAM (HTML parse mode)
# ============================================================

def _telegram_mention(user_id: str, name: str) -> str:
    return f'<a href="tg://user?id={_html.escape(user_id)}">{_escape(name)}</a>'


def telegram_html_registry(
    display_name: Optional[DisplayNameResolver] = None,
    members: Optional[MembersResolver] = None,
) -> CommandRegistry:
    """Registry rendering inline commands as Telegram HTML."""
    return CommandRegistry.from_mapping({
        **_mention_handlers(_telegram_mention, display_name, members),
        "bold": _wrap("<b>{}</b>", _escape),
        "italic": _wrap("<i>{}</i>", _escape),
        "underscore": _wrap("<u>{}</u>", _escape),
        "stroke": _wrap("<s>{}</s>", _escape),
        "monospace": _wrap("<code>{}</code>", _escape),
        "paragraph": _wrap("{}\n\n", _escape),
        "listitem": _wrap("• {}\n", _escape),
    })


# ============================================================
# WHATSAPP
# ============================================================

def whatsapp_registry(
    display_name: Optional[DisplayNameResolver] = None,
    members: Optional[MembersResolver] = None,
) -> CommandRegistry:
    """Registry rendering inline commands as WhatsApp markup."""
    return CommandRegistry.from_mapping({
        **_mention_handlers(lambda _id, name: f"@{name}", display_name, members),
        "bold": _wrap("*{}*"),
        "italic": _wrap("_{}_"),
        "underscore": _wrap("{}"),
        "stroke": _wrap("~{}~"),
        "monospace": _wrap("```{}```"),
        "paragraph": _wrap("{}\n\n"),
        "listitem": _wrap("- {}\n"),
    })


# ============================================================
# PLAIN TEXT
# ============================================================

def plain_registry(
    display_name: Optional[DisplayNameResolver] = None,
    members: Optional[MembersResolver] = None,
) -> CommandRegistry:
    """Registry that drops formatting and keeps content only."""
    return CommandRegistry.from_mapping({
        **_mention_handlers(lambda _id, name: f"@{name}", display_name, members),
        "bold": _wrap("{}"),
        "italic": _wrap("{}"),
        "underscore": _wrap("{}"),
        "stroke": _wrap("{}"),
        "monospace": _wrap("{}"),
        "paragraph": _wrap("{}\n\n"),
        "listitem": _wrap("• {}\n"),
    })


REGISTRY_STYLES: dict[str, Callable[..., CommandRegistry]] = {
    "plain": plain_registry,
    "telegram": telegram_html_registry,
    "whatsapp": whatsapp_registry,
}
