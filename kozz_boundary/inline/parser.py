"""Inline-command parser — message body string → token sequence.

Grammar:
  {name}                 — command without data (only ``tageveryone``)
  {name:data}            — command with data

  {mention:<id>}             — visible mention
  {invisiblemention:<id>}    — mention without visible text
  {tageveryone}              — tag every member
  {tageveryone:<id>,<id>}    — tag every member except the listed ids
  {bold:<content>}           — also italic, underscore, stroke,
                               paragraph, listitem, monospace

Data runs up to the brace that balances the opening one, so
``{bold:a {b} c}`` captures ``a {b} c``. Inside data, ``\\{``, ``\\}``
and ``\\\\`` stand for literal characters and do not count as braces.

Parsing never fails. A ``{`` that does not start a well-formed command
is kept as plain text and scanning resumes right after it.
"""

import re
from typing import Optional

from .tokens import (
    COMMAND_TYPES,
    CONTENT_COMMANDS,
    MENTION_COMMANDS,
    CommandName,
    Command,
    ContentData,
    MentionData,
    PlainText,
    TagEveryoneData,
    Token,
)

_OPEN = "{"
_CLOSE = "}"
_SEPARATOR = ":"
_ESCAPE = "\\"
_ESCAPABLE = frozenset((_OPEN, _CLOSE, _ESCAPE))
_EXCEPT_SEPARATOR = ","

_NAME_RE = re.compile(r"[a-z]{1,16}")
_ID_RE = re.compile(r"[^\s{}]+")
_ESCAPE_RE = re.compile(r"\\([{}\\])")


def parse_message_body(body: str) -> tuple[Token, ...]:
    """Split a message body into plain-text and command tokens.

    Runs in time linear in ``len(body)``: where each command's data
    closes is looked up in a :class:`_BraceIndex` built once per body.

    Args:
        body: Raw message body as sent by the hub.

    Returns:
        Tuple of tokens in body order. Empty input gives an empty tuple.
    """
    if not body:
        return ()

    pos = body.find(_OPEN)
    if pos == -1:
        return (PlainText(body),)

    index = _BraceIndex(body)
    tokens: list[Token] = []
    start = 0  # beginning of the pending plain-text run

    while pos != -1:
        scanned = _scan_command(body, pos, index)
        if scanned is None:
            pos = body.find(_OPEN, pos + 1)
            continue

        command, end = scanned
        if pos > start:
            tokens.append(PlainText(body[start:pos]))
        tokens.append(command)
        start = end
        pos = body.find(_OPEN, end)

    if start < len(body):
        tokens.append(PlainText(body[start:]))

    return tuple(tokens)


# Short alias used across the package
parse = parse_message_body


class _BraceIndex:
    """Brace positions of one body, precomputed in two linear passes.

    Escape pairs are read left to right from the start of the body. Data
    always begins right after ``name:``, and ``:`` is never escapable, so
    this pairing agrees with a scan that starts at any data start.
    """

    def __init__(self, body: str):
        n = len(body)
        # balance[i]: unescaped "{" minus unescaped "}" in body[:i]
        balance = [0] * (n + 1)
        is_close = [False] * n
        depth = 0
        i = 0
        while i < n:
            ch = body[i]
            if ch == _ESCAPE and i + 1 < n and body[i + 1] in _ESCAPABLE:
                balance[i + 1] = depth
                balance[i + 2] = depth
                i += 2
                continue
            if ch == _OPEN:
                depth += 1
            elif ch == _CLOSE:
                depth -= 1
                is_close[i] = True
            i += 1
            balance[i] = depth

        # Right to left: first close that drops the balance to each level,
        # and the first raw brace of either kind.
        closing: list[Optional[int]] = [None] * n
        next_brace: list[Optional[int]] = [None] * n
        first_drop: dict[int, int] = {}
        brace: Optional[int] = None
        for i in range(n - 1, -1, -1):
            if is_close[i]:
                first_drop[balance[i + 1]] = i
            if body[i] == _OPEN or body[i] == _CLOSE:
                brace = i
            closing[i] = first_drop.get(balance[i] - 1)
            next_brace[i] = brace

        self._is_close = is_close
        self._closing = closing
        self._next_brace = next_brace

    def balancing_close(self, start: int) -> Optional[int]:
        """Index of the close brace ending data that starts at ``start``."""
        if start >= len(self._closing):
            return None
        return self._closing[start]

    def plain_close(self, start: int) -> Optional[int]:
        """Index of the close brace ending brace-free data at ``start``.

        None when a ``{`` or an escaped ``}`` comes first.
        """
        if start >= len(self._next_brace):
            return None
        brace = self._next_brace[start]
        if brace is None or not self._is_close[brace]:
            return None
        return brace


def _scan_command(body: str, pos: int, index: _BraceIndex) -> Optional[tuple[Command, int]]:
    """Try to read a command whose opening brace is at ``pos``.

    Returns (command, index after closing brace), or None if the text
    at ``pos`` is not a well-formed command.
    """
    match = _NAME_RE.match(body, pos + 1)
    if match is None:
        return None
    try:
        name = CommandName(match.group())
    except ValueError:
        return None

    cursor = match.end()
    if cursor >= len(body):
        return None

    if body[cursor] == _CLOSE:
        raw, end = None, cursor + 1
    elif body[cursor] == _SEPARATOR:
        data_start = cursor + 1
        # Ids never contain braces, so their data ends at the first one
        if name in CONTENT_COMMANDS:
            close = index.balancing_close(data_start)
        else:
            close = index.plain_close(data_start)
        if close is None:
            return None
        raw, end = _unescape(body[data_start:close]), close + 1
    else:
        return None

    command = _build_command(name, raw)
    if command is None:
        return None
    return command, end


def _unescape(data: str) -> str:
    return _ESCAPE_RE.sub(r"\1", data)


def _build_command(name: CommandName, raw: Optional[str]) -> Optional[Command]:
    """Validate raw data for ``name`` and build the matching variant."""
    cls = COMMAND_TYPES[name]

    if name in MENTION_COMMANDS:
        user_id = _parse_id(raw)
        if user_id is None:
            return None
        return cls(MentionData(user_id))

    if name == CommandName.TAG_EVERYONE:
        if raw is None:
            return cls(TagEveryoneData())
        except_ids = []
        for item in raw.split(_EXCEPT_SEPARATOR):
            if not item.strip():
                continue
            user_id = _parse_id(item)
            if user_id is None:
                return None
            except_ids.append(user_id)
        return cls(TagEveryoneData(tuple(except_ids)))

    if name in CONTENT_COMMANDS:
        if raw is None:
            return None
        return cls(ContentData(raw))

    return None


def _parse_id(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    candidate = raw.strip()
    if not _ID_RE.fullmatch(candidate):
        return None
    return candidate
