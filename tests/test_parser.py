"""Tests for the inline-command parser."""

import time

import pytest

from kozz_boundary.inline import (
    Bold,
    CommandName,
    ContentData,
    InvisibleMention,
    Italic,
    Mention,
    MentionData,
    Paragraph,
    PlainText,
    TagEveryone,
    TagEveryoneData,
    parse,
    parse_message_body,
)
from kozz_boundary.inline.tokens import COMMAND_TYPES, CONTENT_COMMANDS, tokens_to_text


class TestPlainText:
    """Bodies without well-formed commands come back verbatim."""

    def test_empty_body(self):
        assert parse_message_body("") == ()

    def test_simple_text(self):
        assert parse_message_body("hello world") == (PlainText("hello world"),)

    @pytest.mark.parametrize("body", [
        "just text",
        "{",
        "}",
        "{}",
        "{{}}",
        "{unknown:x}",
        "{BOLD:x}",
        "{ bold:x}",
        "{bold",
        "{bold:abc",
        "{bold}",
        "{mention}",
        "{mention:}",
        "{mention:a b}",
        "{tageveryone:a b}",
        "{italic x}",
        "a \\{bold:x\\} b",
        "set = {1, 2, 3}",
        "emoji 🎉 and ünïcödé",
        "line one\nline two\n",
    ])
    def test_identity_without_commands(self, body):
        tokens = parse_message_body(body)
        assert all(isinstance(t, PlainText) for t in tokens)
        assert tokens_to_text(tokens) == body

    def test_deterministic(self):
        body = "Hi {mention:u1} {bold:x} {nope:y}"
        assert parse_message_body(body) == parse_message_body(body)

    def test_alias(self):
        assert parse is parse_message_body


class TestMentions:
    def test_mention_in_sentence(self):
        assert parse_message_body("Hello {mention:u1}, welcome!") == (
            PlainText("Hello "),
            Mention(MentionData("u1")),
            PlainText(", welcome!"),
        )

    def test_invisible_mention(self):
        assert parse_message_body("{invisiblemention:5511@c.us}") == (
            InvisibleMention(MentionData("5511@c.us")),
        )

    def test_mention_id_is_stripped(self):
        assert parse_message_body("{mention: u1 }") == (Mention(MentionData("u1")),)

    def test_tag_everyone_without_exceptions(self):
        assert parse_message_body("{tageveryone}") == (TagEveryone(TagEveryoneData(())),)

    def test_tag_everyone_with_exceptions(self):
        tokens = parse_message_body("{tageveryone: a, b,,c }")
        assert tokens == (TagEveryone(TagEveryoneData(("a", "b", "c"))),)

    def test_tag_everyone_empty_exception_list(self):
        assert parse_message_body("{tageveryone:}") == (TagEveryone(TagEveryoneData(())),)


class TestFormatting:
    @pytest.mark.parametrize("name", sorted(CONTENT_COMMANDS, key=lambda n: n.value))
    def test_every_content_command(self, name):
        tokens = parse_message_body(f"{{{name.value}:x}}")
        assert tokens == (COMMAND_TYPES[name](ContentData("x")),)
        assert tokens[0].name == name

    def test_content_is_not_retokenized(self):
        tokens = parse_message_body("{bold:hi {mention:u1}}")
        assert tokens == (Bold(ContentData("hi {mention:u1}")),)

    def test_escaped_braces(self):
        assert parse_message_body("{bold:a\\}b\\{c\\\\}") == (Bold(ContentData("a}b{c\\")),)

    def test_backslash_before_other_char_is_kept(self):
        assert parse_message_body("{bold:a\\nb}") == (Bold(ContentData("a\\nb")),)

    def test_empty_content(self):
        assert parse_message_body("{bold:}") == (Bold(ContentData("")),)

    def test_multiline_content(self):
        assert parse_message_body("{paragraph:one\ntwo}") == (Paragraph(ContentData("one\ntwo")),)

    def test_adjacent_commands(self):
        assert parse_message_body("{bold:a}{italic:b}") == (
            Bold(ContentData("a")),
            Italic(ContentData("b")),
        )


class TestDegradation:
    """Malformed markup degrades to text without hiding valid commands."""

    def test_command_inside_unknown_command(self):
        assert parse_message_body("{foo:{mention:u1}}") == (
            PlainText("{foo:"),
            Mention(MentionData("u1")),
            PlainText("}"),
        )

    def test_stray_open_brace_before_command(self):
        assert parse_message_body("{{mention:u1}") == (
            PlainText("{"),
            Mention(MentionData("u1")),
        )

    def test_unterminated_command_around_valid_one(self):
        assert parse_message_body("{bold:x {mention:u1}") == (
            PlainText("{bold:x "),
            Mention(MentionData("u1")),
        )

    def test_text_is_preserved_around_commands(self):
        body = "a {nope} b {bold:c} d"
        tokens = parse_message_body(body)
        assert tokens == (PlainText("a {nope} b "), Bold(ContentData("c")), PlainText(" d"))

    def test_command_names_are_closed(self):
        assert {name.value for name in CommandName} == {
            "mention", "invisiblemention", "tageveryone", "bold", "italic",
            "underscore", "stroke", "paragraph", "listitem", "monospace",
        }


class TestLargeBodies:
    """Parsing stays linear in the body length."""

    LIMIT_SECONDS = 2.0

    def _timed_parse(self, body):
        started = time.perf_counter()
        tokens = parse_message_body(body)
        return tokens, time.perf_counter() - started

    def test_many_unterminated_openers(self):
        body = "{bold:" * 50_000
        tokens, elapsed = self._timed_parse(body)
        assert elapsed < self.LIMIT_SECONDS
        assert all(isinstance(t, PlainText) for t in tokens)
        assert tokens_to_text(tokens) == body

    def test_many_mentions_with_invalid_data(self):
        body = "{mention:a b " * 50_000
        tokens, elapsed = self._timed_parse(body)
        assert elapsed < self.LIMIT_SECONDS
        assert tokens_to_text(tokens) == body

    def test_nested_mention_openers(self):
        body = "{mention:" * 20_000 + "u1" + "}" * 20_000
        tokens, elapsed = self._timed_parse(body)
        assert elapsed < self.LIMIT_SECONDS
        assert tokens == (
            PlainText("{mention:" * 19_999),
            Mention(MentionData("u1")),
            PlainText("}" * 19_999),
        )

    def test_many_valid_commands(self):
        body = "{bold:x} {mention:u1} " * 20_000
        tokens, elapsed = self._timed_parse(body)
        assert elapsed < self.LIMIT_SECONDS
        assert tokens.count(Bold(ContentData("x"))) == 20_000
        assert tokens.count(Mention(MentionData("u1"))) == 20_000

    def test_unterminated_openers_before_valid_command(self):
        body = "{italic:" * 1000 + "{bold:a \\} b}"
        tokens = parse_message_body(body)
        assert tokens[-1] == Bold(ContentData("a } b"))
        assert tokens_to_text(tokens[:-1]) == "{italic:" * 1000
