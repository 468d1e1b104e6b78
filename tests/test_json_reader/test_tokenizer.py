"""Tests for the lenient JSON tokenizer."""

from __future__ import annotations

import io
from decimal import Decimal

import pytest

from discovery_client.json_reader import Token, Tokenizer, TokenType


def _types(text: str) -> list[TokenType]:
    return [token.type for token in Tokenizer(text)]


class _FailingStream(io.StringIO):
    """Text stream that raises after yielding its initial content."""

    def read(self, size: int = -1) -> str:
        char = super().read(size)
        if not char:
            raise OSError("connection reset")
        return char


class TestStrings:
    def test_single_quoted_string(self) -> None:
        tokens = list(Tokenizer("'hello'"))
        assert tokens == [Token(TokenType.STRING, value="hello", position=0)]

    def test_double_quoted_string(self) -> None:
        (token,) = Tokenizer('"hello world"')
        assert token.type is TokenType.STRING
        assert token.value == "hello world"

    def test_other_quote_is_kept_verbatim(self) -> None:
        (token,) = Tokenizer("\"it's\"")
        assert token.value == "it's"

    def test_backslash_is_not_interpreted(self) -> None:
        (token,) = Tokenizer('"a\\nb"')
        assert token.value == "a\\nb"

    def test_empty_string(self) -> None:
        (token,) = Tokenizer('""')
        assert token.type is TokenType.STRING
        assert token.value == ""

    def test_unterminated_string_is_undefined(self) -> None:
        (token,) = Tokenizer('"never closed')
        assert token.type is TokenType.UNDEFINED


class TestNumbers:
    def test_decimal_number_followed_by_whitespace(self) -> None:
        (token,) = Tokenizer("123.5 ")
        assert token.type is TokenType.NUMBER
        assert token.number == Decimal("123.5")
        assert token.value == "123.5"

    def test_decimal_number_inside_array(self) -> None:
        tokens = list(Tokenizer("[123.5]"))
        assert tokens[1].type is TokenType.NUMBER
        assert tokens[1].number == Decimal("123.5")

    def test_integer_followed_by_separator(self) -> None:
        tokens = list(Tokenizer("[42]"))
        assert tokens[1].type is TokenType.NUMBER
        assert tokens[1].number == Decimal(42)

    def test_exponent(self) -> None:
        (token,) = Tokenizer("1e3 ")
        assert token.type is TokenType.NUMBER
        assert token.number == Decimal("1000")

    def test_digits_at_end_of_stream_are_undefined(self) -> None:
        # Lenient behaviour kept on purpose: a number cut off by the end of
        # the stream is not an error here, the parser rejects it later.
        assert _types("123") == [TokenType.UNDEFINED]
        (token,) = Tokenizer("123.5")
        assert token.type is TokenType.UNDEFINED
        assert token.value == "123.5"
        assert token.number is None

    def test_digits_running_into_letters_are_undefined(self) -> None:
        # Lenient behaviour: malformed numbers surface as UNDEFINED, not errors.
        (token,) = Tokenizer("12ab ")
        assert token.type is TokenType.UNDEFINED
        assert token.value == "12ab"

    def test_two_decimal_points_are_undefined(self) -> None:
        (token,) = Tokenizer("1.2.3 ")
        assert token.type is TokenType.UNDEFINED

    def test_infinity_spelling_is_undefined(self) -> None:
        assert _types("1Infinity ") == [TokenType.UNDEFINED]

    def test_minus_does_not_start_a_number(self) -> None:
        types = _types("-5 ")
        assert types[0] is TokenType.UNDEFINED
        assert types[1] is TokenType.NUMBER


class TestLiterals:
    @pytest.mark.parametrize(
        "text,expected",
        [("true", TokenType.TRUE), ("false", TokenType.FALSE), ("null", TokenType.NULL)],
    )
    def test_literal(self, text: str, expected: TokenType) -> None:
        assert _types(text) == [expected]

    def test_literal_followed_by_separator(self) -> None:
        assert _types("[true,null]") == [
            TokenType.ARRAY_START,
            TokenType.TRUE,
            TokenType.MEMBER_SEPARATOR,
            TokenType.NULL,
            TokenType.ARRAY_END,
        ]

    def test_misspelled_literal_is_undefined(self) -> None:
        assert _types("tru")[0] is TokenType.UNDEFINED

    def test_literal_without_separator_is_undefined(self) -> None:
        assert _types("nullx")[0] is TokenType.UNDEFINED


class TestStructure:
    def test_punctuation(self) -> None:
        assert _types("{ } [ ] : ,") == [
            TokenType.OBJECT_START,
            TokenType.OBJECT_END,
            TokenType.ARRAY_START,
            TokenType.ARRAY_END,
            TokenType.NAME_SEPARATOR,
            TokenType.MEMBER_SEPARATOR,
        ]

    def test_object_sequence(self) -> None:
        assert _types("{'a': 1}") == [
            TokenType.OBJECT_START,
            TokenType.STRING,
            TokenType.NAME_SEPARATOR,
            TokenType.NUMBER,
            TokenType.OBJECT_END,
        ]

    def test_unknown_character_is_undefined(self) -> None:
        (token,) = Tokenizer("@")
        assert token == Token(TokenType.UNDEFINED, value="@", position=0)

    def test_positions(self) -> None:
        positions = [token.position for token in Tokenizer('  {"k" : 10}')]
        assert positions == [2, 3, 7, 9, 11]


class TestEndOfStream:
    def test_empty_input(self) -> None:
        assert Tokenizer("").next_token() is None

    def test_whitespace_only(self) -> None:
        assert list(Tokenizer(" \n\t ")) == []

    def test_stays_exhausted(self) -> None:
        tokenizer = Tokenizer("1")
        assert tokenizer.next_token() is not None
        assert tokenizer.next_token() is None
        assert tokenizer.next_token() is None

    def test_reads_from_stream(self) -> None:
        assert _types_from(io.StringIO("[1, 2]")) == [
            TokenType.ARRAY_START,
            TokenType.NUMBER,
            TokenType.MEMBER_SEPARATOR,
            TokenType.NUMBER,
            TokenType.ARRAY_END,
        ]

    def test_read_error_is_end_of_stream(self) -> None:
        tokens = list(Tokenizer(_FailingStream("[true")))
        assert [t.type for t in tokens] == [TokenType.ARRAY_START, TokenType.TRUE]


def _types_from(stream: io.StringIO) -> list[TokenType]:
    return [token.type for token in Tokenizer(stream)]
