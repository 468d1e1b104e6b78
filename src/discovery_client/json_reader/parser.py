"""Strict recursive-descent JSON parser over :class:`Tokenizer` output.

The tokenizer is lenient; this module is where malformed input is rejected.
Every call to :func:`parse` materialises one complete value tree made of
plain Python objects:

=========== ==========================
JSON        Python
=========== ==========================
object      ``dict`` (insertion order)
array       ``list``
string      ``str``
number      ``decimal.Decimal``
true/false  ``bool``
null        ``None``
=========== ==========================

Any unexpected token raises :class:`~discovery_client.exceptions.JsonSyntaxError`
carrying the offset of the offending token.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, TextIO, Union

from discovery_client.exceptions import JsonSyntaxError
from discovery_client.json_reader.tokenizer import Tokenizer
from discovery_client.json_reader.tokens import Token, TokenType

JsonValue = Union[None, bool, Decimal, str, list, dict]

_SCALARS = {
    TokenType.TRUE: True,
    TokenType.FALSE: False,
    TokenType.NULL: None,
}


def parse(source: Union[str, TextIO]) -> JsonValue:
    """Parse a complete JSON document.

    Args:
        source: JSON text or a readable text stream.

    Returns:
        The root value of the document.

    Raises:
        JsonSyntaxError: If the input is empty, malformed, or has trailing
            tokens after the root value.
    """
    return JsonReader(Tokenizer(source)).parse()


class JsonReader:
    """Consumes tokens from a :class:`Tokenizer` and builds a value tree.

    A reader is single-use: :meth:`parse` drains the tokenizer it was given.
    Objects and arrays may nest at most :attr:`MAX_DEPTH` levels deep.
    """

    MAX_DEPTH = 200

    def __init__(self, tokenizer: Tokenizer) -> None:
        self._tokens = tokenizer

    def parse(self) -> JsonValue:
        token = self._tokens.next_token()
        if token is None:
            raise JsonSyntaxError("Empty JSON document", 0)
        value = self._parse_value(token, 0)
        trailing = self._tokens.next_token()
        if trailing is not None:
            raise JsonSyntaxError(
                f"Unexpected {_describe(trailing)} after end of document",
                trailing.position,
            )
        return value

    def _next(self, context: str) -> Token:
        token = self._tokens.next_token()
        if token is None:
            raise JsonSyntaxError(
                f"Unexpected end of input {context}", self._tokens.position
            )
        return token

    def _parse_value(self, token: Token, depth: int) -> JsonValue:
        if token.type in (TokenType.OBJECT_START, TokenType.ARRAY_START):
            if depth >= self.MAX_DEPTH:
                raise JsonSyntaxError("Nesting too deep", token.position)
            if token.type is TokenType.OBJECT_START:
                return self._parse_object(token, depth + 1)
            return self._parse_array(token, depth + 1)
        if token.type is TokenType.STRING:
            return token.value
        if token.type is TokenType.NUMBER:
            return token.number
        if token.type in _SCALARS:
            return _SCALARS[token.type]
        raise JsonSyntaxError(
            f"Expected a value but found {_describe(token)}", token.position
        )

    def _parse_object(self, start: Token, depth: int) -> dict:
        result: dict = {}
        token = self._next("inside object")
        if token.type is TokenType.OBJECT_END:
            return result

        while True:
            if token.type is not TokenType.STRING:
                raise JsonSyntaxError(
                    f"Expected a member name but found {_describe(token)}",
                    token.position,
                )
            name = token.value
            if name in result:
                raise JsonSyntaxError(f"Duplicate member name '{name}'", token.position)

            separator = self._next(f"after member name '{name}'")
            if separator.type is not TokenType.NAME_SEPARATOR:
                raise JsonSyntaxError(
                    f"Expected ':' after member name '{name}' but found {_describe(separator)}",
                    separator.position,
                )
            result[name] = self._parse_value(self._next(f"for member '{name}'"), depth)

            token = self._next("inside object")
            if token.type is TokenType.OBJECT_END:
                return result
            if token.type is not TokenType.MEMBER_SEPARATOR:
                raise JsonSyntaxError(
                    f"Expected ',' or '}}' in object opened at offset {start.position} "
                    f"but found {_describe(token)}",
                    token.position,
                )
            token = self._next("inside object")

    def _parse_array(self, start: Token, depth: int) -> list:
        result: list = []
        token = self._next("inside array")
        if token.type is TokenType.ARRAY_END:
            return result

        while True:
            result.append(self._parse_value(token, depth))
            token = self._next("inside array")
            if token.type is TokenType.ARRAY_END:
                return result
            if token.type is not TokenType.MEMBER_SEPARATOR:
                raise JsonSyntaxError(
                    f"Expected ',' or ']' in array opened at offset {start.position} "
                    f"but found {_describe(token)}",
                    token.position,
                )
            token = self._next("inside array")


def _describe(token: Optional[Token]) -> str:
    if token is None:
        return "end of input"
    if token.type is TokenType.UNDEFINED:
        return f"unrecognised input '{token.value}'"
    if token.type in (TokenType.STRING, TokenType.NUMBER):
        return f"{token.type.value} '{token.value}'"
    return f"'{token.type.value}'"
