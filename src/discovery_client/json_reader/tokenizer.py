"""Lenient JSON lexer.

:class:`Tokenizer` turns a character source into a lazy, finite sequence of
:class:`~discovery_client.json_reader.tokens.Token` objects. It never raises
on malformed input: fragments it cannot classify come out as
``TokenType.UNDEFINED`` and the parser decides whether that is an error.

Lexing rules:

* Whitespace between tokens is skipped.
* ``{ } [ ] : ,`` are single-character tokens.
* A ``"`` or ``'`` starts a string that runs verbatim to the matching quote.
  Escape sequences are not interpreted.
* ``true``, ``false`` and ``null`` must be followed by a separator (any
  non-alphanumeric character, or the end of input).
* A digit starts a number. Characters are accumulated while they look like
  part of a number (alphanumerics plus ``. + -``) and the result is handed to
  :class:`decimal.Decimal`. A fragment that does not parse stays
  ``UNDEFINED``, and so does a number cut off by the end of input: only a
  following separator character closes a number.
* An ``OSError`` raised by the underlying stream is treated as end of input.
"""

from __future__ import annotations

import io
import logging
from decimal import Decimal, InvalidOperation
from typing import Iterator, Optional, TextIO, Union

from discovery_client.json_reader.tokens import PUNCTUATION, Token, TokenType

logger = logging.getLogger(__name__)

_QUOTES = ('"', "'")
_LITERALS = {
    "t": ("rue", TokenType.TRUE),
    "f": ("alse", TokenType.FALSE),
    "n": ("ull", TokenType.NULL),
}
_NUMBER_PUNCTUATION = frozenset(".+-")


def _is_separator(char: str) -> bool:
    """Return True if *char* ends a literal. The empty string is end of input."""
    return not char.isalnum()


def _continues_number(char: str) -> bool:
    return char != "" and (char.isalnum() or char in _NUMBER_PUNCTUATION)


class Tokenizer:
    """Single-pass tokenizer over a string or text stream.

    The tokenizer is iterable, but not restartable: once a token has been
    produced the underlying characters are gone.

    Args:
        source: JSON text, or a readable text stream.

    Example::

        tokens = list(Tokenizer("{'a': 1}"))
        [t.type for t in tokens]
        # [OBJECT_START, STRING, NAME_SEPARATOR, NUMBER, OBJECT_END]
    """

    def __init__(self, source: Union[str, TextIO]) -> None:
        self._reader: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self._lookahead: Optional[str] = None
        self._exhausted = False
        self._position = 0

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token

    @property
    def position(self) -> int:
        """Offset of the next unread character."""
        return self._position

    def next_token(self) -> Optional[Token]:
        """Read the next token, or return ``None`` once only whitespace remains."""
        while self._peek() != "" and self._peek().isspace():
            self._read()

        start = self._position
        char = self._read()
        if char == "":
            return None

        punctuation = PUNCTUATION.get(char)
        if punctuation is not None:
            return Token(punctuation, position=start)

        if char in _QUOTES:
            return self._read_string(char, start)

        literal = _LITERALS.get(char)
        if literal is not None:
            suffix, token_type = literal
            if self._match_literal(suffix):
                return Token(token_type, position=start)
            return Token(TokenType.UNDEFINED, value=char, position=start)

        if char.isdigit():
            return self._read_number(char, start)

        return Token(TokenType.UNDEFINED, value=char, position=start)

    # ------------------------------------------------------------------ #
    # Token readers
    # ------------------------------------------------------------------ #

    def _read_string(self, quote: str, start: int) -> Token:
        chars: list[str] = []
        while True:
            char = self._read()
            if char == "":
                # Unterminated string: let the parser report it.
                return Token(TokenType.UNDEFINED, value=quote + "".join(chars), position=start)
            if char == quote:
                return Token(TokenType.STRING, value="".join(chars), position=start)
            chars.append(char)

    def _match_literal(self, suffix: str) -> bool:
        for expected in suffix:
            if self._read() != expected:
                return False
        return _is_separator(self._peek())

    def _read_number(self, first: str, start: int) -> Token:
        chars = [first]
        while _continues_number(self._peek()):
            chars.append(self._read())
        text = "".join(chars)
        if self._peek() == "":
            return Token(TokenType.UNDEFINED, value=text, position=start)
        try:
            number = Decimal(text)
        except InvalidOperation:
            return Token(TokenType.UNDEFINED, value=text, position=start)
        if not number.is_finite():
            return Token(TokenType.UNDEFINED, value=text, position=start)
        return Token(TokenType.NUMBER, value=text, number=number, position=start)

    # ------------------------------------------------------------------ #
    # Character access
    # ------------------------------------------------------------------ #

    def _peek(self) -> str:
        if self._lookahead is None:
            self._lookahead = self._read_raw()
        return self._lookahead

    def _read(self) -> str:
        if self._lookahead is not None:
            char, self._lookahead = self._lookahead, None
        else:
            char = self._read_raw()
        if char:
            self._position += 1
        return char

    def _read_raw(self) -> str:
        if self._exhausted:
            return ""
        try:
            char = self._reader.read(1)
        except OSError as exc:
            logger.debug("Read failed at offset %d, treating as end of input: %s", self._position, exc)
            char = ""
        if not char:
            self._exhausted = True
        return char
