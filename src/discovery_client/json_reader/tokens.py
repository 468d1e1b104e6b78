"""Token types produced by :class:`~discovery_client.json_reader.tokenizer.Tokenizer`."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


class TokenType(enum.Enum):
    OBJECT_START = "{"
    OBJECT_END = "}"
    ARRAY_START = "["
    ARRAY_END = "]"
    NAME_SEPARATOR = ":"
    MEMBER_SEPARATOR = ","
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    UNDEFINED = "undefined"


PUNCTUATION = {
    "{": TokenType.OBJECT_START,
    "}": TokenType.OBJECT_END,
    "[": TokenType.ARRAY_START,
    "]": TokenType.ARRAY_END,
    ":": TokenType.NAME_SEPARATOR,
    ",": TokenType.MEMBER_SEPARATOR,
}


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        type: The token kind.
        value: Raw text for strings, numbers and undefined fragments.
        number: Parsed value for ``NUMBER`` tokens.
        position: Character offset of the token's first character.
    """

    type: TokenType
    value: Optional[str] = None
    number: Optional[Decimal] = None
    position: int = 0
