"""Hand-rolled JSON reader used for discovery documents and error bodies.

Sub-modules:

* :mod:`~discovery_client.json_reader.tokens` -- token kinds.
* :mod:`~discovery_client.json_reader.tokenizer` -- lenient lexer.
* :mod:`~discovery_client.json_reader.parser` -- strict recursive-descent
  parser producing plain Python values.

Typical usage::

    from discovery_client.json_reader import parse

    tree = parse("{'name': 'buzz', 'version': 'v1'}")
"""

from discovery_client.json_reader.parser import JsonReader, JsonValue, parse
from discovery_client.json_reader.tokenizer import Tokenizer
from discovery_client.json_reader.tokens import Token, TokenType

__all__ = ["JsonReader", "JsonValue", "Token", "TokenType", "Tokenizer", "parse"]
