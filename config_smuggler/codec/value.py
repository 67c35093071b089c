"""Literal-expression value codec.

Responsibilities:
- Render a literal value as canonical literal-expression text.
- Parse literal-expression text back into a value with a recursive-descent
  parser over a closed grammar. Nothing in the text is ever evaluated.

Key types:
- `ValueCodec`: encoder/parser pair with a bounded nesting depth.
- `encode_value`, `decode_value`: module-level helpers using default limits.
"""

from __future__ import annotations

import math
from typing import Any

from ..errors import BadInputError, BadValueError
from ..models.datatypes import OptionList, QualifiedName, Symbol, parse_identifier
from .tokens import Token, tokenize, unescape_string

DEFAULT_MAX_DEPTH = 256

# 1000-digit chunks stay below interpreter limits on int/str conversion.
_CHUNK_DIGITS = 1000
_CHUNK = 10**_CHUNK_DIGITS

_QUOTE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\a": "\\a",
    "\b": "\\b",
    "\x1b": "\\e",
    "\f": "\\f",
    "\v": "\\v",
    "\0": "\\0",
}
_KEYWORD_VALUES = {"true": True, "false": False, "nil": None}


def _int_text(number: int) -> str:
    """Render an integer of any size in decimal."""

    if -_CHUNK < number < _CHUNK:
        return str(number)
    sign = "-" if number < 0 else ""
    remaining = abs(number)
    chunks: list[int] = []
    while remaining:
        remaining, low = divmod(remaining, _CHUNK)
        chunks.append(low)
    head = str(chunks[-1])
    tail = "".join(str(chunk).zfill(_CHUNK_DIGITS) for chunk in reversed(chunks[:-1]))
    return sign + head + tail


def _text_int(text: str) -> int:
    """Parse a decimal integer token of any length."""

    digits = text.replace("_", "")
    negative = digits.startswith("-")
    digits = digits.lstrip("-")
    if len(digits) <= _CHUNK_DIGITS:
        value = int(digits)
    else:
        value = 0
        for start in range(0, len(digits), _CHUNK_DIGITS):
            chunk = digits[start : start + _CHUNK_DIGITS]
            value = value * 10 ** len(chunk) + int(chunk)
    return -value if negative else value


def _float_text(number: float) -> str:
    """Render a finite float in shortest round-trip form, always with a `.`."""

    if not math.isfinite(number):
        raise BadInputError(detail=f"Float `{number!r}` has no literal representation.")
    mantissa, _, exponent = repr(number).partition("e")
    if "." not in mantissa:
        mantissa += ".0"
    if exponent:
        return f"{mantissa}e{int(exponent)}"
    return mantissa


def _quote(text: str) -> str:
    """Render a string as a double-quoted literal with escapes."""

    parts = ['"']
    for index, character in enumerate(text):
        if character in _QUOTE_ESCAPES:
            parts.append(_QUOTE_ESCAPES[character])
        elif character == "#" and text[index + 1 : index + 2] == "{":
            parts.append("\\#")
        elif not character.isprintable():
            parts.append(f"\\u{{{ord(character):X}}}")
        else:
            parts.append(character)
    parts.append('"')
    return "".join(parts)


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, text: str, max_depth: int) -> None:
        self._tokens = tokenize(text)
        self._position = 0
        self._max_depth = max_depth

    def parse_document(self) -> Any:
        value = self._value(0)
        self._expect_end()
        return value

    def parse_arguments(self) -> tuple[list[Any], OptionList | None]:
        if self._peek() is None:
            raise BadValueError(detail="Argument list is empty.")
        values, pairs = self._sequence(0)
        self._expect_end()
        return values, pairs

    def _peek(self) -> Token | None:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise BadValueError(detail="Unexpected end of value text.")
        self._position += 1
        return token

    def _expect(self, kind: str) -> None:
        token = self._advance()
        if token.kind != kind:
            raise BadValueError(
                detail=f"Expected `{kind}` at offset {token.position}, found `{token.text}`."
            )

    def _expect_end(self) -> None:
        token = self._peek()
        if token is not None:
            raise BadValueError(
                detail=f"Unexpected trailing `{token.text}` at offset {token.position}."
            )

    def _value(self, depth: int) -> Any:
        if depth > self._max_depth:
            raise BadValueError(detail=f"Value nesting exceeds {self._max_depth} levels.")
        token = self._advance()
        kind = token.kind
        if kind == "INT":
            return _text_int(token.text)
        if kind == "FLOAT":
            number = float(token.text.replace("_", ""))
            if not math.isfinite(number):
                raise BadValueError(detail=f"Float `{token.text}` is out of range.")
            return number
        if kind == "STRING":
            return unescape_string(token.text[1:-1])
        if kind == "SYMBOL":
            return self._identifier(token.text[1:], Symbol)
        if kind == "QNAME":
            return self._identifier(token.text, QualifiedName)
        if kind == "NAME":
            if token.text in _KEYWORD_VALUES:
                return _KEYWORD_VALUES[token.text]
            raise BadValueError(
                detail=f"Bare name `{token.text}` at offset {token.position} is not a literal."
            )
        if kind == "[":
            return self._list(depth)
        if kind == "{":
            return self._tuple(depth)
        raise BadValueError(detail=f"Unexpected `{token.text}` at offset {token.position}.")

    @staticmethod
    def _identifier(text: str, identifier_type: type) -> Any:
        try:
            return identifier_type(text)
        except ValueError as exc:
            raise BadValueError(detail=str(exc)) from exc

    def _list(self, depth: int) -> Any:
        token = self._peek()
        if token is not None and token.kind == "]":
            self._advance()
            return []
        values, pairs = self._sequence(depth + 1)
        self._expect("]")
        if values and pairs is not None:
            raise BadValueError(detail="A list cannot mix plain values and `key: value` pairs.")
        return pairs if pairs is not None else values

    def _tuple(self, depth: int) -> tuple[Any, ...]:
        token = self._peek()
        if token is not None and token.kind == "}":
            self._advance()
            return ()
        values, pairs = self._sequence(depth + 1)
        self._expect("}")
        if pairs is not None:
            raise BadValueError(detail="A tuple cannot contain `key: value` pairs.")
        return tuple(values)

    def _sequence(self, depth: int) -> tuple[list[Any], OptionList | None]:
        """Parse `value, ..., key: value, ...`; pairs may only trail values."""

        values: list[Any] = []
        pairs: list[tuple[Any, Any]] = []
        while True:
            token = self._peek()
            if token is not None and token.kind == "KEY":
                self._advance()
                key = self._key(token)
                pairs.append((key, self._value(depth)))
            elif pairs:
                raise BadValueError(
                    detail="Plain values cannot follow `key: value` pairs."
                )
            else:
                values.append(self._value(depth))
            token = self._peek()
            if token is None or token.kind != ",":
                break
            self._advance()
        if not pairs:
            return values, None
        try:
            return values, OptionList(tuple(pairs))
        except ValueError as exc:
            raise BadValueError(detail=str(exc)) from exc

    @staticmethod
    def _key(token: Token) -> Any:
        try:
            return parse_identifier(token.text[:-1])
        except ValueError as exc:
            raise BadValueError(detail=f"Invalid option key `{token.text}`: {exc}") from exc


class ValueCodec:
    """Encode literal values to text and parse text back with bounded nesting."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth <= 0:
            raise ValueError("`max_depth` must be a positive integer.")
        self._max_depth = max_depth

    def encode(self, value: Any) -> str:
        """Render a literal value as literal-expression text.

        Raises:
            BadInputError: If the value (or anything nested in it) has no
                literal representation.
        """

        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return _int_text(value)
        if isinstance(value, float):
            return _float_text(value)
        if isinstance(value, str):
            return _quote(value)
        if isinstance(value, Symbol):
            return ":" + value.name
        if isinstance(value, QualifiedName):
            return value.name
        if isinstance(value, OptionList):
            return "[" + ", ".join(f"{key}: {self.encode(item)}" for key, item in value) + "]"
        if isinstance(value, list):
            return "[" + ", ".join(self.encode(item) for item in value) + "]"
        if isinstance(value, tuple):
            return "{" + ", ".join(self.encode(item) for item in value) + "}"
        raise BadInputError(
            detail=f"Value of type `{type(value).__name__}` has no literal representation."
        )

    def decode(self, text: str) -> Any:
        """Parse literal-expression text into a value.

        Raises:
            BadValueError: If the text is not a single literal of the grammar.
        """

        if not isinstance(text, str):
            raise BadValueError(detail="Encoded value must be a string.")
        try:
            return _Parser(text, self._max_depth).parse_document()
        except RecursionError as exc:
            raise BadValueError(detail="Value nesting is too deep to parse.") from exc

    def parse_arguments(self, text: str) -> tuple[list[Any], OptionList | None]:
        """Parse a comma-separated argument list whose trailing items may be pairs.

        Returns:
            Plain positional values and the trailing pairs, or `None` when there
            are no pairs.
        """

        try:
            return _Parser(text, self._max_depth).parse_arguments()
        except RecursionError as exc:
            raise BadValueError(detail="Argument nesting is too deep to parse.") from exc


_DEFAULT_CODEC = ValueCodec()


def encode_value(value: Any) -> str:
    """Encode a literal value with the default codec."""

    return _DEFAULT_CODEC.encode(value)


def decode_value(text: str) -> Any:
    """Decode literal-expression text with the default codec."""

    return _DEFAULT_CODEC.decode(text)
