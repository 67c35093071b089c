"""Tokenizer for the closed literal-expression language.

Responsibilities:
- Split encoded value text into typed tokens.
- Resolve string escape sequences without evaluating anything.

Key types:
- `Token`: one lexical unit with its source offset.
- `tokenize`: text → list of tokens, raising `BadValueError` on unknown input.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from ..errors import BadValueError

_IDENT = r"[a-z_][A-Za-z0-9_]*[?!]?"
_QNAME = r"[A-Z][A-Za-z0-9_]*(?:\.[A-Z][A-Za-z0-9_]*)*"
_DIGITS = r"[0-9](?:_?[0-9])*"

_TOKEN_PATTERN = re.compile(
    rf"""
    (?P<WS>\s+)
    |(?P<FLOAT>-?{_DIGITS}\.{_DIGITS}(?:[eE][-+]?[0-9]+)?)
    |(?P<INT>-?{_DIGITS})
    |(?P<STRING>"(?:[^"\\]|\\.)*")
    |(?P<KEY>(?:{_IDENT}|{_QNAME}):(?!:))
    |(?P<SYMBOL>:{_IDENT})
    |(?P<QNAME>{_QNAME})
    |(?P<NAME>{_IDENT})
    |(?P<PUNCT>[\[\]{{}},])
    """,
    re.VERBOSE | re.DOTALL,
)

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "#": "#",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "f": "\f",
    "v": "\v",
    "s": " ",
    "0": "\0",
}
_ESCAPE_PATTERN = re.compile(
    r"\\(?:x(?P<hex>[0-9A-Fa-f]{2})|u\{(?P<ubrace>[0-9A-Fa-f]{1,6})\}"
    r"|u(?P<u4>[0-9A-Fa-f]{4})|(?P<simple>.))",
    re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical unit of encoded value text.

    Attributes:
        kind: Token class (`INT`, `FLOAT`, `STRING`, `KEY`, `SYMBOL`, `QNAME`,
            `NAME`, or the punctuation character itself).
        text: Matched source text.
        position: Offset of the token in the source.
    """

    kind: str
    text: str
    position: int


def tokenize(text: str) -> list[Token]:
    """Split value text into tokens, skipping whitespace.

    Raises:
        BadValueError: If any part of the text is not a known token.
    """

    tokens: list[Token] = []
    position = 0
    while position < len(text):
        match = _TOKEN_PATTERN.match(text, position)
        if match is None:
            raise BadValueError(
                detail=f"Unexpected character `{text[position]}` at offset {position}."
            )
        kind = match.lastgroup or ""
        if kind == "PUNCT":
            tokens.append(Token(match.group(), match.group(), position))
        elif kind != "WS":
            tokens.append(Token(kind, match.group(), position))
        position = match.end()
    return tokens


def unescape_string(body: str) -> str:
    """Resolve escape sequences in the body of a quoted string.

    Raises:
        BadValueError: For unknown escapes or out-of-range code points.
    """

    def _replace(match: re.Match[str]) -> str:
        hex_digits = match.group("hex") or match.group("ubrace") or match.group("u4")
        if hex_digits is not None:
            code_point = int(hex_digits, 16)
            if code_point > 0x10FFFF:
                raise BadValueError(detail=f"Code point `{hex_digits}` is out of range.")
            return chr(code_point)
        simple = match.group("simple")
        if simple not in _SIMPLE_ESCAPES:
            raise BadValueError(detail=f"Unknown escape sequence `\\{simple}`.")
        return _SIMPLE_ESCAPES[simple]

    return _ESCAPE_PATTERN.sub(_replace, body)
