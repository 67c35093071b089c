"""Encoded-key path codec.

Responsibilities:
- Render an identifier path as `<tag>-<segment>-<segment>...`.
- Split an encoded key back into classified identifiers.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..errors import BadInputError, BadKeyError
from ..models.datatypes import IDENTIFIER_TYPES, Identifier, parse_identifier

DEFAULT_NAMESPACE_TAG = "elixir"
SEPARATOR = "-"


class PathCodec:
    """Encode and decode identifier paths under one namespace tag."""

    def __init__(self, tag: str = DEFAULT_NAMESPACE_TAG) -> None:
        if not tag or SEPARATOR in tag:
            raise ValueError(f"Namespace tag must be non-empty and must not contain `{SEPARATOR}`.")
        self._tag = tag
        self._prefix = tag + SEPARATOR

    @property
    def tag(self) -> str:
        return self._tag

    def encode(self, segments: Sequence[Identifier]) -> str:
        """Return the encoded key for an identifier path.

        Raises:
            BadInputError: If the path is empty or holds a non-identifier.
        """

        if not segments:
            raise BadInputError(detail="Cannot encode an empty key path.")
        for segment in segments:
            if not isinstance(segment, IDENTIFIER_TYPES):
                raise BadInputError(
                    detail=f"Key path segment `{segment!r}` is not a Symbol or QualifiedName."
                )
        return self._prefix + SEPARATOR.join(str(segment) for segment in segments)

    def decode(self, text: str) -> tuple[Identifier, ...]:
        """Split an encoded key into classified identifiers.

        Raises:
            BadKeyError: If the tag is missing, a segment is empty, or a segment
                is not a valid identifier.
        """

        if not isinstance(text, str) or not text.startswith(self._prefix):
            raise BadKeyError(
                detail=f"Key does not start with `{self._prefix}`.",
                hint=f"Encoded keys look like `{self._prefix}my_app-some_key`.",
            )
        pieces = text[len(self._prefix) :].split(SEPARATOR)
        segments: list[Identifier] = []
        for piece in pieces:
            if not piece:
                raise BadKeyError(detail="Key contains an empty path segment.")
            try:
                segments.append(parse_identifier(piece))
            except ValueError as exc:
                raise BadKeyError(detail=f"Invalid key segment `{piece}`: {exc}") from exc
        return tuple(segments)


_DEFAULT_CODEC = PathCodec()


def encode_path(segments: Sequence[Identifier]) -> str:
    """Encode an identifier path with the default namespace tag."""

    return _DEFAULT_CODEC.encode(segments)


def decode_path(text: str) -> tuple[Identifier, ...]:
    """Decode an encoded key with the default namespace tag."""

    return _DEFAULT_CODEC.decode(text)
