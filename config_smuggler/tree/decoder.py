"""Decode-direction orchestration.

Responsibilities:
- Validate that the input is a string-to-string mapping.
- Decode every entry independently and partition valid from invalid entries.
- Fold valid entries into one config tree in sorted key order, so colliding
  leaf paths resolve deterministically.

Key types:
- `TreeDecoder`: per-entry decode plus merge fold.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..codec.path import PathCodec
from ..codec.value import ValueCodec
from ..errors import BadInputError, BadKeyError, BadValueError
from ..models.datatypes import DecodeResult, Identifier, InvalidEntry, OptionList
from ..telemetry.logger import TransformLogger
from .merger import OptionListBuilder


def nest_value(path: tuple[Identifier, ...], value: Any) -> OptionList:
    """Wrap a value in single-key option lists, innermost key last in `path`."""

    nested = value
    for key in reversed(path):
        nested = OptionList(((key, nested),))
    return nested


class TreeDecoder:
    """Decode flat encoded maps into config trees."""

    def __init__(
        self,
        path_codec: PathCodec,
        value_codec: ValueCodec,
        transform_logger: TransformLogger | None = None,
        log_invalid_entries: bool = True,
    ) -> None:
        self._path_codec = path_codec
        self._value_codec = value_codec
        self._transform_logger = transform_logger
        self._log_invalid_entries = log_invalid_entries

    def decode_key(self, key: str) -> tuple[Identifier, tuple[Identifier, ...]]:
        """Split an encoded key into its app and a non-empty option path.

        Raises:
            BadKeyError: If the key is malformed or names an app without a path.
        """

        segments = self._path_codec.decode(key)
        app, path = segments[0], segments[1:]
        if not path:
            raise BadKeyError(
                detail=f"Key names app `{app}` but no option path.",
                hint="Encoded keys need at least `<tag>-<app>-<key>`.",
            )
        return app, path

    def decode_pair(self, key: str, value: str) -> tuple[Identifier, OptionList]:
        """Decode one flat entry into an app and its nested options.

        Raises:
            BadKeyError: If the key cannot be decoded.
            BadValueError: If the value text is outside the literal grammar.
        """

        app, path = self.decode_key(key)
        return app, nest_value(path, self._value_codec.decode(value))

    def decode_and_merge(self, flat: Any) -> DecodeResult:
        """Decode a flat map, collecting invalid entries instead of raising.

        Raises:
            BadInputError: If `flat` is not a mapping of strings to strings.
        """

        self._require_string_mapping(flat)
        transform_logger = self._transform_logger
        if transform_logger is not None:
            transform_logger.log_start("decode", entries=len(flat))

        valid: list[tuple[Identifier, OptionList]] = []
        invalid: list[InvalidEntry] = []
        for key in sorted(flat):
            value = flat[key]
            try:
                valid.append(self.decode_pair(key, value))
            except (BadKeyError, BadValueError) as exc:
                invalid.append(
                    InvalidEntry(key=key, value=value, kind=exc.kind, reason=exc.detail)
                )
                if transform_logger is not None and self._log_invalid_entries:
                    transform_logger.log_invalid_entry("decode", key, exc.kind.value)

        builder = OptionListBuilder()
        for app, options in valid:
            builder.merge(OptionList(((app, options),)))
        tree = builder.build()

        if transform_logger is not None:
            transform_logger.log_complete("decode", valid=len(valid), invalid=len(invalid))
        return DecodeResult(tree=tree, invalid=tuple(invalid), valid_count=len(valid))

    @staticmethod
    def _require_string_mapping(flat: Any) -> None:
        if not isinstance(flat, Mapping):
            raise BadInputError(
                detail=f"Encoded config must be a mapping, got `{type(flat).__name__}`.",
                hint="Pass a dict of encoded keys to encoded values.",
            )
        for key, value in flat.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise BadInputError(
                    detail=f"Encoded config entries must be strings, got `{key!r}`.",
                )
