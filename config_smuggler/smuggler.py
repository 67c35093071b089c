"""Encode/decode facade for config_smuggler.

Responsibilities:
- Wire settings, codecs, tree transforms and logging into one object.
- Expose module-level `encode`, `decode` and `encode_statement` helpers backed
  by a default instance.

Key types:
- `ConfigSmuggler`: orchestration facade.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .codec.path import PathCodec
from .codec.value import ValueCodec
from .config import SmugglerConfig
from .errors import SmugglerError
from .models.datatypes import DecodeResult, Identifier, OptionList
from .statement import parse_statement
from .telemetry.logger import TransformLogger
from .tree.decoder import TreeDecoder
from .tree.flattener import TreeFlattener


class ConfigSmuggler:
    """Convert config trees to flat string maps and back."""

    def __init__(
        self,
        config: SmugglerConfig | None = None,
        transform_logger: TransformLogger | None = None,
    ) -> None:
        """Validate settings and build the codecs and transforms they configure."""

        self._config = config or SmugglerConfig()
        self._config.validate()
        self._transform_logger = transform_logger
        self._path_codec = PathCodec(self._config.namespace_tag)
        self._value_codec = ValueCodec(self._config.max_value_depth)
        self._flattener = TreeFlattener(self._path_codec, self._value_codec)
        self._decoder = TreeDecoder(
            self._path_codec,
            self._value_codec,
            transform_logger=transform_logger,
            log_invalid_entries=self._config.log_invalid_entries,
        )

    @property
    def config(self) -> SmugglerConfig:
        return self._config

    def encode(self, tree: Any) -> dict[str, str]:
        """Return the encoded flat map for a config tree.

        Raises:
            BadInputError: If the tree is not app-keyed option lists or holds a
                value without a literal representation.
        """

        return self._run_encode("encode", lambda: self._flattener.flatten(tree))

    def encode_statement(self, statement: str) -> dict[str, str]:
        """Return the encoded flat map for a single `config` statement."""

        def _encode() -> dict[str, str]:
            app, options = parse_statement(statement, self._value_codec)
            return self._flattener.flatten(OptionList(((app, options),)))

        return self._run_encode("encode_statement", _encode)

    def decode(self, flat: Any) -> DecodeResult:
        """Decode a flat map into a tree plus the entries that failed to decode."""

        return self._decoder.decode_and_merge(flat)

    def decode_pair(self, key: str, value: str) -> tuple[Identifier, OptionList]:
        return self._decoder.decode_pair(key, value)

    def decode_key(self, key: str) -> tuple[Identifier, tuple[Identifier, ...]]:
        return self._decoder.decode_key(key)

    def encode_path(self, segments: Sequence[Identifier]) -> str:
        return self._path_codec.encode(segments)

    def decode_path(self, text: str) -> tuple[Identifier, ...]:
        return self._path_codec.decode(text)

    def encode_value(self, value: Any) -> str:
        return self._value_codec.encode(value)

    def decode_value(self, text: str) -> Any:
        return self._value_codec.decode(text)

    def _run_encode(self, operation: str, action: Callable[[], dict[str, str]]) -> dict[str, str]:
        """Run an encode action with start/complete/failure events."""

        transform_logger = self._transform_logger
        if transform_logger is not None:
            transform_logger.log_start(operation)
        try:
            flat = action()
        except SmugglerError as exc:
            if transform_logger is not None:
                transform_logger.log_failure(operation, type(exc).__name__)
            raise
        if transform_logger is not None:
            transform_logger.log_complete(operation, entries=len(flat))
        return flat


_DEFAULT_SMUGGLER = ConfigSmuggler()


def encode(tree: Any) -> dict[str, str]:
    """Encode a config tree with default settings."""

    return _DEFAULT_SMUGGLER.encode(tree)


def encode_statement(statement: str) -> dict[str, str]:
    """Encode one `config` statement with default settings."""

    return _DEFAULT_SMUGGLER.encode_statement(statement)


def decode(flat: Any) -> DecodeResult:
    """Decode a flat map with default settings."""

    return _DEFAULT_SMUGGLER.decode(flat)


decode_and_merge = decode
