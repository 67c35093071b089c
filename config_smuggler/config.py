"""Settings model and loaders for config_smuggler.

Responsibilities:
- Define transform settings as a typed, validated dataclass.
- Provide loader entry points for YAML- and environment-based settings.

Key types:
- `SmugglerConfig`: normalized settings shared by the codecs and transforms.
- `ConfigLoader`: static construction helpers for `SmugglerConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .codec.path import DEFAULT_NAMESPACE_TAG, SEPARATOR
from .codec.value import DEFAULT_MAX_DEPTH
from .errors import LoadError

_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class SmugglerConfig:
    """Settings for one encode/decode facade.

    Attributes:
        namespace_tag: Literal prefix of every encoded key.
        max_value_depth: Maximum nesting depth accepted when parsing values.
        log_invalid_entries: Whether each rejected decode entry is logged.
    """

    namespace_tag: str = DEFAULT_NAMESPACE_TAG
    max_value_depth: int = DEFAULT_MAX_DEPTH
    log_invalid_entries: bool = True

    def validate(self) -> None:
        """Validate settings before they are handed to the codecs."""

        if not isinstance(self.namespace_tag, str) or not self.namespace_tag.strip():
            raise ValueError("`namespace_tag` must be a non-empty string.")
        if SEPARATOR in self.namespace_tag:
            raise ValueError(f"`namespace_tag` must not contain `{SEPARATOR}`.")
        if isinstance(self.max_value_depth, bool) or not isinstance(self.max_value_depth, int):
            raise ValueError("`max_value_depth` must be a positive integer.")
        if self.max_value_depth <= 0:
            raise ValueError("`max_value_depth` must be a positive integer.")


class ConfigLoader:
    """Factory methods for creating `SmugglerConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset({"namespace_tag", "max_value_depth", "log_invalid_entries"})
    _ENV_PREFIX = "CONFIG_SMUGGLER_"

    @staticmethod
    def from_yaml(path: Path) -> SmugglerConfig:
        """Create validated settings from a YAML file.

        Raises:
            LoadError: If the file cannot be read or is not valid YAML.
            ValueError: If keys or values are invalid.
        """

        try:
            raw_text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise LoadError(
                detail=f"Could not read settings file `{path}`: {exc}",
                hint="Verify the path exists and is readable.",
            ) from exc
        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise LoadError(detail=f"Settings file `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML settings `{path}` must contain a top-level mapping.")
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> SmugglerConfig:
        """Create validated settings from `CONFIG_SMUGGLER_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        payload = {
            key: env_map[ConfigLoader._ENV_PREFIX + key.upper()]
            for key in ConfigLoader._SUPPORTED_YAML_KEYS
            if ConfigLoader._ENV_PREFIX + key.upper() in env_map
        }
        return ConfigLoader._build_config_from_mapping(payload, source_label="environment")

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> SmugglerConfig:
        """Build validated settings from a normalized mapping payload."""

        unknown = sorted(set(payload) - ConfigLoader._SUPPORTED_YAML_KEYS)
        if unknown:
            raise ValueError(f"{source_label} has unknown key(s): {', '.join(unknown)}")

        namespace_tag = ConfigLoader._optional_string(payload, "namespace_tag", source_label)
        max_value_depth = ConfigLoader._optional_positive_int(
            payload, "max_value_depth", source_label
        )
        log_invalid_entries = ConfigLoader._optional_boolean(
            payload, "log_invalid_entries", source_label
        )

        config = SmugglerConfig(
            namespace_tag=namespace_tag or DEFAULT_NAMESPACE_TAG,
            max_value_depth=max_value_depth or DEFAULT_MAX_DEPTH,
            log_invalid_entries=True if log_invalid_entries is None else log_invalid_entries,
        )
        config.validate()
        return config

    @staticmethod
    def _optional_string(payload: Mapping[str, Any], key: str, source_label: str) -> str | None:
        if key not in payload or payload[key] is None:
            return None
        value = payload[key]
        if not isinstance(value, str):
            raise ValueError(f"{source_label} key `{key}` must be a string.")
        return value.strip() or None

    @staticmethod
    def _optional_positive_int(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> int | None:
        if key not in payload or payload[key] is None:
            return None
        value = payload[key]
        if isinstance(value, bool):
            raise ValueError(f"{source_label} key `{key}` must be a positive integer.")
        try:
            parsed = int(str(value).strip())
        except ValueError as exc:
            raise ValueError(f"{source_label} key `{key}` must be a positive integer.") from exc
        if parsed <= 0:
            raise ValueError(f"{source_label} key `{key}` must be a positive integer.")
        return parsed

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> bool | None:
        if key not in payload or payload[key] is None:
            return None
        value = payload[key]
        if isinstance(value, bool):
            return value
        token = str(value).strip().lower()
        if token in _TRUE_BOOLEAN_TOKENS:
            return True
        if token in _FALSE_BOOLEAN_TOKENS:
            return False
        raise ValueError(
            f"{source_label} key `{key}` must be a boolean value "
            "(`true`/`false`, `1`/`0`, `yes`/`no`)."
        )
