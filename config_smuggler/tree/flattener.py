"""Encode-direction tree flattening.

Responsibilities:
- Validate the top-level shape of a config tree.
- Walk nested option lists and emit one encoded pair per leaf value.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Iterator

from ..codec.path import PathCodec
from ..codec.value import ValueCodec
from ..errors import BadInputError
from ..models.datatypes import IDENTIFIER_TYPES, Identifier, OptionList, parse_identifier


def _is_nested(value: Any) -> bool:
    """Only non-empty `OptionList` instances nest; plain lists are always leaves."""

    return isinstance(value, OptionList) and len(value) > 0


def coerce_tree(tree: Any) -> tuple[tuple[Identifier, OptionList], ...]:
    """Normalize a tree argument into `(app, options)` pairs.

    Accepts an `OptionList`, a mapping, or a sequence of `(app, options)` pairs.
    Each app's options must be an `OptionList` or a mapping.

    Raises:
        BadInputError: For any other shape.
    """

    if isinstance(tree, OptionList):
        candidates = list(tree.items())
    elif isinstance(tree, Mapping):
        candidates = list(tree.items())
    elif isinstance(tree, Sequence) and not isinstance(tree, (str, bytes)):
        candidates = list(tree)
    else:
        raise BadInputError(
            detail=f"Config tree must be app-keyed pairs, got `{type(tree).__name__}`.",
            hint="Pass an OptionList or mapping of app name to option list.",
        )

    apps: list[tuple[Identifier, OptionList]] = []
    for candidate in candidates:
        if not isinstance(candidate, tuple) or len(candidate) != 2:
            raise BadInputError(
                detail=f"Config tree entry `{candidate!r}` is not an `(app, options)` pair."
            )
        app, options = candidate
        if isinstance(app, str):
            app = _app_identifier(app)
        if not isinstance(app, IDENTIFIER_TYPES):
            raise BadInputError(detail=f"App key `{app!r}` is not an identifier.")
        if isinstance(options, Mapping):
            options = _options_from_mapping(app, options)
        if not isinstance(options, OptionList):
            raise BadInputError(
                detail=(
                    f"Options for app `{app}` must be an option list, "
                    f"got `{type(options).__name__}`."
                )
            )
        apps.append((app, options))
    return tuple(apps)


def _app_identifier(text: str) -> Identifier:
    try:
        return parse_identifier(text)
    except ValueError as exc:
        raise BadInputError(detail=f"Invalid app name `{text}`: {exc}") from exc


def _options_from_mapping(app: Identifier, options: Mapping[Any, Any]) -> OptionList:
    try:
        return OptionList.from_mapping(options)
    except ValueError as exc:
        raise BadInputError(detail=f"Invalid options for app `{app}`: {exc}") from exc


class TreeFlattener:
    """Flatten config trees into encoded key/value maps."""

    def __init__(self, path_codec: PathCodec, value_codec: ValueCodec) -> None:
        self._path_codec = path_codec
        self._value_codec = value_codec

    def flatten(self, tree: Any) -> dict[str, str]:
        """Return the encoded flat map for a config tree.

        Duplicate encoded keys keep the last produced value.

        Raises:
            BadInputError: If the tree shape or any leaf value is not encodable.
        """

        flat: dict[str, str] = {}
        for app, options in coerce_tree(tree):
            for key, value in self.iter_pairs(app, (), options):
                flat[key] = value
        return flat

    def iter_pairs(
        self,
        app: Identifier,
        path: tuple[Identifier, ...],
        options: OptionList,
    ) -> Iterator[tuple[str, str]]:
        """Yield encoded pairs for one app's options under a key path."""

        for key, value in options:
            if _is_nested(value):
                yield from self.iter_pairs(app, path + (key,), value)
            else:
                yield (
                    self._path_codec.encode((app, *path, key)),
                    self._value_codec.encode(value),
                )
