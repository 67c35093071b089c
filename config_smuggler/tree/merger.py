"""Deep merge of decoded option lists.

Merge policy:
- option list + option list -> key-wise recursive merge
- anything else -> the incoming value replaces the existing one in place
- keys present on one side only are kept

Inputs are never mutated; every call returns new option lists. Folding many
entries goes through `OptionListBuilder`, which merges into plain dicts and
builds the option lists once at the end.
"""

from __future__ import annotations

from typing import Any

from ..models.datatypes import Identifier, OptionList


class OptionListBuilder:
    """Accumulate merged option lists as nested dicts keyed by identifier."""

    def __init__(self) -> None:
        self._root: dict[Identifier, Any] = {}

    def merge(self, options: OptionList) -> None:
        """Merge `options` into the accumulated tree; later values win."""

        _merge_into(self._root, options)

    def build(self) -> OptionList:
        """Return the accumulated tree as nested option lists."""

        return _freeze(self._root)


def _merge_into(level: dict[Identifier, Any], options: OptionList) -> None:
    for key, value in options:
        if isinstance(value, OptionList):
            nested = level.get(key)
            if not isinstance(nested, dict):
                nested = {}
                level[key] = nested
            _merge_into(nested, value)
        else:
            level[key] = value


def _freeze(level: dict[Identifier, Any]) -> OptionList:
    return OptionList(
        tuple(
            (key, _freeze(value) if isinstance(value, dict) else value)
            for key, value in level.items()
        )
    )


def deep_merge(base: OptionList, override: OptionList) -> OptionList:
    """Return `base` with `override` merged into it key-wise."""

    builder = OptionListBuilder()
    builder.merge(base)
    builder.merge(override)
    return builder.build()


def merge(tree: OptionList, app: Identifier, options: OptionList) -> OptionList:
    """Merge one app's options into a config tree.

    An absent app is appended; a present app is deep-merged, with later leaf
    values winning on collision.
    """

    return deep_merge(tree, OptionList(((app, options),)))
