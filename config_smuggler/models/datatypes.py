"""Core datatypes shared across config_smuggler modules.

Responsibilities:
- Represent identifiers as an explicit tagged variant (`Symbol` or `QualifiedName`).
- Represent nested option groups as an immutable, key-unique `OptionList`.
- Provide result records for the decode direction.

Key types:
- `Symbol`, `QualifiedName`, `Identifier`, `OptionList`, `InvalidEntry`,
  and `DecodeResult`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Any, Iterator, Mapping, Union

from ..errors import ErrorKind


_SYMBOL_PATTERN = re.compile(r"[a-z_][A-Za-z0-9_]*[?!]?")
_QUALIFIED_SEGMENT = r"[A-Z][A-Za-z0-9_]*"
_QUALIFIED_PATTERN = re.compile(rf"{_QUALIFIED_SEGMENT}(?:\.{_QUALIFIED_SEGMENT})*")
_RESERVED_WORDS = frozenset({"true", "false", "nil"})


@dataclass(frozen=True, slots=True)
class Symbol:
    """A bare, lowercase-leading identifier such as `level` or `info`.

    Attributes:
        name: Identifier text without the leading `:` marker.
    """

    name: str

    def __post_init__(self) -> None:
        """Reject text that is not a bare lowercase-leading identifier."""

        if not isinstance(self.name, str) or not _SYMBOL_PATTERN.fullmatch(self.name):
            raise ValueError(f"`{self.name!r}` is not a valid symbol name.")
        if self.name in _RESERVED_WORDS:
            raise ValueError(f"`{self.name}` is a reserved word and cannot be a symbol.")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class QualifiedName:
    """A dotted, uppercase-leading name such as `MyApp.Endpoint`.

    Attributes:
        name: Dotted name text.
    """

    name: str

    def __post_init__(self) -> None:
        """Reject text that is not a dotted path of uppercase-leading segments."""

        if not isinstance(self.name, str) or not _QUALIFIED_PATTERN.fullmatch(self.name):
            raise ValueError(f"`{self.name!r}` is not a valid qualified name.")

    @property
    def segments(self) -> tuple[str, ...]:
        """Return the dot-separated segments of the name."""

        return tuple(self.name.split("."))

    def __str__(self) -> str:
        return self.name


Identifier = Union[Symbol, QualifiedName]
IDENTIFIER_TYPES = (Symbol, QualifiedName)


def parse_identifier(text: str) -> Identifier:
    """Classify identifier text by the case of its first character.

    Args:
        text: Raw identifier text, for example `my_app` or `MyApp.Repo`.

    Returns:
        `QualifiedName` for uppercase-leading text, `Symbol` otherwise.

    Raises:
        ValueError: If the text is empty or not a valid identifier of its class.
    """

    if not isinstance(text, str) or not text:
        raise ValueError("Identifier text must be a non-empty string.")
    if text[0].isupper():
        return QualifiedName(text)
    return Symbol(text)


@dataclass(frozen=True, slots=True, eq=False)
class OptionList:
    """Ordered, key-unique sequence of `(Identifier, value)` pairs.

    Insertion order is kept for stable output but equality ignores it, since
    options are looked up by key.

    Attributes:
        entries: Ordered `(key, value)` pairs.
    """

    entries: tuple[tuple[Identifier, Any], ...] = ()
    _index: dict[Identifier, int] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self) -> None:
        """Normalize entries to tuples and enforce identifier keys and uniqueness."""

        normalized: list[tuple[Identifier, Any]] = []
        index: dict[Identifier, int] = {}
        for pair in self.entries:
            if not isinstance(pair, tuple) or len(pair) != 2:
                raise ValueError(f"Option entries must be `(key, value)` pairs, got `{pair!r}`.")
            key, value = pair
            if not isinstance(key, IDENTIFIER_TYPES):
                raise ValueError(f"Option key `{key!r}` is not a Symbol or QualifiedName.")
            if key in index:
                raise ValueError(f"Duplicate option key `{key}`.")
            index[key] = len(normalized)
            normalized.append((key, value))
        object.__setattr__(self, "entries", tuple(normalized))
        object.__setattr__(self, "_index", index)

    @classmethod
    def of(cls, **options: Any) -> OptionList:
        """Build an option list from keyword arguments, classifying each name."""

        return cls.from_mapping(options)

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> OptionList:
        """Build an option list from a mapping, nesting mapping values recursively.

        `str` keys are classified with `parse_identifier`. Mapping values become
        nested option lists; every other value is kept as-is.
        """

        pairs = []
        for key, value in mapping.items():
            identifier = key if isinstance(key, IDENTIFIER_TYPES) else parse_identifier(key)
            if isinstance(value, Mapping):
                value = cls.from_mapping(value)
            pairs.append((identifier, value))
        return cls(tuple(pairs))

    def to_dict(self) -> dict[str, Any]:
        """Render as nested plain dicts keyed by identifier text."""

        return {
            str(key): value.to_dict() if isinstance(value, OptionList) else value
            for key, value in self.entries
        }

    def with_entry(self, key: Identifier, value: Any) -> OptionList:
        """Return a copy with `key` set to `value`, keeping the key's position."""

        if key in self._index:
            position = self._index[key]
            entries = self.entries[:position] + ((key, value),) + self.entries[position + 1 :]
        else:
            entries = self.entries + ((key, value),)
        return OptionList(entries)

    def get(self, key: Identifier, default: Any = None) -> Any:
        if key in self._index:
            return self.entries[self._index[key]][1]
        return default

    def keys(self) -> tuple[Identifier, ...]:
        return tuple(key for key, _ in self.entries)

    def values(self) -> tuple[Any, ...]:
        return tuple(value for _, value in self.entries)

    def items(self) -> tuple[tuple[Identifier, Any], ...]:
        return self.entries

    def __getitem__(self, key: Identifier) -> Any:
        if key not in self._index:
            raise KeyError(key)
        return self.entries[self._index[key]][1]

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[tuple[Identifier, Any]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptionList):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(key in other and other[key] == value for key, value in self.entries)


ConfigTree = OptionList
"""Application identifier → `OptionList` of that application's options."""


@dataclass(frozen=True, slots=True)
class InvalidEntry:
    """A flat-map entry that could not be decoded.

    Attributes:
        key: Encoded key as received.
        value: Encoded value as received.
        kind: `ErrorKind.BAD_KEY` or `ErrorKind.BAD_VALUE`.
        reason: Human-readable diagnostic.
    """

    key: str
    value: str
    kind: ErrorKind
    reason: str = ""

    def as_pair(self) -> tuple[tuple[str, str], ErrorKind]:
        """Return the `((key, value), kind)` shape used by callers that compare raw pairs."""

        return ((self.key, self.value), self.kind)


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Outcome of decoding a flat map.

    Attributes:
        tree: Decoded config tree (possibly empty).
        invalid: Rejected entries, sorted by key.
        valid_count: Number of entries that decoded and were merged.
    """

    tree: OptionList = field(default_factory=OptionList)
    invalid: tuple[InvalidEntry, ...] = ()
    valid_count: int = 0

    @property
    def ok(self) -> bool:
        """Return whether every entry decoded."""

        return not self.invalid
