"""Unit tests for identifier and option-list datatypes."""

from __future__ import annotations

import pytest

from config_smuggler.models.datatypes import (
    DecodeResult,
    InvalidEntry,
    OptionList,
    QualifiedName,
    Symbol,
    parse_identifier,
)
from config_smuggler.errors import ErrorKind


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("my_app", Symbol("my_app")),
        ("enabled?", Symbol("enabled?")),
        ("_private", Symbol("_private")),
        ("MyApp", QualifiedName("MyApp")),
        ("MyApp.Endpoint", QualifiedName("MyApp.Endpoint")),
    ],
)
def test_parse_identifier_classifies_by_first_character(text: str, expected: object) -> None:
    """Lowercase-leading text should become a symbol, uppercase-leading a qualified name."""

    assert parse_identifier(text) == expected


@pytest.mark.parametrize("text", ["", "my-app", "my app", "1abc", "MyApp.endpoint", "Foo..Bar"])
def test_parse_identifier_rejects_invalid_text(text: str) -> None:
    """Identifier parsing should reject empty, separated, or malformed text."""

    with pytest.raises(ValueError):
        parse_identifier(text)


@pytest.mark.parametrize("word", ["true", "false", "nil"])
def test_symbol_rejects_reserved_words(word: str) -> None:
    """Reserved literal words cannot be used as symbols."""

    with pytest.raises(ValueError, match="reserved word"):
        Symbol(word)


def test_qualified_name_exposes_segments() -> None:
    """Qualified names should split into their dotted segments."""

    assert QualifiedName("MyApp.Repo.Replica").segments == ("MyApp", "Repo", "Replica")
    assert str(QualifiedName("MyApp.Repo")) == "MyApp.Repo"


def test_option_list_equality_ignores_order() -> None:
    """Option lists with the same keys and values should compare equal in any order."""

    first = OptionList(((Symbol("a"), 1), (Symbol("b"), 2)))
    second = OptionList(((Symbol("b"), 2), (Symbol("a"), 1)))

    assert first == second
    assert first.keys() == (Symbol("a"), Symbol("b"))
    assert first != OptionList(((Symbol("a"), 1),))
    assert first != OptionList(((Symbol("a"), 1), (Symbol("b"), 3)))


def test_option_list_rejects_duplicate_and_non_identifier_keys() -> None:
    """Option lists should enforce unique identifier keys."""

    with pytest.raises(ValueError, match="Duplicate option key"):
        OptionList(((Symbol("a"), 1), (Symbol("a"), 2)))
    with pytest.raises(ValueError, match="not a Symbol or QualifiedName"):
        OptionList((("a", 1),))
    with pytest.raises(ValueError, match="pairs"):
        OptionList(((Symbol("a"), 1, 2),))


def test_option_list_lookup_and_with_entry_keep_positions() -> None:
    """Replacing an entry should keep its position and leave the original untouched."""

    options = OptionList.of(a=1, b=2)
    updated = options.with_entry(Symbol("a"), 10).with_entry(Symbol("c"), 3)

    assert options[Symbol("a")] == 1
    assert updated.items() == ((Symbol("a"), 10), (Symbol("b"), 2), (Symbol("c"), 3))
    assert updated.get(Symbol("missing"), "default") == "default"
    assert Symbol("c") in updated
    with pytest.raises(KeyError):
        _ = options[Symbol("c")]


def test_option_list_from_mapping_nests_and_to_dict_inverts() -> None:
    """Mapping values should become nested option lists and render back as dicts."""

    options = OptionList.from_mapping({"MyApp.Endpoint": {"url": {"port": 4444}}, "debug": False})

    nested = options[QualifiedName("MyApp.Endpoint")]
    assert isinstance(nested, OptionList)
    assert nested[Symbol("url")] == OptionList.of(port=4444)
    assert options.to_dict() == {"MyApp.Endpoint": {"url": {"port": 4444}}, "debug": False}


def test_option_list_is_unhashable_and_falsy_when_empty() -> None:
    """Option lists compare by content, so they are unhashable; empty ones are falsy."""

    assert not OptionList()
    assert len(OptionList.of(a=1)) == 1
    with pytest.raises(TypeError):
        hash(OptionList())


def test_decode_result_reports_ok_and_invalid_pairs() -> None:
    """Decode results should expose success and raw `((key, value), kind)` pairs."""

    entry = InvalidEntry(key="bad key", value="22", kind=ErrorKind.BAD_KEY, reason="no tag")
    result = DecodeResult(invalid=(entry,))

    assert DecodeResult().ok is True
    assert result.ok is False
    assert entry.as_pair() == (("bad key", "22"), ErrorKind.BAD_KEY)
