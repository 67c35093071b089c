"""Unit tests for encode-direction tree flattening."""

from __future__ import annotations

import pytest

from config_smuggler.codec.path import PathCodec
from config_smuggler.codec.value import ValueCodec
from config_smuggler.errors import BadInputError
from config_smuggler.models.datatypes import OptionList, QualifiedName, Symbol
from config_smuggler.tree.flattener import TreeFlattener, coerce_tree


@pytest.fixture
def flattener() -> TreeFlattener:
    """Provide a flattener with default codecs."""

    return TreeFlattener(PathCodec(), ValueCodec())


def test_flatten_emits_one_pair_per_leaf(flattener: TreeFlattener, sample_tree: OptionList) -> None:
    """Nested option lists should extend the key path; leaves become encoded values."""

    assert flattener.flatten(sample_tree) == {
        "elixir-logger-level": ":info",
        "elixir-my_app-some_key": "22",
        "elixir-my_app-MyApp.Endpoint-url-host": '"localhost"',
        "elixir-my_app-MyApp.Endpoint-url-port": "4444",
        "elixir-my_app-MyApp.Endpoint-adapter": "Plug.Cowboy",
        "elixir-my_app-loggers": "[{Ecto.LogEntry, :log, []}]",
    }


def test_flatten_treats_lists_of_pairs_and_empty_option_lists_as_leaves(
    flattener: TreeFlattener,
) -> None:
    """Only non-empty option lists nest; pair-shaped plain lists stay whole."""

    tree = OptionList.from_mapping(
        {
            "app": {
                "pairs": [(Symbol("a"), 1), (Symbol("b"), 2)],
                "empty": OptionList(),
                "nested": OptionList.of(a=1),
            }
        }
    )

    assert flattener.flatten(tree) == {
        "elixir-app-pairs": "[{:a, 1}, {:b, 2}]",
        "elixir-app-empty": "[]",
        "elixir-app-nested-a": "1",
    }


def test_flatten_accepts_pair_sequences_and_plain_mappings(flattener: TreeFlattener) -> None:
    """Sequences of `(app, options)` pairs and str-keyed mappings are both trees."""

    pairs = [(Symbol("app"), OptionList.of(key=Symbol("value")))]
    mapping = {"app": {"key": Symbol("value")}}

    assert flattener.flatten(pairs) == {"elixir-app-key": ":value"}
    assert flattener.flatten(mapping) == {"elixir-app-key": ":value"}
    assert flattener.flatten([]) == {}


def test_flatten_uses_last_value_for_duplicate_keys(flattener: TreeFlattener) -> None:
    """Malformed input with a repeated app should keep the last produced value."""

    tree = [
        (Symbol("app"), OptionList.of(key=1)),
        (Symbol("app"), OptionList.of(key=2)),
    ]

    assert flattener.flatten(tree) == {"elixir-app-key": "2"}


@pytest.mark.parametrize(
    "tree",
    [
        [1, 2, 3],
        "blorp",
        22 / 7,
        None,
        [(Symbol("a"), Symbol("b"))],
        [(Symbol("a"),)],
        [("not-an-app", {"key": 1})],
        [(1, OptionList.of(key=1))],
        {"app": [1, 2]},
        {"app": {"bad key": 1}},
    ],
)
def test_flatten_rejects_malformed_trees(flattener: TreeFlattener, tree: object) -> None:
    """Anything other than app-keyed option lists should fail the whole call."""

    with pytest.raises(BadInputError):
        flattener.flatten(tree)


def test_flatten_rejects_leaves_without_literal_form(flattener: TreeFlattener) -> None:
    """A leaf value with no literal representation should fail the whole call."""

    with pytest.raises(BadInputError):
        flattener.flatten({"app": {"when": object()}})


def test_coerce_tree_classifies_string_app_names() -> None:
    """String app names should be classified like any other identifier."""

    apps = coerce_tree({"my_app": {}, "MyApp": OptionList()})

    assert apps == ((Symbol("my_app"), OptionList()), (QualifiedName("MyApp"), OptionList()))
