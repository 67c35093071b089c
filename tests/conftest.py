"""Shared pytest fixtures for the full config_smuggler test suite."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from config_smuggler import ConfigSmuggler, OptionList, QualifiedName, Symbol
from config_smuggler.telemetry.logger import TransformLogger


@pytest.fixture
def sample_tree() -> OptionList:
    """Provide a tree with a plain app and an app holding a nested module key."""

    return OptionList.from_mapping(
        {
            "logger": {"level": Symbol("info")},
            "my_app": {
                "some_key": 22,
                "MyApp.Endpoint": {
                    "url": {"host": "localhost", "port": 4444},
                    "adapter": QualifiedName("Plug.Cowboy"),
                },
                "loggers": [(QualifiedName("Ecto.LogEntry"), Symbol("log"), [])],
            },
        }
    )


@pytest.fixture
def log_sink() -> io.StringIO:
    """Provide an in-memory sink for transform log lines."""

    return io.StringIO()


@pytest.fixture
def transform_logger(log_sink: io.StringIO) -> Iterator[TransformLogger]:
    """Provide a transform logger writing to `log_sink`, detached after the test."""

    logger = TransformLogger(sink=log_sink)
    yield logger
    logger.close()


@pytest.fixture
def smuggler() -> ConfigSmuggler:
    """Provide a facade with default settings and no logging."""

    return ConfigSmuggler()


def _typed(value: Any) -> Any:
    """Tag every value with its type so `1`, `1.0` and `True` compare unequal."""

    if isinstance(value, OptionList):
        return ("OptionList", {key: _typed(item) for key, item in value})
    if isinstance(value, (list, tuple)):
        return (type(value).__name__, [_typed(item) for item in value])
    return (type(value).__name__, value)


@pytest.fixture
def typed_tree() -> Callable[[Any], Any]:
    """Provide a converter that makes tree comparisons type-strict."""

    return _typed
