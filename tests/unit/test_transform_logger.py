"""Unit tests for deterministic transform log lines."""

from __future__ import annotations

import io

from config_smuggler.telemetry.logger import TransformLogger


def test_transform_logger_formats_sorted_sanitized_context(
    log_sink: io.StringIO, transform_logger: TransformLogger
) -> None:
    """Context should be emitted in key order with unsafe characters replaced."""

    transform_logger.log_start("decode", entries=3, source="kv store")
    transform_logger.log_invalid_entry("decode", "bad key", "bad_key")
    transform_logger.log_failure("encode", "BadInputError")
    transform_logger.log_complete("encode", note="")

    assert log_sink.getvalue().splitlines() == [
        "[transform] level=DEBUG op=decode event=start entries=3 source=kv_store",
        "[transform] level=WARNING op=decode event=invalid_entry key=bad_key kind=bad_key",
        "[transform] level=ERROR op=encode event=failure error_type=BadInputError",
        "[transform] level=DEBUG op=encode event=complete note=none",
    ]


def test_transform_logger_sinks_are_isolated_per_instance() -> None:
    """A dedicated sink should only receive lines from its own logger."""

    first_sink = io.StringIO()
    second_sink = io.StringIO()
    first = TransformLogger(sink=first_sink)
    second = TransformLogger(sink=second_sink)
    try:
        first.log_start("encode")
        second.log_start("decode")
    finally:
        first.close()
        second.close()

    assert first_sink.getvalue().strip() == "[transform] level=DEBUG op=encode event=start"
    assert second_sink.getvalue().strip() == "[transform] level=DEBUG op=decode event=start"


def test_transform_logger_level_filters_and_close_detaches(log_sink: io.StringIO) -> None:
    """The sink level should filter lines and closing should stop further output."""

    transform_logger = TransformLogger(sink=log_sink, level="WARNING")
    transform_logger.log_start("decode")
    transform_logger.log_invalid_entry("decode", "elixir-app-x", "bad_value")
    transform_logger.close()
    transform_logger.close()
    transform_logger.log_invalid_entry("decode", "elixir-app-y", "bad_value")

    assert log_sink.getvalue().splitlines() == [
        "[transform] level=WARNING op=decode event=invalid_entry key=elixir-app-x kind=bad_value",
    ]
