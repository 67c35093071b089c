"""Structured transform logging utilities.

Responsibilities:
- Emit concise, deterministic operation-level logs through `loguru`.
- Never log encoded values, which may carry secrets; keys and counts only.
"""

from __future__ import annotations

from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class TransformLogger:
    """Emit deterministic operation logs for encode/decode activity."""

    def __init__(self, sink: TextIO | None = None, level: str = "DEBUG") -> None:
        """Bind a component logger and optionally attach a dedicated sink.

        A dedicated sink only receives lines from this logger instance, so
        global `loguru` handlers are left untouched.
        """

        self._logger = _loguru_logger.bind(component="config_smuggler", transform_logger=id(self))
        self._handler_id: int | None = None
        if sink is not None:
            owner = id(self)
            self._handler_id = _loguru_logger.add(
                sink,
                format="{message}",
                level=level,
                colorize=False,
                filter=lambda record: record["extra"].get("transform_logger") == owner,
            )

    def close(self) -> None:
        """Detach the dedicated sink, if any."""

        if self._handler_id is not None:
            _loguru_logger.remove(self._handler_id)
            self._handler_id = None

    def _emit(self, level: str, event: str, operation: str, **context: object) -> None:
        """Emit one structured transform log line."""

        line = (
            f"[transform] level={level} op={operation} event={event}{_format_context(context)}"
        )
        self._logger.log(level, line)

    def log_start(self, operation: str, **context: object) -> None:
        """Emit an operation-start event."""

        self._emit("DEBUG", "start", operation, **context)

    def log_complete(self, operation: str, **context: object) -> None:
        """Emit an operation-complete event with summary counts."""

        self._emit("DEBUG", "complete", operation, **context)

    def log_invalid_entry(self, operation: str, key: str, kind: str) -> None:
        """Emit one rejected-entry event without the entry's value."""

        self._emit("WARNING", "invalid_entry", operation, key=key, kind=kind)

    def log_failure(self, operation: str, error_type: str) -> None:
        """Emit an operation-failure event without sensitive payload details."""

        self._emit("ERROR", "failure", operation, error_type=error_type)
