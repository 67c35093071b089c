"""Telemetry and observability helpers.

This package emits deterministic transform events for auditing decode runs.
"""

from .logger import TransformLogger

__all__ = ["TransformLogger"]
