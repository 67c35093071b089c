"""Shared typed data models for config_smuggler.

This package contains the identifier, option-list and result types used by the
codecs and tree transforms, kept separate to avoid circular imports.
"""

from .datatypes import (
    IDENTIFIER_TYPES,
    ConfigTree,
    DecodeResult,
    Identifier,
    InvalidEntry,
    OptionList,
    QualifiedName,
    Symbol,
    parse_identifier,
)

__all__ = [
    "IDENTIFIER_TYPES",
    "ConfigTree",
    "DecodeResult",
    "Identifier",
    "InvalidEntry",
    "OptionList",
    "QualifiedName",
    "Symbol",
    "parse_identifier",
]
