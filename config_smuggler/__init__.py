"""Top-level package for config_smuggler.

This package converts namespace-keyed configuration trees (apps, nested option
lists and literal values) to and from flat maps of string keys and string
values. The main entry point is `ConfigSmuggler`; `encode`, `decode` and
`encode_statement` use default settings.

Values are parsed with a closed literal grammar and never evaluated, so
decoding untrusted maps cannot execute code.
"""

from .codec.path import decode_path, encode_path
from .codec.value import decode_value, encode_value
from .config import ConfigLoader, SmugglerConfig
from .errors import (
    BadInputError,
    BadKeyError,
    BadValueError,
    ErrorKind,
    LoadError,
    SmugglerError,
)
from .models.datatypes import (
    DecodeResult,
    InvalidEntry,
    OptionList,
    QualifiedName,
    Symbol,
    parse_identifier,
)
from .smuggler import ConfigSmuggler, decode, decode_and_merge, encode, encode_statement

__all__ = [
    "BadInputError",
    "BadKeyError",
    "BadValueError",
    "ConfigLoader",
    "ConfigSmuggler",
    "DecodeResult",
    "ErrorKind",
    "InvalidEntry",
    "LoadError",
    "OptionList",
    "QualifiedName",
    "SmugglerConfig",
    "SmugglerError",
    "Symbol",
    "__version__",
    "decode",
    "decode_and_merge",
    "decode_path",
    "decode_value",
    "encode",
    "encode_path",
    "encode_statement",
    "encode_value",
    "parse_identifier",
]

__version__ = "1.1.0"
