"""Key-path and literal-value codecs.

The codecs encode single keys and single values; the tree transforms in
`config_smuggler.tree` compose them.
"""

from .path import DEFAULT_NAMESPACE_TAG, SEPARATOR, PathCodec, decode_path, encode_path
from .value import DEFAULT_MAX_DEPTH, ValueCodec, decode_value, encode_value

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_NAMESPACE_TAG",
    "SEPARATOR",
    "PathCodec",
    "ValueCodec",
    "decode_path",
    "decode_value",
    "encode_path",
    "encode_value",
]
