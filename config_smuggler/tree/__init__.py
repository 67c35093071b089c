"""Tree transforms built on the codecs.

This package contains the encode-direction flattener, the deep merger, and the
decode-direction orchestrator.
"""

from .decoder import TreeDecoder, nest_value
from .flattener import TreeFlattener, coerce_tree
from .merger import OptionListBuilder, deep_merge, merge

__all__ = [
    "OptionListBuilder",
    "TreeDecoder",
    "TreeFlattener",
    "coerce_tree",
    "deep_merge",
    "merge",
    "nest_value",
]
