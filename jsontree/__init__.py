"""
jsontree: structural equality, persistent hashing and JSON Pointer for
JSON value trees.

Quick check: python -m jsontree compare a.json b.json
"""

from jsontree.core import (
    HASH_ALGORITHM_VERSION,
    ROOT,
    JsonKind,
    JsonPointer,
    Resolution,
    ResolutionStatus,
    StructuralKey,
    TraversalConfig,
    canonical_text,
    combine_hash_codes,
    concat,
    json_equals,
    kind_of,
    persistent_hash,
    persistent_string_hash,
    unique,
)
from jsontree.errors import (
    JsonPointerFormatError,
    JsonPointerResolutionError,
    JsonTreeError,
    NestingDepthError,
    UnsupportedValueError,
)
from jsontree.serialization import clone, from_json, json_byte_count, to_json, to_json_bytes

__version__ = "0.1.0"

__all__ = [
    "HASH_ALGORITHM_VERSION",
    "ROOT",
    "JsonKind",
    "JsonPointer",
    "Resolution",
    "ResolutionStatus",
    "StructuralKey",
    "TraversalConfig",
    "canonical_text",
    "combine_hash_codes",
    "concat",
    "json_equals",
    "kind_of",
    "persistent_hash",
    "persistent_string_hash",
    "unique",
    "JsonPointerFormatError",
    "JsonPointerResolutionError",
    "JsonTreeError",
    "NestingDepthError",
    "UnsupportedValueError",
    "clone",
    "from_json",
    "json_byte_count",
    "to_json",
    "to_json_bytes",
]
