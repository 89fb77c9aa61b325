"""Structural equality, persistent hashing and JSON Pointer over JSON value trees."""

from jsontree.core.values import JsonKind, TraversalConfig, canonical_text, kind_of
from jsontree.core.equality import json_equals
from jsontree.core.hashing import (
    HASH_ALGORITHM_VERSION,
    combine_hash_codes,
    persistent_hash,
    persistent_string_hash,
)
from jsontree.core.pointer import ROOT, JsonPointer, Resolution, ResolutionStatus, concat
from jsontree.core.keys import StructuralKey, unique

__all__ = [
    "JsonKind",
    "TraversalConfig",
    "canonical_text",
    "kind_of",
    "json_equals",
    "HASH_ALGORITHM_VERSION",
    "combine_hash_codes",
    "persistent_hash",
    "persistent_string_hash",
    "ROOT",
    "JsonPointer",
    "Resolution",
    "ResolutionStatus",
    "concat",
    "StructuralKey",
    "unique",
]
