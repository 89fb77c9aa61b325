"""
Thin adapter over the `json` module.

Parsing and rendering JSON text is not jsontree's job; these helpers only
fix the conventions the rest of the package relies on: compact output with
no whitespace and no ASCII escaping, numpy values rendered as their Python
equivalents, and `clone` producing plain lists and dicts.
"""

import json
from typing import Any, Union

from jsontree.core.values import (
    JsonKind,
    array_items,
    builtin_scalar,
    canonical_text,
    kind_of,
    object_items,
)


def to_json(value: Any, indented: bool = False) -> str:
    """
    Render a value tree as JSON text, compact unless `indented`.

    Compact rendering works at any nesting depth. Indented rendering goes
    through `json.dumps`, which recurses, so very deep documents raise
    RecursionError there.
    """
    if not indented:
        return canonical_text(value)
    return json.dumps(clone(value), indent=2, ensure_ascii=False, allow_nan=True)


def to_json_bytes(value: Any, indented: bool = False) -> bytes:
    return to_json(value, indented=indented).encode("utf-8")


def json_byte_count(value: Any, indented: bool = False) -> int:
    """Number of UTF-8 bytes in the JSON rendering of a value."""
    return len(to_json_bytes(value, indented=indented))


def from_json(text: Union[str, bytes]) -> Any:
    """
    Parse JSON text into a value tree.

    JSON null becomes None. Trailing non-whitespace text is an error.

    Raises
    ------
    json.JSONDecodeError
        If the text is not a single valid JSON document.
    """
    return json.loads(text)


def clone(value: Any) -> Any:
    """
    Deep-copy a value tree into plain Python objects.

    Tuples and numpy arrays become lists, other Mappings become dicts and
    numpy scalars become Python scalars. The copy is built with an explicit
    stack, so it works at any nesting depth.
    """
    kind = kind_of(value)
    if kind is not JsonKind.ARRAY and kind is not JsonKind.OBJECT:
        return _clone_scalar(value, kind)

    root = [] if kind is JsonKind.ARRAY else {}
    stack = [(value, root, kind)]
    while stack:
        source, target, source_kind = stack.pop()
        if source_kind is JsonKind.ARRAY:
            entries = enumerate(array_items(source))
        else:
            entries = object_items(source)
        for key, child in entries:
            child_kind = kind_of(child)
            if child_kind is JsonKind.ARRAY or child_kind is JsonKind.OBJECT:
                copy = [] if child_kind is JsonKind.ARRAY else {}
                stack.append((child, copy, child_kind))
            else:
                copy = _clone_scalar(child, child_kind)
            if source_kind is JsonKind.ARRAY:
                target.append(copy)
            else:
                target[key] = copy
    return root


def _clone_scalar(value: Any, kind: JsonKind) -> Any:
    if kind is JsonKind.STRING:
        return str(value)
    return builtin_scalar(value)
