"""
The JSON value model shared by equality, hashing and pointer resolution.

A value tree is what the `json` module produces (None, bool, int, float,
str, list, dict), widened to what data pipelines usually hand over:

- tuples are Arrays, any Mapping with str keys is an Object
- numpy scalars are Booleans or Numbers, numpy arrays are Arrays of their
  first axis (a 0-d array counts as its single element)

Variants are named by `JsonKind`. Numbers have no structure of their own:
they are compared and hashed through `canonical_text`, the compact JSON
rendering, so two numbers are equal exactly when they serialize the same.
"""

import enum
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from jsontree.errors import NestingDepthError, UnsupportedValueError


class JsonKind(enum.Enum):
    """Variant of a JSON value."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


@dataclass
class TraversalConfig:
    """Limits applied while walking a value tree."""

    # None means unlimited; walks are iterative so the interpreter stack is
    # never the limit.
    max_depth: Optional[int] = None

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")


def kind_of(value: Any) -> JsonKind:
    """
    Classify a Python object as a JSON variant.

    Raises
    ------
    UnsupportedValueError
        If the object is not part of the value model.
    """
    if value is None:
        return JsonKind.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, (bool, np.bool_)):
        return JsonKind.BOOLEAN
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (int, float, np.integer, np.floating)):
        return JsonKind.NUMBER
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, Mapping):
        return JsonKind.OBJECT
    if isinstance(value, np.ndarray):
        if value.ndim == 0:
            return kind_of(value.item())
        return JsonKind.ARRAY
    raise UnsupportedValueError(value)


def builtin_scalar(value: Any) -> Any:
    """Convert numpy scalars (and 0-d arrays) to the equivalent Python object."""
    if isinstance(value, (np.generic, np.ndarray)):
        return value.item()
    return value


def array_items(value: Any) -> list:
    """Elements of an Array, in order."""
    return list(value)


def object_items(value: Mapping) -> list[tuple[str, Any]]:
    """
    Properties of an Object, in iteration order.

    Raises
    ------
    UnsupportedValueError
        If a key is not a str.
    """
    items = list(value.items())
    for key, _ in items:
        if not isinstance(key, str):
            raise UnsupportedValueError(
                value, f"object keys must be str, got {type(key).__name__}: {key!r}"
            )
    return items


def canonical_text(value: Any) -> str:
    """
    Compact JSON rendering of a value.

    This is the rendering numbers are compared and hashed by: ``1`` and
    ``1.0`` differ, ``numpy.int64(1)`` and ``1`` do not. Containers are
    rendered with an explicit stack, so any nesting depth is accepted.

    Raises
    ------
    UnsupportedValueError
        If the tree holds an object outside the value model, or an Object
        key that is not a str.
    """
    parts: list[str] = []
    # Entries are literal text (str) or a value still to render (list)
    stack: list[Any] = [[value]]

    while stack:
        entry = stack.pop()
        if isinstance(entry, str):
            parts.append(entry)
            continue

        node = entry[0]
        kind = kind_of(node)

        if kind is JsonKind.ARRAY:
            items = array_items(node)
            stack.append("]")
            for i in range(len(items) - 1, -1, -1):
                stack.append([items[i]])
                if i:
                    stack.append(",")
            stack.append("[")

        elif kind is JsonKind.OBJECT:
            properties = object_items(node)
            stack.append("}")
            for i in range(len(properties) - 1, -1, -1):
                key, item = properties[i]
                stack.append([item])
                stack.append(_scalar_text(str(key)) + ":")
                if i:
                    stack.append(",")
            stack.append("{")

        elif kind is JsonKind.STRING:
            parts.append(_scalar_text(str(node)))

        else:
            parts.append(_scalar_text(builtin_scalar(node)))

    return "".join(parts)


def _scalar_text(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, allow_nan=True)


def check_depth(depth: int, max_depth: Optional[int]) -> None:
    """Raise if a container at nesting level `depth` exceeds `max_depth`."""
    if max_depth is not None and depth > max_depth:
        raise NestingDepthError(max_depth)
