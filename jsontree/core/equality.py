"""
Structural equality of JSON value trees.

Two documents are equal when they have the same shape and the same leaves:

- arrays compare element by element, in order
- objects compare property by property, in any order
- strings compare ordinally, with no Unicode normalization
- numbers compare by their compact JSON rendering (`canonical_text`),
  which keeps equality consistent with `persistent_hash`
"""

from typing import Any, Optional

from jsontree.core.values import (
    JsonKind,
    array_items,
    builtin_scalar,
    canonical_text,
    check_depth,
    kind_of,
    object_items,
)


def json_equals(left: Any, right: Any, max_depth: Optional[int] = None) -> bool:
    """
    Decide whether two JSON value trees are structurally equal.

    Parameters
    ----------
    left, right : JSON value
        Trees to compare. Neither is modified.
    max_depth : int, optional
        Maximum container nesting; deeper documents raise NestingDepthError.

    Returns
    -------
    bool
        True if the trees are equal. Mismatched variants are never equal.
    """
    stack: list[tuple[Any, Any, int]] = [(left, right, 0)]

    while stack:
        a, b, depth = stack.pop()
        if a is b and max_depth is None:
            continue

        kind = kind_of(a)
        if kind_of(b) is not kind:
            return False

        if kind is JsonKind.NULL:
            continue

        if kind is JsonKind.ARRAY:
            check_depth(depth + 1, max_depth)
            a_items = array_items(a)
            b_items = array_items(b)
            if len(a_items) != len(b_items):
                return False
            stack.extend((x, y, depth + 1) for x, y in zip(a_items, b_items))

        elif kind is JsonKind.OBJECT:
            check_depth(depth + 1, max_depth)
            a_properties = object_items(a)
            b_properties = dict(object_items(b))
            # equal counts make one-way containment sufficient
            if len(a_properties) != len(b_properties):
                return False
            for key, a_value in a_properties:
                if key not in b_properties:
                    return False
                stack.append((a_value, b_properties[key], depth + 1))

        elif kind is JsonKind.STRING:
            if str(a) != str(b):
                return False

        elif kind is JsonKind.BOOLEAN:
            if bool(builtin_scalar(a)) != bool(builtin_scalar(b)):
                return False

        elif canonical_text(builtin_scalar(a)) != canonical_text(builtin_scalar(b)):
            return False

    return True
