"""
Hashable wrappers that make JSON value trees usable as dict keys.

Plain dicts and lists are unhashable. `StructuralKey` pairs `json_equals`
with `persistent_hash`, so structurally equal documents collapse to one key
in a dict or set.
"""

from typing import Any, Iterable, Iterator, Optional

from jsontree.core.equality import json_equals
from jsontree.core.hashing import persistent_hash


class StructuralKey:
    """
    A JSON value compared structurally and hashed persistently.

    The hash is computed once, on construction.
    """

    __slots__ = ("value", "max_depth", "_hash")

    def __init__(self, value: Any, max_depth: Optional[int] = None):
        self.value = value
        self.max_depth = max_depth
        self._hash = persistent_hash(value, max_depth=max_depth)

    @property
    def persistent_hash(self) -> int:
        return self._hash

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructuralKey):
            return NotImplemented
        if self._hash != other._hash:
            return False
        return json_equals(self.value, other.value, max_depth=self.max_depth)

    def __repr__(self) -> str:
        return f"StructuralKey({self.value!r})"


def unique(values: Iterable[Any], max_depth: Optional[int] = None) -> Iterator[Any]:
    """Yield values, skipping any structurally equal to one already seen."""
    seen: set[StructuralKey] = set()
    for value in values:
        key = StructuralKey(value, max_depth=max_depth)
        if key in seen:
            continue
        seen.add(key)
        yield value
