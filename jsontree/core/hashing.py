"""
Persistent hash codes for JSON value trees.

Python's built-in `hash` of a str is salted per process (PYTHONHASHSEED), so
it cannot key an on-disk cache or a content-addressed store. The functions
here are fully specified so that any implementation, in any process, on any
platform, produces the same 32-bit integer for the same document:

- `combine_hash_codes` is Bob Jenkins' lookup3 ``hashword`` with initval 0
- `persistent_string_hash` is Paul Hsieh's SuperFastHash over UTF-16 code
  units
- `persistent_hash` tags each variant and combines child hashes; object
  properties are XOR-ed so property order does not matter

Results are signed 32-bit integers. Changing any constant here changes every
stored hash, so treat them as a versioned format.

References
----------
Jenkins, B. (2006). lookup3.c. http://burtleburtle.net/bob/c/lookup3.c
Hsieh, P. (2004). Hash functions. http://www.azillionmonkeys.com/qed/hash.html
"""

from typing import Any, Optional

import numpy as np

from jsontree.core.values import (
    JsonKind,
    array_items,
    builtin_scalar,
    canonical_text,
    check_depth,
    kind_of,
    object_items,
)

HASH_ALGORITHM_VERSION = 1

OBJECT_TAG = 1
ARRAY_TAG = 2
STRING_TAG = 8
BOOLEAN_TAG = 9
NULL_TAG = 10

_MASK = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    value &= _MASK
    return value - 0x100000000 if value & 0x80000000 else value


def _rot(x: int, k: int) -> int:
    return ((x << k) | (x >> (32 - k))) & _MASK


def _mix(a: int, b: int, c: int) -> tuple[int, int, int]:
    a = ((a - c) & _MASK) ^ _rot(c, 4)
    c = (c + b) & _MASK
    b = ((b - a) & _MASK) ^ _rot(a, 6)
    a = (a + c) & _MASK
    c = ((c - b) & _MASK) ^ _rot(b, 8)
    b = (b + a) & _MASK
    a = ((a - c) & _MASK) ^ _rot(c, 16)
    c = (c + b) & _MASK
    b = ((b - a) & _MASK) ^ _rot(a, 19)
    a = (a + c) & _MASK
    c = ((c - b) & _MASK) ^ _rot(b, 4)
    b = (b + a) & _MASK
    return a, b, c


def _final(a: int, b: int, c: int) -> tuple[int, int, int]:
    c = ((c ^ b) - _rot(b, 14)) & _MASK
    a = ((a ^ c) - _rot(c, 11)) & _MASK
    b = ((b ^ a) - _rot(a, 25)) & _MASK
    c = ((c ^ b) - _rot(b, 16)) & _MASK
    a = ((a ^ c) - _rot(c, 4)) & _MASK
    b = ((b ^ a) - _rot(a, 14)) & _MASK
    c = ((c ^ b) - _rot(b, 24)) & _MASK
    return a, b, c


def combine_hash_codes(*hash_codes: int) -> int:
    """
    Combine hash codes into one, order-sensitively.

    Each code is taken modulo 2**32, so signed and unsigned inputs combine
    the same way.

    Parameters
    ----------
    *hash_codes : int
        Hash codes to combine.

    Returns
    -------
    int
        Signed 32-bit combined hash.
    """
    words = [h & _MASK for h in hash_codes]
    length = len(words)
    a = b = c = (0xDEADBEEF + (length << 2)) & _MASK

    index = 0
    while length > 3:
        a = (a + words[index]) & _MASK
        b = (b + words[index + 1]) & _MASK
        c = (c + words[index + 2]) & _MASK
        a, b, c = _mix(a, b, c)
        length -= 3
        index += 3

    if length == 3:
        c = (c + words[index + 2]) & _MASK
    if length >= 2:
        b = (b + words[index + 1]) & _MASK
    if length >= 1:
        a = (a + words[index]) & _MASK
        a, b, c = _final(a, b, c)

    return _to_int32(c)


def _utf16_code_units(text: str) -> list[int]:
    if not text:
        return []
    return np.frombuffer(text.encode("utf-16-le", "surrogatepass"), dtype="<u2").tolist()


def persistent_string_hash(text: str) -> int:
    """
    Hash a string the same way in every process.

    Parameters
    ----------
    text : str
        String to hash. Characters outside the BMP contribute their UTF-16
        surrogate pair.

    Returns
    -------
    int
        Signed 32-bit hash. The empty string hashes to 0.
    """
    units = _utf16_code_units(text)
    length = len(units)
    h = length

    index = 0
    for _ in range(length >> 1):
        h = (h + units[index]) & _MASK
        temp = ((units[index + 1] << 11) ^ h) & _MASK
        h = ((h << 16) & _MASK) ^ temp
        h = (h + (h >> 11)) & _MASK
        index += 2

    if length & 1:
        h = (h + units[index]) & _MASK
        h ^= (h << 11) & _MASK
        h = (h + (h >> 17)) & _MASK

    # Force avalanching of the final bits
    h ^= (h << 3) & _MASK
    h = (h + (h >> 5)) & _MASK
    h ^= (h << 4) & _MASK
    h = (h + (h >> 17)) & _MASK
    h ^= (h << 25) & _MASK
    h = (h + (h >> 6)) & _MASK

    return _to_int32(h)


# Work-stack opcodes for persistent_hash
_VISIT = 0
_FINISH_ARRAY = 1
_FINISH_OBJECT = 2


def persistent_hash(value: Any, max_depth: Optional[int] = None) -> int:
    """
    Compute the persistent hash code of a JSON value tree.

    Consistent with `json_equals`: structurally equal values always hash
    the same. The walk uses an explicit stack, so nesting depth is bounded
    only by memory unless `max_depth` is given.

    Parameters
    ----------
    value : JSON value
        Root of the tree.
    max_depth : int, optional
        Maximum container nesting; deeper documents raise NestingDepthError.

    Returns
    -------
    int
        Signed 32-bit hash code.
    """
    results: list[int] = []
    stack: list[tuple[int, Any, int]] = [(_VISIT, value, 0)]

    while stack:
        op, node, depth = stack.pop()

        if op == _FINISH_ARRAY:
            count = node
            if count:
                element_hashes = results[-count:]
                del results[-count:]
            else:
                element_hashes = []
            results.append(combine_hash_codes(ARRAY_TAG, *element_hashes))
            continue

        if op == _FINISH_OBJECT:
            keys = node
            combined = 0
            if keys:
                value_hashes = results[-len(keys):]
                del results[-len(keys):]
                # XOR so that property order doesn't matter
                for key, value_hash in zip(keys, value_hashes):
                    combined ^= combine_hash_codes(persistent_string_hash(key), value_hash)
            results.append(combine_hash_codes(OBJECT_TAG, combined))
            continue

        kind = kind_of(node)

        if kind is JsonKind.NULL:
            results.append(NULL_TAG)

        elif kind is JsonKind.ARRAY:
            check_depth(depth + 1, max_depth)
            items = array_items(node)
            stack.append((_FINISH_ARRAY, len(items), depth))
            for item in reversed(items):
                stack.append((_VISIT, item, depth + 1))

        elif kind is JsonKind.OBJECT:
            check_depth(depth + 1, max_depth)
            properties = object_items(node)
            stack.append((_FINISH_OBJECT, [key for key, _ in properties], depth))
            for _, item in reversed(properties):
                stack.append((_VISIT, item, depth + 1))

        elif kind is JsonKind.STRING:
            results.append(combine_hash_codes(STRING_TAG, persistent_string_hash(str(node))))

        elif kind is JsonKind.BOOLEAN:
            results.append(combine_hash_codes(BOOLEAN_TAG, 1 if builtin_scalar(node) else 0))

        else:
            results.append(persistent_string_hash(canonical_text(builtin_scalar(node))))

    return results[0]
