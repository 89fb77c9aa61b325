"""Shared fixtures: seeded random JSON value trees."""

import numpy as np
import pytest

ALPHABET = list("ab~/0-é 😀")


def random_string(rng: np.random.Generator, max_len: int = 6) -> str:
    length = int(rng.integers(0, max_len + 1))
    return "".join(ALPHABET[int(i)] for i in rng.integers(0, len(ALPHABET), size=length))


def random_tree(rng: np.random.Generator, depth: int = 0, max_depth: int = 4):
    """Random JSON value; containers only above `max_depth`."""
    choice = int(rng.integers(0, 7 if depth < max_depth else 5))
    if choice == 0:
        return None
    if choice == 1:
        return bool(rng.integers(0, 2))
    if choice == 2:
        return int(rng.integers(-1000, 1000))
    if choice == 3:
        return float(np.round(rng.normal(), 3))
    if choice == 4:
        return random_string(rng)
    if choice == 5:
        return [random_tree(rng, depth + 1, max_depth) for _ in range(int(rng.integers(0, 4)))]
    return {
        random_string(rng): random_tree(rng, depth + 1, max_depth)
        for _ in range(int(rng.integers(0, 4)))
    }


def reordered(value, rng: np.random.Generator):
    """Copy of `value` with every object's properties in a shuffled order."""
    if isinstance(value, list):
        return [reordered(v, rng) for v in value]
    if isinstance(value, dict):
        keys = list(value)
        order = rng.permutation(len(keys))
        return {keys[int(i)]: reordered(value[keys[int(i)]], rng) for i in order}
    return value


def nested_arrays(depth: int, leaf=0):
    doc = leaf
    for _ in range(depth):
        doc = [doc]
    return doc


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def trees(rng):
    return [random_tree(rng) for _ in range(200)]
