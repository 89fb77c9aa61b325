"""
Tests for persistent hash codes.

The hash is a stored format, so besides consistency with equality these
tests pin down how each variant is built from `combine_hash_codes` and
`persistent_string_hash`, and that nothing depends on the process.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import numpy as np
import pytest

from jsontree import (
    NestingDepthError,
    combine_hash_codes,
    json_equals,
    persistent_hash,
    persistent_string_hash,
)
from jsontree.core.hashing import ARRAY_TAG, BOOLEAN_TAG, NULL_TAG, OBJECT_TAG, STRING_TAG
from conftest import nested_arrays, random_string, reordered

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class TestCombineHashCodes:
    def test_empty_is_lookup3_initial_state(self):
        assert combine_hash_codes() == 0xDEADBEEF - 2 ** 32

    def test_signed_and_unsigned_inputs_agree(self):
        assert combine_hash_codes(-1) == combine_hash_codes(0xFFFFFFFF)
        assert combine_hash_codes(INT32_MIN, 5) == combine_hash_codes(0x80000000, 5)

    def test_order_sensitive(self):
        assert combine_hash_codes(1, 2) != combine_hash_codes(2, 1)

    def test_length_sensitive(self):
        assert combine_hash_codes(0) != combine_hash_codes(0, 0)
        assert combine_hash_codes(1, 2, 3) != combine_hash_codes(1, 2, 3, 0)

    def test_range(self, rng):
        for n in range(10):
            codes = [int(c) for c in rng.integers(INT32_MIN, INT32_MAX, size=n)]
            assert INT32_MIN <= combine_hash_codes(*codes) <= INT32_MAX


class TestPersistentStringHash:
    def test_empty_string(self):
        assert persistent_string_hash("") == 0

    def test_distinguishes_strings(self):
        words = ["a", "b", "ab", "ba", "abc", "~0", "~1", "é", "😀"]
        hashes = {persistent_string_hash(w) for w in words}
        assert len(hashes) == len(words)

    def test_range(self, rng):
        for _ in range(100):
            h = persistent_string_hash(random_string(rng, max_len=20))
            assert INT32_MIN <= h <= INT32_MAX

    def test_hashes_utf16_code_units(self):
        """A non-BMP character hashes like its surrogate pair."""
        assert persistent_string_hash("\U0001F600") == persistent_string_hash("😀")
        assert persistent_string_hash("\ud800") != persistent_string_hash("")

    def test_numpy_str(self):
        assert persistent_string_hash(np.str_("key")) == persistent_string_hash("key")


class TestPersistentHashContract:
    def test_null(self):
        assert persistent_hash(None) == NULL_TAG == 10

    def test_boolean(self):
        assert persistent_hash(True) == combine_hash_codes(BOOLEAN_TAG, 1)
        assert persistent_hash(False) == combine_hash_codes(BOOLEAN_TAG, 0)

    def test_string(self):
        assert persistent_hash("abc") == combine_hash_codes(STRING_TAG, persistent_string_hash("abc"))

    def test_number_uses_rendering(self):
        assert persistent_hash(1.5) == persistent_string_hash("1.5")
        assert persistent_hash(-7) == persistent_string_hash("-7")
        assert persistent_hash(1e100) == persistent_string_hash("1e+100")

    def test_array(self):
        expected = combine_hash_codes(ARRAY_TAG, persistent_hash(1), persistent_hash("a"))
        assert persistent_hash([1, "a"]) == expected
        assert persistent_hash([]) == combine_hash_codes(ARRAY_TAG)

    def test_object(self):
        expected = combine_hash_codes(
            OBJECT_TAG,
            combine_hash_codes(persistent_string_hash("a"), NULL_TAG)
            ^ combine_hash_codes(persistent_string_hash("b"), persistent_hash([])),
        )
        assert persistent_hash({"a": None, "b": []}) == expected
        assert persistent_hash({}) == combine_hash_codes(OBJECT_TAG, 0)

    def test_nested(self):
        inner = persistent_hash({"x": [True]})
        assert persistent_hash([{"x": [True]}]) == combine_hash_codes(ARRAY_TAG, inner)


class TestKnownAnswers:
    """
    Fixed values from an independent C build of lookup3 ``hashword`` and
    SuperFastHash. They guard the stored format against self-consistent
    regressions that the structural tests above cannot see.
    """

    @pytest.mark.parametrize(
        "codes, expected",
        [
            ((2,), -295539510),
            ((2, -1), 302665004),
            ((1,), 1923623579),
            ((1, 2), -1957922439),
            ((1, 2, 3), -1537124107),
            ((1, 2, 3, 4), 1716064838),
            ((1, 2, 3, 4, 5), 1653680576),
            ((1, 2, 3, 4, 5, 6), -471635163),
            ((1, 2, 3, 4, 5, 6, 7), 1046506028),
        ],
    )
    def test_combine_hash_codes(self, codes, expected):
        assert combine_hash_codes(*codes) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("a", -889528276),
            ("ab", 523730891),
            ("abc", 2058321224),
            ("abcd", 451350962),
            ("hello", -142550670),
            ("~1", 61613983),
            ("1.5", -1699568177),
            ("é", 1768075970),
            ("\U0001F600", -286536060),
            ("x\U0001F600", -121967487),
        ],
    )
    def test_persistent_string_hash(self, text, expected):
        assert persistent_string_hash(text) == expected

    def test_document(self):
        assert persistent_hash(True) == -1939386455
        assert persistent_hash([1, True, None]) == -1130685728
        assert persistent_hash({"a": [1, True, None], "b": "x"}) == -1120133787


class TestPersistentHashProperties:
    def test_consistent_with_equality(self, trees, rng):
        for tree in trees:
            copy = reordered(tree, rng)
            assert json_equals(tree, copy)
            assert persistent_hash(tree) == persistent_hash(copy)

    def test_object_order_independent(self):
        assert persistent_hash({"a": 1, "b": 2}) == persistent_hash({"b": 2, "a": 1})

    def test_array_order_sensitive(self):
        assert persistent_hash([1, 2]) != persistent_hash([2, 1])

    def test_variants_differ(self):
        values = [None, True, False, 0, 1, 1.0, "", "1", "null", [], {}, [None], {"": None}]
        hashes = {persistent_hash(v) for v in values}
        assert len(hashes) == len(values)

    def test_deterministic_within_process(self, trees):
        assert [persistent_hash(t) for t in trees] == [persistent_hash(t) for t in trees]

    def test_range(self, trees):
        for tree in trees:
            assert INT32_MIN <= persistent_hash(tree) <= INT32_MAX

    def test_numpy_values(self):
        assert persistent_hash(np.int32(5)) == persistent_hash(5)
        assert persistent_hash(np.bool_(False)) == persistent_hash(False)
        assert persistent_hash(np.arange(3)) == persistent_hash([0, 1, 2])
        assert persistent_hash({"m": np.eye(2, dtype=int)}) == persistent_hash({"m": [[1, 0], [0, 1]]})


class TestPersistentHashAcrossProcesses:
    DOC = '{"name": "caf\\u00e9", "tags": ["x", "y"], "n": 3.25, "ok": true, "none": null}'

    def _hash_in_subprocess(self, seed: str) -> int:
        env = dict(os.environ)
        env["PYTHONHASHSEED"] = seed
        env["PYTHONPATH"] = str(PROJECT_ROOT) + os.pathsep + env.get("PYTHONPATH", "")
        code = (
            "import json, sys, jsontree; "
            "print(jsontree.persistent_hash(json.loads(sys.argv[1])))"
        )
        out = subprocess.run(
            [sys.executable, "-c", code, self.DOC],
            env=env,
            capture_output=True,
            text=True,
            check=True,
        )
        return int(out.stdout.strip())

    def test_independent_of_hash_seed(self):
        expected = persistent_hash(json.loads(self.DOC))
        assert self._hash_in_subprocess("0") == expected
        assert self._hash_in_subprocess("12345") == expected


class TestPersistentHashLimits:
    def test_deep_nesting_does_not_recurse(self):
        depth = 100_000
        assert persistent_hash(nested_arrays(depth)) == persistent_hash(nested_arrays(depth))

    def test_max_depth(self):
        assert persistent_hash([[1]], max_depth=2) == persistent_hash([[1]])
        with pytest.raises(NestingDepthError) as excinfo:
            persistent_hash([[1]], max_depth=1)
        assert excinfo.value.limit == 1

    def test_max_depth_zero_allows_scalars(self):
        assert persistent_hash("x", max_depth=0) == persistent_hash("x")
        with pytest.raises(NestingDepthError):
            persistent_hash({}, max_depth=0)
