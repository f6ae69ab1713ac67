from __future__ import annotations

import array
import random
from collections import Counter
from collections.abc import MutableSequence

import pytest

from sortlab.errors import InvalidArgument, ResourceExhaustion, SortError
from sortlab.sorter import first_inversion, is_sorted, merge_sort, sort, sort_buffer


def descending(a, b):
    return a > b


class Cells(MutableSequence):
    """Index-only sequence: no slicing, no list methods."""

    def __init__(self, items):
        self._items = list(items)

    def __getitem__(self, i):
        if not isinstance(i, int):
            raise TypeError("integer index required")
        return self._items[i]

    def __setitem__(self, i, value):
        if not isinstance(i, int):
            raise TypeError("integer index required")
        self._items[i] = value

    def __delitem__(self, i):
        del self._items[i]

    def __len__(self):
        return len(self._items)

    def insert(self, i, value):
        self._items.insert(i, value)


@pytest.mark.parametrize(
    "data, less, expected",
    [
        ([45, 12, 78, 22, 90, 5, 60], None, [5, 12, 22, 45, 60, 78, 90]),
        ([5, 4, 3, 2, 1], None, [1, 2, 3, 4, 5]),
        ([1, 1, 1], None, [1, 1, 1]),
        ([1, 1, 1], descending, [1, 1, 1]),
        (["banana", "apple", "cherry", "date"], None, ["apple", "banana", "cherry", "date"]),
        ([45, 12, 78, 22, 90, 5, 60], descending, [90, 78, 60, 45, 22, 12, 5]),
        ([], None, []),
        ([7], None, [7]),
        ([3.14, 1.41, 2.71, 0.57, 1.73], None, [0.57, 1.41, 1.73, 2.71, 3.14]),
    ],
)
def test_sort_scenarios(data, less, expected):
    sort(data, less)
    assert data == expected
    assert is_sorted(data, less=less)


def test_sort_random_inputs_are_ordered_permutations():
    rng = random.Random(2024)
    for n in (2, 3, 10, 101, 1000):
        data = [rng.randint(-50, 50) for _ in range(n)]
        before = Counter(data)
        sort(data)
        assert Counter(data) == before
        assert data == sorted(data)
        assert is_sorted(data)


def test_sort_is_stable():
    rng = random.Random(7)
    items = [(rng.randint(0, 5), i) for i in range(300)]
    sort(items, lambda a, b: a[0] < b[0])
    for a, b in zip(items, items[1:]):
        if a[0] == b[0]:
            assert a[1] < b[1]
    assert items == sorted(items, key=lambda x: x[0])


def test_reverse_is_stable():
    items = [(1, "a"), (2, "b"), (1, "c"), (2, "d")]
    sort(items, key=lambda x: x[0], reverse=True)
    assert items == [(2, "b"), (2, "d"), (1, "a"), (1, "c")]


def test_key_with_custom_less():
    words = ["ccc", "a", "bb", "dddd"]
    sort(words, descending, key=len)
    assert words == ["dddd", "ccc", "bb", "a"]


def test_sort_is_idempotent():
    data = [9, 3, 7, 3, 1]
    sort(data)
    once = list(data)
    sort(data)
    assert data == once


def test_merge_sort_returns_same_object():
    data = [3, 1, 2]
    assert merge_sort(data) is data
    assert data == [1, 2, 3]


def test_sort_large_input_stays_within_recursion_limit():
    data = list(range(20_000, 0, -1))
    sort(data)
    assert data == list(range(1, 20_001))


def test_sort_array_and_bytearray():
    ints = array.array("i", [4, -1, 3, 0])
    sort(ints)
    assert ints.tolist() == [-1, 0, 3, 4]

    raw = bytearray(b"dcba")
    sort(raw)
    assert bytes(raw) == b"abcd"


def test_sort_index_only_sequence():
    cells = Cells([3, 1, 2, 5, 4])
    sort(cells)
    assert list(cells) == [1, 2, 3, 4, 5]


def test_inconsistent_relation_still_yields_permutation():
    rng = random.Random(99)
    data = list(range(200))
    sort(data, lambda a, b: rng.random() < 0.5)
    assert sorted(data) == list(range(200))


def test_error_from_relation_propagates_and_keeps_permutation():
    calls = 0

    def flaky(a, b):
        nonlocal calls
        calls += 1
        if calls == 25:
            raise RuntimeError("boom")
        return a < b

    data = list(range(40, 0, -1))
    with pytest.raises(RuntimeError, match="boom"):
        sort(data, flaky)
    assert sorted(data) == list(range(1, 41))


def test_buffer_allocation_failure_is_resource_exhaustion():
    class Exhausted(Cells):
        def __getitem__(self, i):
            raise MemoryError

    with pytest.raises(ResourceExhaustion) as info:
        sort(Exhausted([2, 1]))

    assert isinstance(info.value, MemoryError)
    assert isinstance(info.value, SortError)
    assert isinstance(info.value.__cause__, MemoryError)
    assert info.value.requested == 2


def test_sort_buffer_sorts_prefix_only():
    buf = [3, 2, 1, 0]
    sort_buffer(buf, 3)
    assert buf == [1, 2, 3, 0]


def test_sort_buffer_with_relation():
    buf = [1, 5, 3]
    sort_buffer(buf, 3, descending)
    assert buf == [5, 3, 1]


@pytest.mark.parametrize("length", [0, 1])
def test_sort_buffer_short_lengths_are_noops(length):
    buf = [2, 1]
    sort_buffer(buf, length)
    assert buf == [2, 1]


def test_sort_buffer_null_with_zero_length_is_noop():
    sort_buffer(None, 0)


def test_sort_buffer_null_with_length_raises():
    with pytest.raises(InvalidArgument) as info:
        sort_buffer(None, 3)
    assert isinstance(info.value, ValueError)
    assert info.value.length == 3


@pytest.mark.parametrize("length", [-1, 5])
def test_sort_buffer_rejects_out_of_range_length(length):
    buf = [4, 3, 2, 1]
    with pytest.raises(InvalidArgument) as info:
        sort_buffer(buf, length)
    assert info.value.size == 4
    assert buf == [4, 3, 2, 1]


def test_sort_never_raises_invalid_argument_for_empty():
    data = []
    sort(data)
    assert data == []


@pytest.mark.parametrize("seq", [None, [], [1]])
def test_is_sorted_trivial_inputs(seq):
    assert is_sorted(seq)


def test_is_sorted_null_ignores_length():
    assert is_sorted(None, 10)


def test_is_sorted_detects_inversion():
    assert not is_sorted([1, 3, 2])
    assert is_sorted([1, 3, 2], 2)
    assert is_sorted([3, 2, 2, 1], less=descending)
    assert is_sorted([1, 1, 2])


def test_is_sorted_checks_bounds():
    with pytest.raises(InvalidArgument):
        is_sorted([1, 2], 3)


def test_is_sorted_is_read_only():
    data = [2, 1]
    is_sorted(data)
    assert data == [2, 1]


def test_first_inversion():
    assert first_inversion([1, 2, 5, 4, 3]) == 2
    assert first_inversion([1, 2, 3]) is None
    assert first_inversion([3, 2, 1], reverse=True) is None
    assert first_inversion(None) is None
