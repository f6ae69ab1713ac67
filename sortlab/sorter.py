from __future__ import annotations

import operator
from collections.abc import MutableSequence, Sequence
from typing import Callable, TypeVar

from sortlab.errors import InvalidArgument, ResourceExhaustion

T = TypeVar("T")

Less = Callable[[T, T], bool]


def _ordering(
    less: Less | None,
    key: Callable[[T], object] | None,
    reverse: bool,
) -> Less:
    base = operator.lt if less is None else less

    if key is None:
        keyed = base
    else:
        def keyed(x, y, base=base, key=key):
            return base(key(x), key(y))

    if not reverse:
        return keyed

    def descending(x, y, keyed=keyed):
        return keyed(y, x)

    return descending


def _checked_length(seq: Sequence[T], length: int | None) -> int:
    size = len(seq)
    if length is None:
        return size

    length = operator.index(length)
    if length < 0:
        raise InvalidArgument(
            f"negative length {length}", length=length, size=size
        )
    if length > size:
        raise InvalidArgument(
            f"length {length} exceeds buffer of {size} elements",
            length=length,
            size=size,
        )
    return length


def _merge(
    a: MutableSequence[T],
    low: int,
    mid: int,
    high: int,
    less: Less,
) -> None:
    try:
        left = [a[i] for i in range(low, mid + 1)]
        right = [a[j] for j in range(mid + 1, high + 1)]
    except MemoryError as exc:
        raise ResourceExhaustion(
            f"cannot allocate merge buffers for {high - low + 1} elements",
            requested=high - low + 1,
        ) from exc

    n1 = len(left)
    n2 = len(right)
    i = j = 0
    k = low

    try:
        while i < n1 and j < n2:
            li = left[i]
            rj = right[j]
            # ties go left
            if less(rj, li):
                a[k] = rj
                j += 1
            else:
                a[k] = li
                i += 1
            k += 1
    finally:
        # Also runs when less() raises, so [low, high] stays a permutation.
        while i < n1:
            a[k] = left[i]
            i += 1
            k += 1

        while j < n2:
            a[k] = right[j]
            j += 1
            k += 1


def _merge_sort_recursive(
    a: MutableSequence[T],
    low: int,
    high: int,
    less: Less,
) -> None:
    if low >= high:
        return

    mid = low + (high - low) // 2
    _merge_sort_recursive(a, low, mid, less)
    _merge_sort_recursive(a, mid + 1, high, less)
    _merge(a, low, mid, high, less)


def sort(
    a: MutableSequence[T],
    less: Less | None = None,
    *,
    key: Callable[[T], object] | None = None,
    reverse: bool = False,
) -> None:
    """
    Stable in-place merge sort of ``a``.

    ``less(x, y)`` must be a strict weak ordering; it defaults to ``<``.
    ``key`` and ``reverse`` behave as in ``list.sort`` and are applied on
    top of ``less``.
    """
    n = len(a)
    if n <= 1:
        return

    _merge_sort_recursive(a, 0, n - 1, _ordering(less, key, reverse))


def sort_buffer(
    buffer: MutableSequence[T] | None,
    length: int,
    less: Less | None = None,
    *,
    key: Callable[[T], object] | None = None,
    reverse: bool = False,
) -> None:
    """
    Sort the first ``length`` elements of ``buffer`` in place.

    A ``None`` buffer is accepted only together with ``length == 0``.
    Anything else that does not describe a span of ``buffer`` raises
    :class:`InvalidArgument`.
    """
    if buffer is None:
        length = operator.index(length)
        if length != 0:
            raise InvalidArgument(
                f"null buffer passed with length {length}", length=length
            )
        return

    n = _checked_length(buffer, length)
    if n <= 1:
        return

    _merge_sort_recursive(buffer, 0, n - 1, _ordering(less, key, reverse))


def first_inversion(
    seq: Sequence[T] | None,
    length: int | None = None,
    less: Less | None = None,
    *,
    key: Callable[[T], object] | None = None,
    reverse: bool = False,
) -> int | None:
    if seq is None:
        return None

    n = _checked_length(seq, length)
    if n <= 1:
        return None

    less = _ordering(less, key, reverse)
    prev = seq[0]
    for i in range(1, n):
        cur = seq[i]
        if less(cur, prev):
            return i - 1
        prev = cur
    return None


def is_sorted(
    seq: Sequence[T] | None,
    length: int | None = None,
    less: Less | None = None,
    *,
    key: Callable[[T], object] | None = None,
    reverse: bool = False,
) -> bool:
    """Return True when no adjacent pair of ``seq[:length]`` is inverted."""
    return first_inversion(seq, length, less, key=key, reverse=reverse) is None


def merge_sort(
    a: MutableSequence[T],
    less: Less | None = None,
    *,
    key: Callable[[T], object] | None = None,
    reverse: bool = False,
) -> MutableSequence[T]:
    sort(a, less, key=key, reverse=reverse)
    return a
