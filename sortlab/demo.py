"""
Batch demonstration of the merge sort.

Walks through the same checks a reviewer would run by hand: basic
ordering, edge cases, timing on random data, custom relations and
non-integer element types. Every check is verified with ``is_sorted``
and a failure raises :class:`DemoCheckFailed`.
"""

from __future__ import annotations

import logging
import random
import sys
import time
from collections.abc import Sequence
from typing import TextIO

from sortlab.errors import SortError
from sortlab.sorter import first_inversion, is_sorted, sort, sort_buffer

logger = logging.getLogger(__name__)

BASIC_DATA = (45, 12, 78, 22, 90, 5, 60)
FLOAT_DATA = (3.14, 1.41, 2.71, 0.57, 1.73)
STRING_DATA = ("banana", "apple", "cherry", "date")
REAL_WORLD_DATA = (123, 45, 678, 90, 234, 567, 12, 345)

PERFORMANCE_SIZES = (1_000, 5_000, 10_000)
RANDOM_MIN = 1
RANDOM_MAX = 10_000


class DemoCheckFailed(SortError, AssertionError):
    pass


def format_sequence(seq: Sequence[object]) -> str:
    return " ".join(str(x) for x in seq)


def random_array(size: int, rng: random.Random) -> list[int]:
    return [rng.randint(RANDOM_MIN, RANDOM_MAX) for _ in range(size)]


def descending(a, b) -> bool:
    return a > b


def _expect(condition: bool, what: str) -> None:
    if not condition:
        raise DemoCheckFailed(f"check failed: {what}")


def _expect_sorted(seq, what: str, less=None) -> None:
    idx = first_inversion(seq, less=less)
    if idx is not None:
        raise DemoCheckFailed(
            f"check failed: {what} (inversion at index {idx}: "
            f"{seq[idx + 1]!r} precedes {seq[idx]!r} under the relation)"
        )


def _banner(out: TextIO, title: str) -> None:
    print(title, file=out)
    print("=" * len(title), file=out)


def basic_functionality(out: TextIO) -> None:
    _banner(out, "1. BASIC FUNCTIONALITY TESTS")

    numbers = list(BASIC_DATA)
    print(f"Input:    {format_sequence(numbers)}", file=out)

    sort(numbers)
    print(f"Sorted:   {format_sequence(numbers)}", file=out)

    _expect_sorted(numbers, "basic sorting")
    _expect(numbers == [5, 12, 22, 45, 60, 78, 90], "basic sorting result")
    print("✓ Basic sorting test passed\n", file=out)


def edge_cases(out: TextIO) -> None:
    _banner(out, "2. EDGE CASE TESTS")

    empty: list[int] = []
    sort(empty)
    _expect(empty == [], "empty array")
    sort_buffer(None, 0)
    print("✓ Empty array test passed", file=out)

    single = [42]
    sort(single)
    _expect(single == [42], "single element")
    print("✓ Single element test passed", file=out)

    already = [1, 2, 3, 4, 5]
    sort(already)
    _expect_sorted(already, "already sorted")
    _expect(already == [1, 2, 3, 4, 5], "already sorted is unchanged")
    print("✓ Already sorted test passed", file=out)

    reverse = [5, 4, 3, 2, 1]
    sort(reverse)
    _expect_sorted(reverse, "reverse sorted")
    print("✓ Reverse sorted test passed", file=out)

    same = [1, 1, 1]
    sort(same, descending)
    _expect(same == [1, 1, 1] and is_sorted(same, less=descending), "all equal")
    print("✓ All-equal elements test passed\n", file=out)


def performance(out: TextIO, rng: random.Random, sizes=PERFORMANCE_SIZES) -> None:
    _banner(out, "3. PERFORMANCE TESTS")

    for size in sizes:
        data = random_array(size, rng)

        start = time.perf_counter()
        sort(data)
        elapsed_us = (time.perf_counter() - start) * 1_000_000

        _expect_sorted(data, f"performance run of {size} elements")
        logger.debug("sorted %d random elements in %.0f us", size, elapsed_us)
        print(
            f"✓ Sorted {size} elements in {int(elapsed_us)} μs "
            f"({elapsed_us / 1000.0:.3f} ms)",
            file=out,
        )
    print(file=out)


def custom_comparators(out: TextIO) -> None:
    _banner(out, "4. CUSTOM COMPARATOR TESTS")

    numbers = list(BASIC_DATA)
    sort(numbers, descending)

    _expect_sorted(numbers, "descending order", less=descending)
    _expect(numbers == [90, 78, 60, 45, 22, 12, 5], "descending order result")
    print("✓ Descending order test passed", file=out)
    print(f"Descending: {format_sequence(numbers)}\n", file=out)


def type_variations(out: TextIO) -> None:
    _banner(out, "5. TYPE VARIATION TESTS")

    doubles = list(FLOAT_DATA)
    sort(doubles)
    _expect_sorted(doubles, "double precision")
    print("✓ Double precision test passed", file=out)

    strings = list(STRING_DATA)
    sort(strings)
    _expect_sorted(strings, "string sorting")
    _expect(strings == ["apple", "banana", "cherry", "date"], "string sorting result")
    print("✓ String sorting test passed", file=out)
    print(f"Sorted strings: {format_sequence(strings)}\n", file=out)


def real_world(out: TextIO) -> None:
    print("ADDITIONAL DEMONSTRATION:", file=out)
    print("============================", file=out)

    data = list(REAL_WORLD_DATA)
    print(f"Real-world data: {format_sequence(data)}", file=out)
    sort(data)
    _expect_sorted(data, "real-world data")
    print(f"Sorted: {format_sequence(data)}", file=out)


def run_demo(out: TextIO | None = None, seed: int | None = None) -> None:
    if out is None:
        out = sys.stdout
    rng = random.Random(seed)

    print("=== MERGE SORT DEMONSTRATION ===\n", file=out)

    for section in (basic_functionality, edge_cases):
        logger.info("running %s", section.__name__)
        section(out)

    logger.info("running performance")
    performance(out, rng)

    for section in (custom_comparators, type_variations):
        logger.info("running %s", section.__name__)
        section(out)

    print("✓ All checks completed successfully!\n", file=out)
    real_world(out)
