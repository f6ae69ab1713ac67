"""
Timing comparison of the merge sort against ``list.sort``.

Every dataset is turned into ``(value, position)`` records before timing,
so the keyed and reversed runs can be checked for stability: after a
stable sort by value, equal values must still be ordered by position.
"""

import logging
import random
import time
from concurrent.futures import ProcessPoolExecutor
from operator import itemgetter

import matplotlib.pyplot as plt

from sortlab.sorter import is_sorted, merge_sort, sort

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 100_000
DEFAULT_STEP = 10_000
DEFAULT_REPS = 3
RANDOM_MAX = 10_000_000
FEW_DISTINCT = 3

by_value = itemgetter(0)


def value_descending(a, b):
    return a[0] > b[0]


def stable_descending(a, b):
    # value descending, ties by original position
    if a[0] != b[0]:
        return a[0] > b[0]
    return a[1] < b[1]


def natural(arr):
    return merge_sort(arr)


def keyed(arr):
    sort(arr, key=by_value)
    return arr


def reversed_keyed(arr):
    sort(arr, key=by_value, reverse=True)
    return arr


def custom_less(arr):
    sort(arr, value_descending)
    return arr


def builtin_keyed(arr):
    arr.sort(key=by_value)
    return arr


# label, sort function, relation the result must satisfy
SORTERS = (
    ("merge_sort", natural, None),
    ("merge_sort key=", keyed, None),
    ("merge_sort reverse=True", reversed_keyed, stable_descending),
    ("merge_sort less=desc", custom_less, stable_descending),
    (".sort(key=)", builtin_keyed, None),
)


def _check_reps(reps):
    if reps < 1:
        raise ValueError("reps must be >= 1")


def tag(values):
    return [(v, i) for i, v in enumerate(values)]


def measure(label, sort_fn, base_arr, reps=DEFAULT_REPS, verify_less=None):
    _check_reps(reps)
    if len(base_arr) <= 1:
        return 0.0

    timings = []
    for _ in range(reps):
        arr = list(base_arr)
        start = time.perf_counter()
        sort_fn(arr)
        timings.append(time.perf_counter() - start)
        if not is_sorted(arr, less=verify_less):
            raise RuntimeError(f"{label} left {len(arr)} records out of order")
    return min(timings)


def bench_one_n(args):
    n, base_arr, reps = args
    return n, [measure(label, fn, base_arr, reps, verify) for label, fn, verify in SORTERS]


def run_bench(tasks, reps=DEFAULT_REPS, max_workers=None):
    """
    tasks - list of (n, records) pairs
    returns a dict label -> list of best times, in task order
    """
    _check_reps(reps)
    times = {label: [] for label, _, _ in SORTERS}
    jobs = [(n, records, reps) for n, records in tasks]

    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        for n, results in executor.map(bench_one_n, jobs):
            logger.debug("n=%d: %s", n, results)
            for label, t in zip(times, results):
                times[label].append(t)

    return times


def random_values(n, rng):
    return [rng.randint(1, RANDOM_MAX) for _ in range(n)]


def ascending(n, rng):
    return list(range(n))


def descending(n, rng):
    return list(range(n, 0, -1))


def zigzag(n, rng):
    """n, 1, n-1, 2, ... : every merge alternates between its halves."""
    return [n - i // 2 if i % 2 == 0 else i // 2 + 1 for i in range(n)]


def few_distinct(n, rng):
    pool = rng.sample(range(1, 21), FEW_DISTINCT)
    return [rng.choice(pool) for _ in range(n)]


DATASETS = {
    "random": ("Random values", random_values),
    "ascending": ("Already sorted", ascending),
    "descending": ("Reverse sorted", descending),
    "zigzag": ("Alternating high/low", zigzag),
    "duplicates": (f"{FEW_DISTINCT} distinct values, stability checked", few_distinct),
}


def bench_sizes(max_size=DEFAULT_MAX_SIZE, step=DEFAULT_STEP):
    if step <= 0:
        raise ValueError("step must be > 0")
    return list(range(1, max_size + 1, step))


def plot_results(sizes, series, title, output=None):
    """Line chart of best times per size; saved to ``output`` or shown."""
    fig, ax = plt.subplots(figsize=(10, 6))
    for label, values in series:
        ax.plot(sizes, values, marker=".", label=label)

    ax.set(title=title, xlabel="Records", ylabel="Best time, s")
    ax.grid(True)
    ax.legend()
    fig.tight_layout()

    if output is None:
        plt.show()
    else:
        fig.savefig(output)
        logger.info("saved %s", output)
    plt.close(fig)


def run_datasets(names, sizes, reps=DEFAULT_REPS, max_workers=None, output_dir=None, seed=None):
    _check_reps(reps)
    rng = random.Random(seed)
    results = {}
    for name in names:
        title, generate = DATASETS[name]
        logger.info("benchmarking %s data over %d sizes", name, len(sizes))

        tasks = [(n, tag(generate(n, rng))) for n in sizes]
        times = run_bench(tasks, reps=reps, max_workers=max_workers)
        results[name] = times

        output = None if output_dir is None else output_dir / f"{name}.png"
        plot_results(sizes, list(times.items()), title, output=output)
    return results
