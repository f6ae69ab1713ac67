from __future__ import annotations

import logging
import re
import sys
import time
from typing import TextIO

from sortlab.demo import descending, format_sequence
from sortlab.sorter import is_sorted, sort

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[,\s]+")

PROMPT = "Enter integers separated by spaces or commas: "
REPEAT_PROMPT = "Sort another list? (y/n): "


def parse_numbers(line: str) -> list[int]:
    numbers = []
    for token in _SEPARATORS.split(line.strip()):
        if not token:
            continue
        try:
            numbers.append(int(token))
        except ValueError:
            raise ValueError(f"not an integer: {token!r}") from None
    return numbers


def _ask(prompt: str, stdin: TextIO, stdout: TextIO) -> str | None:
    stdout.write(prompt)
    stdout.flush()
    line = stdin.readline()
    if not line:
        return None
    return line


def _report(label: str, numbers: list[int], ok: bool, stdout: TextIO) -> None:
    print(f"{label:<12}{format_sequence(numbers)}", file=stdout)
    print(f"Verification: {'sorted' if ok else 'NOT sorted'}", file=stdout)


def sort_and_report(numbers: list[int], stdout: TextIO, descending_pass: bool = True) -> bool:
    print(f"{'Input:':<12}{format_sequence(numbers)}", file=stdout)

    start = time.perf_counter()
    sort(numbers)
    elapsed_us = (time.perf_counter() - start) * 1_000_000
    ok = is_sorted(numbers)
    _report("Sorted:", numbers, ok, stdout)
    print(f"Time: {elapsed_us:.0f} μs", file=stdout)

    if descending_pass:
        sort(numbers, descending)
        ok_desc = is_sorted(numbers, less=descending)
        _report("Descending:", numbers, ok_desc, stdout)
        ok = ok and ok_desc

    return ok


def run_session(
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    descending_pass: bool = True,
) -> int:
    """
    Prompt for lists of integers until the user declines or input ends.

    Returns the number of lists that were sorted.
    """
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout

    sorted_count = 0
    while True:
        line = _ask(PROMPT, stdin, stdout)
        if line is None:
            print(file=stdout)
            break

        try:
            numbers = parse_numbers(line)
        except ValueError as exc:
            logger.debug("rejected input %r", line)
            print(f"Invalid input: {exc}", file=stdout)
            continue

        sort_and_report(numbers, stdout, descending_pass=descending_pass)
        sorted_count += 1
        logger.info("sorted list #%d (%d elements)", sorted_count, len(numbers))

        answer = _ask(REPEAT_PROMPT, stdin, stdout)
        if answer is None or not answer.strip().lower().startswith("y"):
            break

    return sorted_count
