"""
Single-threaded top-down merge sort.

The recursion (split at the floor midpoint, sort both halves, merge) is
driven by an explicit work stack instead of Python call frames, so the
interpreter recursion limit never applies. The split points and the order
of merges are identical to the textbook recursive version.
"""

import logging
from typing import List, MutableSequence, Tuple

from .merger import check_range, merge

logger = logging.getLogger(__name__)


def sort_range(seq: MutableSequence[int], low: int, high: int) -> None:
    """
    Sort seq[low..high] ascending in place.

    A range of zero or one element (low >= high) is left untouched.
    Reentrant: concurrent calls on disjoint ranges of the same sequence
    are safe.

    Args:
        seq: Sequence to sort in place
        low: First index (inclusive)
        high: Last index (inclusive)

    Raises:
        InvalidRangeError: If a non-trivial range falls outside the sequence
    """
    if low >= high:
        return
    check_range(seq, low, high)

    # (low, high, halves_sorted): a frame is pushed back with
    # halves_sorted=True after its two children, so it merges last
    stack: List[Tuple[int, int, bool]] = [(low, high, False)]
    while stack:
        lo, hi, halves_sorted = stack.pop()
        mid = (lo + hi) // 2
        if halves_sorted:
            merge(seq, lo, mid, hi)
            continue
        stack.append((lo, hi, True))
        if mid + 1 < hi:
            stack.append((mid + 1, hi, False))
        if lo < mid:
            stack.append((lo, mid, False))


def sort_single_thread(seq: MutableSequence[int]) -> None:
    """Sort the whole sequence in place on the calling thread."""
    n = len(seq)
    if n < 2:
        return
    logger.debug(f"Sequential merge sort of {n} elements")
    sort_range(seq, 0, n - 1)

