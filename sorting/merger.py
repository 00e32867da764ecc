"""
In-place merge of two adjacent sorted runs.

Works on Python lists and one-dimensional NumPy integer arrays alike.
Both runs are copied into temporary buffers before the write-back, so
NumPy slices (which are views) never alias the output positions.
"""

import numpy as np
from typing import MutableSequence

from .errors import InvalidRangeError


def check_range(seq: MutableSequence[int], low: int, high: int) -> None:
    """
    Validate that [low, high] is a usable closed range of seq.

    Raises:
        InvalidRangeError: If low > high or either index is out of bounds
    """
    n = len(seq)
    if low > high:
        raise InvalidRangeError(f"Invalid range [{low}, {high}]: low > high", low, high)
    if low < 0 or high >= n:
        raise InvalidRangeError(
            f"Range [{low}, {high}] out of bounds for sequence of length {n}", low, high
        )


def _copy_run(seq: MutableSequence[int], start: int, stop: int):
    run = seq[start:stop]
    if isinstance(run, np.ndarray):
        return run.copy()
    return list(run)


def merge(seq: MutableSequence[int], low: int, mid: int, high: int) -> None:
    """
    Merge sorted runs seq[low..mid] and seq[mid+1..high] in place.

    Ties take the element from the left run first. Positions outside
    [low, high] are not touched.

    Args:
        seq: Sequence to merge in place
        low: First index of the left run
        mid: Last index of the left run
        high: Last index of the right run

    Raises:
        InvalidRangeError: If low <= mid < high does not hold or an index is out of bounds
    """
    check_range(seq, low, high)
    if not low <= mid < high:
        raise InvalidRangeError(
            f"Invalid merge boundaries low={low}, mid={mid}, high={high}", low, high
        )

    left = _copy_run(seq, low, mid + 1)
    right = _copy_run(seq, mid + 1, high + 1)
    n1 = len(left)
    n2 = len(right)

    # i and j are pointers into each buffer, k is the write position
    i = j = 0
    k = low
    while i < n1 and j < n2:
        if left[i] <= right[j]:
            seq[k] = left[i]
            i += 1
        else:
            seq[k] = right[j]
            j += 1
        k += 1

    # Only one of the buffers has a tail left
    while i < n1:
        seq[k] = left[i]
        i += 1
        k += 1
    while j < n2:
        seq[k] = right[j]
        j += 1
        k += 1
