"""
Exceptions raised by the merge sort core.

Partition underflow is deliberately absent: the partitioner signals it by
returning an empty plan, and the coordinator falls back to a sequential sort.
"""

from typing import Optional


class MergeSortError(Exception):
    """Base class for all merge sort errors."""


class InvalidRangeError(MergeSortError, ValueError):
    """Raised when a range passed to the merger or sequential sorter is invalid."""

    def __init__(self, message: str, low: Optional[int] = None, high: Optional[int] = None):
        super().__init__(message)
        self.low = low
        self.high = high


class TaskFailureError(MergeSortError):
    """
    Raised when a concurrent sort or merge task fails.

    The sequence is left partially sorted. Retrying in place is not safe;
    sort a fresh unsorted copy instead.

    Attributes:
        phase: 'sort' or 'merge'
        low: First index of the failed task's range
        high: Last index of the failed task's range
    """

    def __init__(
        self,
        message: str,
        phase: Optional[str] = None,
        low: Optional[int] = None,
        high: Optional[int] = None
    ):
        super().__init__(message)
        self.phase = phase
        self.low = low
        self.high = high


class SortCancelledError(TaskFailureError):
    """Raised when a parallel sort observes a cancellation request."""
