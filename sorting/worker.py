"""
Worker functions for the parallel merge sort.

Each function is one unit of work submitted to the coordinator's thread
pool. A unit only reads and writes its own index range of the shared
sequence, so units of the same phase need no locking. Exceptions are not
caught here: they travel through the future to the coordinator's barrier.
"""

import time
import logging
from typing import MutableSequence, Optional

from .config import SortSegment, MergeStep, TaskResult
from .errors import SortCancelledError
from .merger import merge
from .sequential import sort_range
from utils.cancellation import CancellationToken

logger = logging.getLogger(__name__)


def _check_cancelled(
    cancel_token: Optional[CancellationToken],
    phase: str,
    low: int,
    high: int
) -> None:
    if cancel_token is not None and cancel_token.is_cancelled:
        raise SortCancelledError(
            f"{phase} task [{low}, {high}] cancelled before start",
            phase=phase, low=low, high=high
        )


def sort_segment(
    seq: MutableSequence[int],
    segment: SortSegment,
    cancel_token: Optional[CancellationToken] = None
) -> TaskResult:
    """
    Sort one segment of the sequence in place.

    Args:
        seq: Shared sequence
        segment: Range owned by this task
        cancel_token: Optional token checked before starting

    Returns:
        TaskResult with timing information
    """
    _check_cancelled(cancel_token, 'sort', segment.low, segment.high)

    start_time = time.time()
    sort_range(seq, segment.low, segment.high)
    elapsed = time.time() - start_time

    logger.debug(
        f"Segment {segment.segment_id} [{segment.low}, {segment.high}] "
        f"sorted {segment.n_elements} elements in {elapsed*1000:.1f}ms"
    )
    return TaskResult(
        phase='sort',
        low=segment.low,
        high=segment.high,
        elapsed_time=elapsed,
        segment_id=segment.segment_id,
    )


def merge_runs(
    seq: MutableSequence[int],
    step: MergeStep,
    cancel_token: Optional[CancellationToken] = None
) -> TaskResult:
    """
    Merge the two sorted runs described by one merge-tree step.

    Args:
        seq: Shared sequence
        step: Boundaries taken from the partition plan
        cancel_token: Optional token checked before starting

    Returns:
        TaskResult with timing information
    """
    _check_cancelled(cancel_token, 'merge', step.low, step.high)

    start_time = time.time()
    merge(seq, step.low, step.mid, step.high)
    elapsed = time.time() - start_time

    logger.debug(
        f"Level {step.level} merge [{step.low}, {step.mid}] + [{step.mid + 1}, {step.high}] "
        f"done in {elapsed*1000:.1f}ms"
    )
    return TaskResult(
        phase='merge',
        low=step.low,
        high=step.high,
        elapsed_time=elapsed,
        level=step.level,
    )
