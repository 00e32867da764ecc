"""
Sorting package - in-place merge sort, single-threaded and fork/join parallel.

Usage:
    from sorting import sort_single_thread, sort_multi_thread, SortConfig

    sort_multi_thread(values, SortConfig(n_segments=8))
"""
from .errors import MergeSortError, InvalidRangeError, TaskFailureError, SortCancelledError
from .config import (
    SortConfig,
    SortState,
    SortSegment,
    MergeStep,
    TaskResult,
    SortProgress,
    SortResult,
    PARTITION_STRATEGIES,
)
from .merger import merge
from .sequential import sort_range, sort_single_thread
from .partitioner import partition, PartitionPlan, RangePartitioner
from .worker import sort_segment, merge_runs
from .coordinator import ParallelSortCoordinator
from .merge_sorter import MergeSorter, sort_multi_thread

__all__ = [
    # Errors
    'MergeSortError',
    'InvalidRangeError',
    'TaskFailureError',
    'SortCancelledError',
    # Configuration
    'SortConfig',
    'SortState',
    'SortSegment',
    'MergeStep',
    'TaskResult',
    'SortProgress',
    'SortResult',
    'PARTITION_STRATEGIES',
    # Primitives
    'merge',
    'sort_range',
    'sort_single_thread',
    # Partitioner
    'partition',
    'PartitionPlan',
    'RangePartitioner',
    # Workers
    'sort_segment',
    'merge_runs',
    # Coordinator
    'ParallelSortCoordinator',
    'MergeSorter',
    'sort_multi_thread',
]
