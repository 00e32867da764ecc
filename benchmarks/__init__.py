"""
Merge sort benchmarking suite

Tools for timing the single-threaded and parallel merge sorts.
"""

from .profile_sorters import (
    profile_sort,
    run_benchmark_suite,
    print_summary,
    SortTiming,
)

__all__ = [
    'profile_sort',
    'run_benchmark_suite',
    'print_summary',
    'SortTiming',
]
