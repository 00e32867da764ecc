"""
Sorter Profiling Script

Times the single-threaded and the parallel merge sort on random inputs of
several sizes and fan-outs, and checks both against numpy's sort.

The segment sorts run on threads, so under the GIL the parallel sort is
not expected to beat the single-threaded one; the numbers show the cost
of partitioning and of the merge tree.
"""

import json
import sys
import time
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sorting import ParallelSortCoordinator, SortConfig, sort_single_thread
from utils.sample_data import generate_random_sequence


DEFAULT_SIZES = (1_000, 10_000, 100_000)
DEFAULT_FAN_OUTS = (2, 4, 8)


@dataclass
class SortTiming:
    """Timing of one sort run."""
    mode: str            # 'single' or 'multi'
    n_elements: int
    n_segments: int
    elapsed_ms: float
    correct: bool


def profile_sort(values: np.ndarray, n_segments: Optional[int] = None) -> SortTiming:
    """
    Sort a copy of values and time it.

    Args:
        values: Input sequence (not modified)
        n_segments: Fan-out for the parallel sort, None for single-threaded

    Returns:
        SortTiming for the run
    """
    work = values.copy()
    start = time.perf_counter()
    if n_segments is None:
        sort_single_thread(work)
        mode, used = 'single', 1
    else:
        result = ParallelSortCoordinator(SortConfig(n_segments=n_segments)).run(work)
        mode, used = 'multi', result.n_segments
    elapsed_ms = (time.perf_counter() - start) * 1000

    return SortTiming(
        mode=mode,
        n_elements=len(values),
        n_segments=used,
        elapsed_ms=elapsed_ms,
        correct=bool(np.array_equal(work, np.sort(values))),
    )


def run_benchmark_suite(
    sizes: Sequence[int] = DEFAULT_SIZES,
    fan_outs: Sequence[int] = DEFAULT_FAN_OUTS,
    seed: int = 42
) -> pd.DataFrame:
    """
    Profile every size with the single-threaded sort and every fan-out.

    Returns:
        DataFrame with one row per run
    """
    timings: List[SortTiming] = []
    for size in dict.fromkeys(sizes):
        values = generate_random_sequence(size, size, seed=seed)
        print(f">>> {size:,} elements")
        timings.append(profile_sort(values))
        for n_segments in fan_outs:
            timings.append(profile_sort(values, n_segments))

    return pd.DataFrame([asdict(t) for t in timings])


def print_summary(df: pd.DataFrame):
    """Pretty print the timing table with speedup against the single-threaded run."""
    single = df[df['mode'] == 'single'].groupby('n_elements')['elapsed_ms'].first()
    df = df.assign(speedup=df['n_elements'].map(single) / df['elapsed_ms'])

    print(f"\n{'='*70}")
    print("SUMMARY - Merge sort timings")
    print(f"{'='*70}")
    print(df.to_string(index=False, float_format=lambda v: f"{v:.2f}"))

    if not df['correct'].all():
        print("\nWARNING: some runs produced unsorted output")


def save_results(df: pd.DataFrame, path: Path):
    data = {
        'timestamp': datetime.now().isoformat(),
        'results': df.to_dict(orient='records'),
    }
    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
    print(f"\nResults saved to: {path}")


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Profile merge sort implementations')
    parser.add_argument('--quick', action='store_true', help='Run with small sizes only')
    parser.add_argument('--sizes', type=int, nargs='+', help='Input sizes to profile')
    parser.add_argument('--fan-outs', type=int, nargs='+', help='Segment counts to profile')
    parser.add_argument('--output', '-o', type=str, default=None, help='Output JSON file for results')
    args = parser.parse_args()

    if args.sizes:
        sizes = args.sizes
    elif args.quick:
        sizes = (1_000, 10_000)
    else:
        sizes = DEFAULT_SIZES

    results = run_benchmark_suite(sizes, args.fan_outs or DEFAULT_FAN_OUTS)
    print_summary(results)

    if args.output:
        save_results(results, Path(args.output))
