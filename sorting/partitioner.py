"""
Range partitioner for the parallel merge sort.

Divides a closed index range into contiguous segments whose lengths differ
by at most one element. The resulting PartitionPlan is the only source of
segment boundaries: both the segment sorts and every merge of the merge
tree are derived from it.
"""

from dataclasses import dataclass, field
from typing import List

from .config import SortSegment, MergeStep, PARTITION_STRATEGIES


def _balanced_split_points(low: int, high: int, segments: int) -> List[int]:
    # The first (length % segments) pieces get one extra element
    base, extra = divmod(high - low + 1, segments)
    points = []
    start = low
    for i in range(segments - 1):
        start += base + (1 if i < extra else 0)
        points.append(start)
    return points


def _bisect_split_points(low: int, high: int, segments: int) -> List[int]:
    # In-order walk of the bisection tree, so points come out sorted
    if segments <= 1 or low >= high:
        return []
    mid = (low + high) // 2
    half = segments // 2
    return (
        _bisect_split_points(low, mid, half)
        + [mid + 1]
        + _bisect_split_points(mid + 1, high, half)
    )


def partition(low: int, high: int, segments: int, strategy: str = 'balanced') -> List[int]:
    """
    Compute the split points dividing [low, high] into `segments` pieces.

    Segment i spans [points[i-1], points[i] - 1], with low and high + 1 as
    the outer boundaries. Returns an empty list when the range holds fewer
    elements than requested segments.

    Args:
        low: First index of the range (inclusive)
        high: Last index of the range (inclusive)
        segments: Number of segments, >= 1
        strategy: 'balanced' (remainder spread over the leading segments) or
            'bisect' (repeated midpoint bisection, power-of-two segments only)

    Returns:
        segments - 1 strictly increasing split points in (low, high], or []
    """
    if segments < 1:
        raise ValueError(f"segments must be >= 1, got {segments}")
    if strategy not in PARTITION_STRATEGIES:
        raise ValueError(f"Unknown partition strategy '{strategy}'")

    if high - low + 1 < segments:
        return []

    if strategy == 'bisect':
        if segments & (segments - 1):
            raise ValueError(f"'bisect' partitioning needs a power-of-two segment count, got {segments}")
        return _bisect_split_points(low, high, segments)
    return _balanced_split_points(low, high, segments)


@dataclass(frozen=True)
class PartitionPlan:
    """Ordered split points describing how [low, high] is divided."""
    low: int
    high: int
    requested_segments: int
    split_points: List[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the range was not split (too few elements or one segment)."""
        return not self.split_points

    @property
    def n_segments(self) -> int:
        return len(self.split_points) + 1

    def segments(self) -> List[SortSegment]:
        """Segments induced by the split points, in index order."""
        bounds = [self.low] + list(self.split_points) + [self.high + 1]
        return [
            SortSegment(segment_id=i, low=bounds[i], high=bounds[i + 1] - 1)
            for i in range(len(bounds) - 1)
        ]

    def merge_levels(self) -> List[List[MergeStep]]:
        """
        Pairwise merges that recombine the segments, grouped by tree level.

        Level 1 merges segments (0,1), (2,3), ...; every following level
        merges the runs produced by the previous one. An unpaired last run
        moves up a level unchanged. Merges within a level touch disjoint
        ranges and can run concurrently.
        """
        runs = [(s.low, s.high) for s in self.segments()]
        levels: List[List[MergeStep]] = []
        level = 0
        while len(runs) > 1:
            level += 1
            steps = []
            next_runs = []
            for k in range(0, len(runs) - 1, 2):
                (left_low, left_high), (_, right_high) = runs[k], runs[k + 1]
                steps.append(MergeStep(level=level, low=left_low, mid=left_high, high=right_high))
                next_runs.append((left_low, right_high))
            if len(runs) % 2:
                next_runs.append(runs[-1])
            levels.append(steps)
            runs = next_runs
        return levels


class RangePartitioner:
    """
    Partitions an index range into segments for parallel sorting.

    Usage:
        partitioner = RangePartitioner(0, len(seq) - 1, n_segments=4)
        plan = partitioner.partition()
    """

    def __init__(self, low: int, high: int, n_segments: int, strategy: str = 'balanced'):
        """
        Initialize partitioner.

        Args:
            low: First index of the range (inclusive)
            high: Last index of the range (inclusive)
            n_segments: Number of segments to create (typically = fan-out)
            strategy: 'balanced' or 'bisect'
        """
        self.low = low
        self.high = high
        self.n_segments = n_segments
        self.strategy = strategy

    def partition(self) -> PartitionPlan:
        """Build the partition plan; empty when the range is too short."""
        points = partition(self.low, self.high, self.n_segments, self.strategy)
        return PartitionPlan(
            low=self.low,
            high=self.high,
            requested_segments=self.n_segments,
            split_points=points,
        )

    def get_partition_stats(self, plan: PartitionPlan) -> dict:
        """
        Get statistics about the partition.

        Args:
            plan: Plan from partition()

        Returns:
            Dictionary with partition statistics
        """
        if self.high < self.low:
            return {'n_segments': 0, 'total_elements': 0}

        sizes = [s.n_elements for s in plan.segments()]
        return {
            'n_segments': len(sizes),
            'total_elements': sum(sizes),
            'min_elements_per_segment': min(sizes),
            'max_elements_per_segment': max(sizes),
            'avg_elements_per_segment': sum(sizes) / len(sizes),
            'merge_levels': len(plan.merge_levels()),
        }
