"""
Configuration and record dataclasses for the parallel merge sort.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, List


PARTITION_STRATEGIES = ('balanced', 'bisect')


class SortState(Enum):
    """States of one coordinator run."""
    IDLE = auto()              # Nothing started yet
    SEQUENTIAL = auto()        # Input too small, sorted on the calling thread
    PARTITIONED = auto()       # Partition plan computed
    SORTING_SEGMENTS = auto()  # Segment sorts submitted
    SEGMENTS_SORTED = auto()   # Every segment sort joined
    MERGING_TREE = auto()      # Merge tree in progress
    SORTED = auto()            # Every merge joined, sequence sorted
    FAILED = auto()            # A task raised
    CANCELLED = auto()         # Cancellation observed


@dataclass
class SortConfig:
    """Configuration for a parallel merge sort."""
    n_segments: int = 4                # Fan-out of the sort phase
    threshold: int = 10                # Min elements per segment before going parallel
    max_workers: Optional[int] = None  # Thread pool size (None = n_segments)
    partition_strategy: str = 'balanced'  # 'balanced' or 'bisect'

    def validate(self) -> None:
        """
        Check the configuration values.

        Raises:
            ValueError: If any value is out of range
        """
        if self.n_segments < 1:
            raise ValueError(f"n_segments must be >= 1, got {self.n_segments}")
        if self.threshold < 0:
            raise ValueError(f"threshold must be >= 0, got {self.threshold}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.partition_strategy not in PARTITION_STRATEGIES:
            raise ValueError(
                f"Unknown partition strategy '{self.partition_strategy}', "
                f"expected one of {', '.join(PARTITION_STRATEGIES)}"
            )
        if self.partition_strategy == 'bisect' and self.n_segments & (self.n_segments - 1):
            raise ValueError(
                f"'bisect' partitioning needs a power-of-two n_segments, got {self.n_segments}"
            )

    @property
    def workers(self) -> int:
        return self.max_workers or self.n_segments


@dataclass(frozen=True)
class SortSegment:
    """A contiguous range of the sequence assigned to one sort task."""
    segment_id: int
    low: int    # First index (inclusive)
    high: int   # Last index (inclusive)

    @property
    def n_elements(self) -> int:
        return self.high - self.low + 1


@dataclass(frozen=True)
class MergeStep:
    """One pairwise merge of the merge tree."""
    level: int
    low: int    # First index of the left run
    mid: int    # Last index of the left run
    high: int   # Last index of the right run


@dataclass
class TaskResult:
    """Result of one segment sort or merge task."""
    phase: str              # 'sort' or 'merge'
    low: int
    high: int
    elapsed_time: float
    segment_id: Optional[int] = None
    level: Optional[int] = None


@dataclass
class SortProgress:
    """Progress information for callbacks."""
    state: SortState
    completed_tasks: int
    total_tasks: int
    elapsed_time: float = 0.0


@dataclass
class SortResult:
    """Outcome of a coordinator run."""
    n_elements: int
    n_segments: int          # Segments actually used (1 when sorted sequentially)
    parallel: bool
    elapsed_time: float
    state: SortState
    merge_levels: int = 0
    split_points: List[int] = field(default_factory=list)
    task_results: List[TaskResult] = field(default_factory=list)
