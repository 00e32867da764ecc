"""
Coordinator for the fork/join parallel merge sort.

Orchestrates one sort:
1. Fall back to a sequential sort when segments would be too small
2. Partition the sequence into balanced segments
3. Sort every segment concurrently and join
4. Recombine the segments through the merge tree, joining each level

Segment sorts and merges run on a thread pool and mutate the caller's
sequence in place. Every boundary comes from one PartitionPlan.
"""

import time
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, Future, wait, FIRST_EXCEPTION
from typing import Optional, Callable, List, Dict, MutableSequence

from .config import SortConfig, SortState, SortProgress, SortResult, TaskResult
from .errors import TaskFailureError, SortCancelledError
from .partitioner import RangePartitioner, PartitionPlan
from .sequential import sort_single_thread
from .worker import sort_segment, merge_runs
from utils.cancellation import CancellationToken, CancellationReason

logger = logging.getLogger(__name__)


class ParallelSortCoordinator:
    """
    Orchestrates a parallel merge sort over a thread pool.

    State per run: IDLE -> PARTITIONED -> SORTING_SEGMENTS -> SEGMENTS_SORTED
    -> MERGING_TREE -> SORTED. Small inputs go IDLE -> SEQUENTIAL -> SORTED.
    A failed task ends the run in FAILED, a cancellation in CANCELLED.

    Usage:
        config = SortConfig(n_segments=4)
        coordinator = ParallelSortCoordinator(config)
        result = coordinator.run(values, progress_callback=update_ui)
    """

    def __init__(self, config: Optional[SortConfig] = None):
        """
        Initialize coordinator.

        Args:
            config: Sort configuration (defaults to SortConfig())

        Raises:
            ValueError: If the configuration is invalid
        """
        self.config = config or SortConfig()
        self.config.validate()
        self.state = SortState.IDLE
        self.state_history: List[SortState] = [SortState.IDLE]
        self._run_token: Optional[CancellationToken] = None
        self._pending_cancel: Optional[str] = None
        self._lock = threading.Lock()
        self._start_time = 0.0
        self._progress_callback: Optional[Callable[[SortProgress], None]] = None

    def run(
        self,
        seq: MutableSequence[int],
        progress_callback: Optional[Callable[[SortProgress], None]] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> SortResult:
        """
        Sort seq in place.

        Args:
            seq: List or 1-D integer NumPy array, mutated in place
            progress_callback: Optional callback for state changes
            cancel_token: Optional token; cancelling it aborts the run

        Returns:
            SortResult describing the run

        Raises:
            TaskFailureError: If a segment sort or merge raised. The sequence
                is left partially sorted.
            SortCancelledError: If cancellation was observed
        """
        self._start_time = time.time()
        self._progress_callback = progress_callback
        self.state = SortState.IDLE
        self.state_history = [SortState.IDLE]

        with self._lock:
            self._run_token = cancel_token.create_child() if cancel_token else CancellationToken()
            pending, self._pending_cancel = self._pending_cancel, None
        if pending is not None:
            self._run_token.cancel(CancellationReason.USER_REQUESTED, pending)

        try:
            return self._sort(seq)
        finally:
            with self._lock:
                token, self._run_token = self._run_token, None
            token.dispose()

    def cancel(self, message: Optional[str] = None):
        """
        Request cancellation.

        Cancels the run in progress. Called while no run is active, the
        request is held and the next run() is cancelled as soon as it starts.
        """
        message = message or "Sort cancelled"
        with self._lock:
            token = self._run_token
            if token is None:
                self._pending_cancel = message
                return
        token.cancel(CancellationReason.USER_REQUESTED, message)

    def _sort(self, seq: MutableSequence[int]) -> SortResult:
        n = len(seq)
        n_segments = self.config.n_segments
        self._raise_if_cancelled()

        if n // n_segments < self.config.threshold:
            logger.debug(
                f"{n} elements over {n_segments} segments is below threshold "
                f"{self.config.threshold}, sorting sequentially"
            )
            return self._run_sequential(seq)

        partitioner = RangePartitioner(0, n - 1, n_segments, self.config.partition_strategy)
        plan = partitioner.partition()
        if plan.is_empty:
            logger.debug(f"Empty partition plan for {n} elements, sorting sequentially")
            return self._run_sequential(seq)

        self._set_state(SortState.PARTITIONED)
        logger.debug(f"Partition: split points {plan.split_points}, {partitioner.get_partition_stats(plan)}")

        task_results = self._run_parallel(seq, plan)

        self._set_state(SortState.SORTED)
        elapsed = time.time() - self._start_time
        merge_levels = len(plan.merge_levels())
        logger.info(
            f"Parallel merge sort of {n} elements: {plan.n_segments} segments, "
            f"{merge_levels} merge levels, {elapsed:.3f}s"
        )
        return SortResult(
            n_elements=n,
            n_segments=plan.n_segments,
            parallel=True,
            elapsed_time=elapsed,
            state=self.state,
            merge_levels=merge_levels,
            split_points=list(plan.split_points),
            task_results=task_results,
        )

    def _run_sequential(self, seq: MutableSequence[int]) -> SortResult:
        self._set_state(SortState.SEQUENTIAL)
        sort_single_thread(seq)
        self._set_state(SortState.SORTED)
        return SortResult(
            n_elements=len(seq),
            n_segments=1,
            parallel=False,
            elapsed_time=time.time() - self._start_time,
            state=self.state,
        )

    def _run_parallel(self, seq: MutableSequence[int], plan: PartitionPlan) -> List[TaskResult]:
        segments = plan.segments()
        levels = plan.merge_levels()
        token = self._run_token
        results: List[TaskResult] = []

        with ThreadPoolExecutor(
            max_workers=self.config.workers,
            thread_name_prefix='mergesort'
        ) as executor:
            self._raise_if_cancelled()
            self._set_state(SortState.SORTING_SEGMENTS, total_tasks=len(segments))
            futures = {
                executor.submit(sort_segment, seq, segment, token): (segment.low, segment.high)
                for segment in segments
            }
            results.extend(self._join(futures, 'sort'))
            self._set_state(SortState.SEGMENTS_SORTED, completed_tasks=len(segments), total_tasks=len(segments))

            self._set_state(SortState.MERGING_TREE, total_tasks=sum(len(steps) for steps in levels))
            for steps in levels:
                self._raise_if_cancelled()
                futures = {
                    executor.submit(merge_runs, seq, step, token): (step.low, step.high)
                    for step in steps
                }
                results.extend(self._join(futures, 'merge'))

        return results

    def _join(self, futures: Dict[Future, tuple], phase: str) -> List[TaskResult]:
        """
        Barrier over one phase. Every future is observed before returning.

        On the first failure the run token is cancelled so tasks that have
        not started yet skip their work; the first real failure (or the
        cancellation, if nothing else failed) is then raised.
        """
        _, pending = wait(futures, return_when=FIRST_EXCEPTION)
        if pending:
            self._run_token.cancel(CancellationReason.ERROR, f"A {phase} task failed")
            wait(pending)

        failure = None
        cancelled = None
        results = []
        for future, (low, high) in futures.items():
            exc = future.exception()
            if exc is None:
                results.append(future.result())
            elif isinstance(exc, SortCancelledError):
                cancelled = cancelled or (exc, low, high)
            elif failure is None:
                failure = (exc, low, high)

        if failure is not None:
            exc, low, high = failure
            self._set_state(SortState.FAILED)
            logger.error(f"{phase} task [{low}, {high}] failed: {type(exc).__name__}: {exc}")
            raise TaskFailureError(
                f"{phase} task [{low}, {high}] failed: {exc}",
                phase=phase, low=low, high=high
            ) from exc

        if cancelled is not None:
            exc, low, high = cancelled
            self._set_state(SortState.CANCELLED)
            logger.warning(f"Parallel sort cancelled during {phase} phase")
            raise SortCancelledError(str(exc), phase=phase, low=low, high=high) from exc

        return results

    def _raise_if_cancelled(self):
        if self._run_token is not None and self._run_token.is_cancelled:
            request = self._run_token.cancellation_request
            self._set_state(SortState.CANCELLED)
            message = "Parallel sort cancelled"
            if request is not None and request.message:
                message += f": {request.message}"
            logger.warning(message)
            raise SortCancelledError(message)

    def _set_state(self, state: SortState, completed_tasks: int = 0, total_tasks: int = 0):
        self.state = state
        self.state_history.append(state)
        logger.debug(f"Sort state -> {state.name}")
        if self._progress_callback:
            self._progress_callback(SortProgress(
                state=state,
                completed_tasks=completed_tasks,
                total_tasks=total_tasks,
                elapsed_time=time.time() - self._start_time,
            ))
