"""
Entry points used by the I/O layer.

MergeSorter bundles a SortConfig with the two sort operations; the module
functions are shortcuts for a one-off sort with a given configuration.
"""

import logging
from typing import MutableSequence, Optional

from .config import SortConfig, SortResult
from .coordinator import ParallelSortCoordinator
from .sequential import sort_single_thread
from utils.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class MergeSorter:
    """
    Single- and multi-threaded merge sort over a fixed configuration.

    Both methods sort in place and accept any finite sequence, including
    empty and single-element ones.
    """

    def __init__(self, config: Optional[SortConfig] = None):
        self.config = config or SortConfig()
        self.config.validate()
        self.last_result: Optional[SortResult] = None

    def sort_single_thread(self, seq: MutableSequence[int]) -> None:
        """Sort seq in place on the calling thread."""
        sort_single_thread(seq)

    def sort_multi_thread(
        self,
        seq: MutableSequence[int],
        cancel_token: Optional[CancellationToken] = None
    ) -> None:
        """
        Sort seq in place with the fork/join coordinator.

        Inputs too small for the configured threshold are sorted on the
        calling thread. On TaskFailureError the sequence is partially
        sorted; retry on a fresh copy, not in place.
        """
        coordinator = ParallelSortCoordinator(self.config)
        self.last_result = coordinator.run(seq, cancel_token=cancel_token)


def sort_multi_thread(seq: MutableSequence[int], config: Optional[SortConfig] = None) -> None:
    """Sort seq in place using the parallel merge sort."""
    ParallelSortCoordinator(config).run(seq)
