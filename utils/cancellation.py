"""
Cancellation tokens for parallel sorts.

A token is shared between the caller and the coordinator of a run. Workers
check it before they start; the coordinator checks it before every phase.
Child tokens are cancelled together with their parent.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional, Callable, List

logger = logging.getLogger(__name__)


class CancellationReason(Enum):
    """Reasons for cancellation."""
    USER_REQUESTED = auto()
    TIMEOUT = auto()
    ERROR = auto()
    PARENT_CANCELLED = auto()


@dataclass
class CancellationRequest:
    """Details about a cancellation request."""
    reason: CancellationReason
    message: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)


class CancellationToken:
    """
    Thread-safe cancellation token with parent/child support.

    Usage
    -----
    >>> token = CancellationToken()
    >>> coordinator.run(seq, cancel_token=token)   # in one thread
    >>> token.cancel(CancellationReason.USER_REQUESTED)  # from another
    """

    def __init__(self, parent: Optional['CancellationToken'] = None):
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._request: Optional[CancellationRequest] = None
        self._callbacks: List[Callable[['CancellationToken'], None]] = []
        self._parent = parent
        self._children: List['CancellationToken'] = []

        if parent is not None:
            parent._register_child(self)

    @property
    def is_cancelled(self) -> bool:
        """True if this token or any ancestor was cancelled."""
        if self._cancelled.is_set():
            return True
        if self._parent is not None:
            return self._parent.is_cancelled
        return False

    @property
    def cancellation_request(self) -> Optional[CancellationRequest]:
        """Get cancellation request details."""
        if self._request is None and self._parent is not None:
            return self._parent.cancellation_request
        return self._request

    def cancel(
        self,
        reason: CancellationReason = CancellationReason.USER_REQUESTED,
        message: Optional[str] = None,
    ) -> None:
        """
        Request cancellation.

        Parameters
        ----------
        reason : CancellationReason
            Why cancellation is being requested
        message : str, optional
            Human-readable message
        """
        with self._lock:
            if self._cancelled.is_set():
                return
            self._request = CancellationRequest(reason=reason, message=message)
            self._cancelled.set()
            children = list(self._children)
            callbacks = list(self._callbacks)

        logger.info(f"Cancellation requested: {reason.name} - {message or 'No message'}")

        for child in children:
            child.cancel(
                reason=CancellationReason.PARENT_CANCELLED,
                message=f"Parent cancelled: {message}",
            )

        for callback in callbacks:
            try:
                callback(self)
            except Exception as e:
                logger.error(f"Error in cancellation callback: {e}")

    def on_cancel(self, callback: Callable[['CancellationToken'], None]) -> None:
        """Register a callback; called immediately if already cancelled."""
        with self._lock:
            if not self._cancelled.is_set():
                self._callbacks.append(callback)
                return
        callback(self)

    def create_child(self) -> 'CancellationToken':
        """Create a child token that is cancelled when this one is."""
        return CancellationToken(parent=self)

    def dispose(self) -> None:
        """Detach from the parent so a finished token can be collected."""
        if self._parent is not None:
            self._parent._unregister_child(self)

    def _unregister_child(self, child: 'CancellationToken') -> None:
        with self._lock:
            if child in self._children:
                self._children.remove(child)

    def _register_child(self, child: 'CancellationToken') -> None:
        with self._lock:
            self._children.append(child)
            request = self._request if self._cancelled.is_set() else None
        if request is not None:
            child.cancel(
                reason=CancellationReason.PARENT_CANCELLED,
                message=f"Parent cancelled: {request.message}",
            )
