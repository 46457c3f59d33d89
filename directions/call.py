"""
Purpose: One-shot network call and its lifecycle.
What it does:
Wraps a RequestDescriptor and a transport into a PendingCall that can run
exactly once, synchronously (execute) or on the transport's worker pool (enqueue).

Lifecycle:
    CREATED -> EXECUTING -> COMPLETED | FAILED | CANCELLED
    CREATED -> CANCELLED

Cancellation only sets the call's cancel token; the transport decides what
to do with a request that is already on the wire.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future
from enum import Enum
from typing import Callable, Optional

from .descriptor import RequestDescriptor
from .errors import CallCancelledError, CallStateError, TransportError
from .transport import DirectionsResponse, HttpTransport

logger = logging.getLogger(__name__)


class CallState(str, Enum):
    CREATED = "created"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATES = (CallState.COMPLETED, CallState.FAILED, CallState.CANCELLED)


class DirectionsCallback(ABC):
    """
    Receives the outcome of an enqueued call.
    Exactly one of the two methods is invoked, on a worker thread.
    """

    @abstractmethod
    def on_success(self, call: PendingCall, response: DirectionsResponse) -> None:
        ...

    @abstractmethod
    def on_failure(self, call: PendingCall, error: TransportError) -> None:
        ...


class FunctionCallback(DirectionsCallback):
    """Adapts two plain functions to DirectionsCallback."""

    def __init__(
        self,
        on_success: Callable[[PendingCall, DirectionsResponse], None],
        on_failure: Callable[[PendingCall, TransportError], None],
    ):
        self._on_success = on_success
        self._on_failure = on_failure

    def on_success(self, call: PendingCall, response: DirectionsResponse) -> None:
        self._on_success(call, response)

    def on_failure(self, call: PendingCall, error: TransportError) -> None:
        self._on_failure(call, error)


class PendingCall:
    def __init__(self, descriptor: RequestDescriptor, transport: HttpTransport):
        self.descriptor = descriptor
        self.transport = transport
        self.state = CallState.CREATED
        self.future: Optional[Future] = None
        self._started = False
        self._cancel_event = threading.Event()

    @property
    def is_executed(self) -> bool:
        return self._started

    @property
    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def execute(self) -> DirectionsResponse:
        """Run the call on the current thread and return the response."""
        self._start()
        return self._send()

    def enqueue(self, callback: Optional[DirectionsCallback] = None) -> Future:
        """
        Schedule the call on the transport's worker pool.

        Returns a Future resolving to the DirectionsResponse (or raising the
        TransportError). The callback, if any, is never invoked from inside
        this method.
        """
        self._start()
        self.future = self.transport.submit(self._run_enqueued, callback)
        return self.future

    def cancel(self) -> None:
        """Request cancellation. Calling it again, or after completion, does nothing."""
        if self.state in TERMINAL_STATES or self._cancel_event.is_set():
            return

        self._cancel_event.set()
        if self.state == CallState.CREATED:
            self.state = CallState.CANCELLED
        logger.debug(f"Cancelled call to {self.descriptor.path}")

    def clone(self) -> PendingCall:
        """A fresh, unstarted call for the same request."""
        return PendingCall(self.descriptor, self.transport)

    #----------------
    # internal helpers
    #----------------
    def _start(self) -> None:
        if self.state == CallState.CANCELLED:
            raise CallCancelledError("Call was cancelled")
        if self.state != CallState.CREATED:
            raise CallStateError(f"Call already executed (state: {self.state.value})")
        self._started = True
        self.state = CallState.EXECUTING

    def _send(self) -> DirectionsResponse:
        try:
            response = self.transport.send(self.descriptor, self._cancel_event)
        except CallCancelledError:
            self.state = CallState.CANCELLED
            raise
        except TransportError:
            self.state = CallState.FAILED
            raise

        self.state = CallState.COMPLETED
        logger.debug(f"Call to {self.descriptor.path} completed (HTTP {response.status_code})")
        return response

    def _run_enqueued(self, callback: Optional[DirectionsCallback]) -> DirectionsResponse:
        try:
            response = self._send()
        except TransportError as exc:
            if callback is not None:
                callback.on_failure(self, exc)
            raise

        if callback is not None:
            callback.on_success(self, response)
        return response
