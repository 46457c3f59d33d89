"""
Purpose: The request object returned by DirectionsBuilder.build().
What it does:
Holds a frozen RouteRequestParams snapshot and turns it into a network call
on first use. The call is expensive to set up (descriptor + transport), so it
is built at most once per request object and reused by execute/enqueue/cancel/clone.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Optional

from .call import DirectionsCallback, PendingCall
from .descriptor import RequestDescriptor, to_descriptor
from .models import RouteRequestParams
from .settings import ClientSettings, default_settings
from .transport import DirectionsResponse, HttpTransport

logger = logging.getLogger(__name__)


class DirectionsRequest:
    """
    Directions v5 request: one logical call per object.

    Use clone_call() to get an independent object with the same parameters,
    e.g. to retry after a failure.
    """

    def __init__(
        self,
        params: RouteRequestParams,
        settings: Optional[ClientSettings] = None,
        transport: Optional[HttpTransport] = None,
    ):
        self.params = params
        self.settings = settings or default_settings()
        self._transport = transport
        self._owns_transport = transport is None
        self._call: Optional[PendingCall] = None

    @property
    def descriptor(self) -> RequestDescriptor:
        return to_descriptor(self.params, self.settings)

    def get_call(self) -> PendingCall:
        # No need to recreate it
        if self._call is not None:
            return self._call

        if self._transport is None:
            self._transport = HttpTransport(self.settings)

        self._call = PendingCall(self.descriptor, self._transport)
        logger.debug(f"Built call for {self._call.descriptor.path}")
        return self._call

    def execute_call(self) -> DirectionsResponse:
        """
        Execute the call, blocking until the service answers.

        Raises:
            TransportError: connection failure, timeout or non-2xx response.
            CallStateError: the call already ran.
        """
        return self.get_call().execute()

    def enqueue_call(self, callback: Optional[DirectionsCallback] = None) -> Future:
        """Execute the call on a worker thread; see PendingCall.enqueue."""
        return self.get_call().enqueue(callback)

    def cancel_call(self) -> None:
        self.get_call().cancel()

    def clone_call(self) -> DirectionsRequest:
        """A new, unexecuted request with identical parameters (shares the transport)."""
        call = self.get_call()
        return DirectionsRequest(self.params, self.settings, transport=call.transport)

    def close(self) -> None:
        """
        Release the transport if this request created it.
        Requests made by a DirectionsBuilder share the builder's transport; close the builder instead.
        """
        if self._owns_transport and self._transport is not None:
            self._transport.close()
