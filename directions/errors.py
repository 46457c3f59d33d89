#Purpose: Exceptions raised by the directions package.
#ValidationError is raised eagerly by build(), before any network I/O.
#TransportError (and CallCancelledError) come out of execute/enqueue.
#CallStateError flags misuse of a call object (running it twice).

from typing import Optional


class DirectionsError(Exception):
    """Base class for every error raised by the directions client."""
    pass


class ValidationError(DirectionsError):
    """Raised when the builder holds parameters the service would reject."""
    pass


class TransportError(DirectionsError):
    """
    Raised when the request could not be completed: connection failures,
    timeouts, non-2xx responses or an unreadable body.
    Never retried by this package.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CallCancelledError(TransportError):
    """Raised when a call was cancelled before it could complete."""
    pass


class CallStateError(DirectionsError):
    """Raised when a call that already started is executed or enqueued again."""
    pass
