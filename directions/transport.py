#Purpose: The HTTP adapter for the Directions service.
#Sole responsibility: send a RequestDescriptor over HTTP and hand back the decoded JSON.
#Encapsulates the transport-specific details:
#session / connection reuse (requests.Session)
#timeouts and error mapping to TransportError
#the worker pool that runs enqueued calls
#It should not contain parameter validation or serialization rules.

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import requests

from .descriptor import RequestDescriptor
from .errors import CallCancelledError, TransportError
from .settings import ClientSettings, default_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectionsResponse:
    """
    A successful (2xx) response from the Directions service.

    The body is the decoded JSON document; turning it into typed route
    objects is left to the caller.
    """

    status_code: int
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def code(self) -> Optional[str]:
        return self.body.get("code")

    @property
    def routes(self) -> List[Dict[str, Any]]:
        return self.body.get("routes") or []

    @property
    def waypoints(self) -> List[Dict[str, Any]]:
        return self.body.get("waypoints") or []

    @classmethod
    def from_http(cls, response: requests.Response) -> DirectionsResponse:
        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(
                f"Directions service returned a non-JSON body (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from exc

        if not isinstance(body, dict):
            raise TransportError(
                f"Directions service returned a JSON {type(body).__name__}, expected an object "
                f"(HTTP {response.status_code})",
                status_code=response.status_code,
            )

        return cls(
            status_code=response.status_code,
            body=body,
            headers=dict(response.headers),
        )


def _error_message(response: requests.Response) -> str:
    #the service puts a human readable reason under "message"
    try:
        data = response.json()
    except ValueError:
        return response.reason or "Unknown error"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.reason or "Unknown error"


class HttpTransport:
    """
    Directions transport over requests.

    Can be shared between request objects (clones share their original's
    transport); it holds no per-request state.
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or default_settings()
        self.session = session or requests.Session()
        self._executor: Optional[ThreadPoolExecutor] = None

    def send(
        self,
        descriptor: RequestDescriptor,
        cancel_event: Optional[threading.Event] = None,
    ) -> DirectionsResponse:
        """
        Perform the request, blocking the calling thread.

        The cancel token is checked before sending and once the response is
        back; a response that arrives after cancellation is discarded.
        """
        if cancel_event is not None and cancel_event.is_set():
            raise CallCancelledError("Call was cancelled before it was sent")

        url = descriptor.url(descriptor.base_url or self.settings.base_url)
        timeout = descriptor.timeout if descriptor.timeout is not None else self.settings.timeout
        logger.debug(f"{descriptor.method} {descriptor.path}")

        try:
            response = self.session.request(
                descriptor.method,
                url,
                params=list(descriptor.params),
                headers=dict(descriptor.headers),
                timeout=timeout,
            )
        except requests.RequestException as exc:
            if cancel_event is not None and cancel_event.is_set():
                raise CallCancelledError("Call was cancelled") from exc
            # str(exc) repeats the full URL, access token included: keep it out of the message
            message = f"Directions request failed: {exc.__class__.__name__} on {descriptor.path}"
            logger.warning(message)
            raise TransportError(message) from exc

        if cancel_event is not None and cancel_event.is_set():
            response.close()
            raise CallCancelledError("Call was cancelled")

        if not response.ok:
            message = _error_message(response)
            logger.warning(f"Directions service answered HTTP {response.status_code}: {message}")
            raise TransportError(
                f"Directions error (HTTP {response.status_code}): {message}",
                status_code=response.status_code,
            )

        return DirectionsResponse.from_http(response)

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        """Run fn on the transport's worker pool."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.settings.max_workers,
                thread_name_prefix="directions",
            )
        return self._executor.submit(fn, *args)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self.session.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
