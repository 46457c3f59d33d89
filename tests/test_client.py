import threading

import pytest

from directions.builder import DirectionsBuilder
from directions.call import CallState, DirectionsCallback, FunctionCallback
from directions.errors import CallCancelledError, CallStateError, TransportError
from directions.models import Coordinate
from directions.settings import ClientSettings
from directions.transport import DirectionsResponse, HttpTransport

OK_BODY = {"code": "Ok", "routes": [{"distance": 1200.5, "duration": 300.0}], "waypoints": []}


class MockTransport(HttpTransport):
    """
    Records what would be sent instead of talking to the network.
    If a gate is given, send() blocks until the test opens it.
    """

    def __init__(self, error=None, gate=None):
        super().__init__(ClientSettings(base_url="https://directions.test", max_workers=1))
        self.error = error
        self.gate = gate
        self.sent = []

    def send(self, descriptor, cancel_event=None):
        self.sent.append(descriptor)
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if cancel_event is not None and cancel_event.is_set():
            raise CallCancelledError("Call was cancelled")
        if self.error is not None:
            raise self.error
        return DirectionsResponse(status_code=200, body=OK_BODY)


class RecordingCallback(DirectionsCallback):
    def __init__(self):
        self.successes = []
        self.failures = []
        self.threads = []
        self.done = threading.Event()

    def on_success(self, call, response):
        self.threads.append(threading.get_ident())
        self.successes.append(response)
        self.done.set()

    def on_failure(self, call, error):
        self.threads.append(threading.get_ident())
        self.failures.append(error)
        self.done.set()


def build_request(transport):
    return (
        DirectionsBuilder(settings=transport.settings, transport=transport)
        .set_access_token("pk.test")
        .set_profile("driving")
        .set_origin(Coordinate(13.388860, 52.517037))
        .set_destination(Coordinate(13.397634, 52.529407))
        .build()
    )


@pytest.fixture
def transport():
    mock = MockTransport()
    yield mock
    mock.close()


def test_call_is_built_lazily_and_memoized(transport):
    request = build_request(transport)

    # nothing is constructed until the call is needed
    assert request._call is None

    call = request.get_call()
    assert request.get_call() is call
    assert call.state == CallState.CREATED


def test_execute_call_returns_response(transport):
    request = build_request(transport)

    response = request.execute_call()

    assert response.code == "Ok"
    assert response.routes[0]["distance"] == 1200.5
    assert request.get_call().state == CallState.COMPLETED
    assert transport.sent == [request.descriptor]


def test_execute_twice_fails_fast_and_reuses_call(transport):
    request = build_request(transport)
    request.execute_call()
    call = request.get_call()

    with pytest.raises(CallStateError):
        request.execute_call()

    # same underlying call, no second network request
    assert request.get_call() is call
    assert len(transport.sent) == 1


def test_execute_call_surfaces_transport_error():
    transport = MockTransport(error=TransportError("HTTP 500", status_code=500))
    request = build_request(transport)

    with pytest.raises(TransportError) as excinfo:
        request.execute_call()

    assert excinfo.value.status_code == 500
    assert request.get_call().state == CallState.FAILED
    transport.close()


def test_enqueue_call_delivers_success_on_worker_thread(transport):
    request = build_request(transport)
    callback = RecordingCallback()

    future = request.enqueue_call(callback)
    response = future.result(timeout=5)

    assert response.code == "Ok"
    assert callback.successes == [response]
    assert callback.failures == []
    assert callback.threads[0] != threading.get_ident()
    assert request.get_call().state == CallState.COMPLETED


def test_enqueue_call_delivers_failure_once():
    transport = MockTransport(error=TransportError("connection refused"))
    request = build_request(transport)
    callback = RecordingCallback()

    future = request.enqueue_call(callback)

    assert isinstance(future.exception(timeout=5), TransportError)
    assert len(callback.failures) == 1
    assert callback.successes == []
    transport.close()


def test_enqueue_call_never_calls_back_synchronously():
    gate = threading.Event()
    transport = MockTransport(gate=gate)
    request = build_request(transport)
    callback = RecordingCallback()

    future = request.enqueue_call(callback)

    # the worker is held at the gate, so nothing can have been delivered yet
    assert callback.successes == [] and callback.failures == []

    gate.set()
    future.result(timeout=5)
    assert len(callback.successes) == 1
    transport.close()


def test_enqueue_with_function_callback(transport):
    request = build_request(transport)
    results = []

    future = request.enqueue_call(
        FunctionCallback(
            on_success=lambda call, response: results.append(("ok", response.code)),
            on_failure=lambda call, error: results.append(("error", error)),
        )
    )
    future.result(timeout=5)

    assert results == [("ok", "Ok")]


def test_enqueue_twice_fails_fast(transport):
    request = build_request(transport)
    request.enqueue_call().result(timeout=5)

    with pytest.raises(CallStateError):
        request.enqueue_call()


def test_cancel_before_execution(transport):
    request = build_request(transport)

    request.cancel_call()
    request.cancel_call()  # idempotent

    call = request.get_call()
    assert call.state == CallState.CANCELLED
    assert call.is_cancelled

    with pytest.raises(CallCancelledError):
        request.execute_call()
    assert transport.sent == []


def test_cancel_after_completion_is_noop(transport):
    request = build_request(transport)
    request.execute_call()

    request.cancel_call()

    assert request.get_call().state == CallState.COMPLETED
    assert not request.get_call().is_cancelled


def test_cancel_in_flight_call_reports_failure_once():
    gate = threading.Event()
    transport = MockTransport(gate=gate)
    request = build_request(transport)
    callback = RecordingCallback()

    future = request.enqueue_call(callback)
    request.cancel_call()
    gate.set()

    assert isinstance(future.exception(timeout=5), CallCancelledError)
    assert callback.done.wait(timeout=5)
    assert len(callback.failures) == 1
    assert isinstance(callback.failures[0], CallCancelledError)
    assert callback.successes == []
    assert request.get_call().state == CallState.CANCELLED
    transport.close()


def test_clone_call_returns_independent_request(transport):
    request = build_request(transport)
    request.execute_call()

    clone = request.clone_call()

    assert clone is not request
    assert clone.get_call() is not request.get_call()
    assert clone.descriptor == request.descriptor
    assert clone.get_call().transport is transport

    # the clone can run although the original already did
    assert clone.execute_call().code == "Ok"
    assert len(transport.sent) == 2


def test_clone_of_cancelled_request_can_execute(transport):
    request = build_request(transport)
    request.cancel_call()

    clone = request.clone_call()

    assert clone.get_call().state == CallState.CREATED
    assert clone.execute_call().code == "Ok"


def test_pending_call_clone_is_fresh(transport):
    call = build_request(transport).get_call()
    assert not call.is_executed

    call.execute()
    copy = call.clone()

    assert call.is_executed
    assert copy is not call
    assert not copy.is_executed
    assert copy.state == CallState.CREATED
    assert copy.descriptor == call.descriptor
    assert copy.execute().code == "Ok"


def test_cancelled_call_never_counts_as_executed(transport):
    call = build_request(transport).get_call()

    call.cancel()

    assert not call.is_executed


def test_callback_must_implement_both_methods():
    class SuccessOnly(DirectionsCallback):
        def on_success(self, call, response):
            pass

    with pytest.raises(TypeError):
        DirectionsCallback()
    with pytest.raises(TypeError):
        SuccessOnly()
