import json
import threading

import pytest
import requests

from core.envelope import RequestDescriptor
from core.exceptions import ApplicationFailure, DecodeFailure, RpcError, TransportFailure
from inout.rpc_client import RpcTransport


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stands in for requests.Session; returns canned responses or raises."""
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.posts = []
        self.closed = False

    def post(self, url, data=None, timeout=None):
        self.posts.append((url, data, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response

    def close(self):
        self.closed = True


def make_transport(session):
    return RpcTransport("http://spectrometer.local:8080/", timeout=2.5, session=session)


def test_request_posts_form_encoded_descriptor():
    session = FakeSession(FakeResponse(text='{"Error": "", "Values": [1, 2]}'))
    transport = make_transport(session)
    envelope = transport.request(RequestDescriptor("scale"))
    assert envelope.values == [1, 2]
    url, data, timeout = session.posts[0]
    assert url == "http://spectrometer.local:8080/rpc"
    assert json.loads(data["rpc"]) == {"Cmd": "scale"}
    assert timeout == 2.5
    transport.close()
    assert session.closed


def test_non_200_status_is_transport_failure():
    transport = make_transport(FakeSession(FakeResponse(status_code=502, text="bad gateway")))
    with pytest.raises(TransportFailure) as exc:
        transport.request(RequestDescriptor("sample"))
    assert exc.value.status == 502
    assert "connection lost" in str(exc.value)
    transport.close()


@pytest.mark.parametrize("error", [requests.ConnectionError("refused"), requests.Timeout("slow")])
def test_network_errors_are_transport_failures(error):
    transport = make_transport(FakeSession(exc=error))
    with pytest.raises(TransportFailure) as exc:
        transport.request(RequestDescriptor("sample"))
    assert exc.value.status is None
    assert exc.value.__cause__ is error
    transport.close()


def test_bad_json_is_decode_failure_with_raw_body():
    transport = make_transport(FakeSession(FakeResponse(text="<html>oops</html>")))
    with pytest.raises(DecodeFailure) as exc:
        transport.request(RequestDescriptor("scale"))
    assert exc.value.body == "<html>oops</html>"
    assert "<html>oops</html>" in str(exc.value)
    transport.close()


def test_envelope_error_is_application_failure():
    transport = make_transport(FakeSession(FakeResponse(text='{"Error": "unsupported command", "Values": null}')))
    with pytest.raises(ApplicationFailure, match="unsupported command"):
        transport.request(RequestDescriptor("scale"))
    transport.close()


def test_empty_error_string_is_success():
    transport = make_transport(FakeSession(FakeResponse(text='{"Error": "", "Values": null}')))
    envelope = transport.request(RequestDescriptor("sample"))
    assert envelope.values is None
    transport.close()


def test_submit_reports_failures_through_callback():
    transport = make_transport(FakeSession(exc=requests.ConnectionError("refused")))
    done = threading.Event()
    outcomes = []

    def callback(outcome):
        outcomes.append(outcome)
        done.set()

    transport.submit(RequestDescriptor("scale"), callback)
    assert done.wait(5)
    assert not outcomes[0].ok
    assert isinstance(outcomes[0].failure, TransportFailure)
    assert outcomes[0].descriptor.command == "scale"
    transport.close()


def test_round_trip_against_local_server(rpc_server):
    rpc_server.responses["scale"] = (200, json.dumps({"Error": "", "Values": [4000, 4010]}))
    transport = RpcTransport(rpc_server.base_url, timeout=5)
    try:
        envelope = transport.request(RequestDescriptor("scale"))
        assert envelope.values == [4000, 4010]
        with pytest.raises(ApplicationFailure):
            transport.request(RequestDescriptor("calibrate"))
    finally:
        transport.close()
    assert json.loads(rpc_server.received[0]["rpc"][0]) == {"Cmd": "scale"}


def test_unreachable_server_is_transport_failure():
    transport = RpcTransport("http://127.0.0.1:9", timeout=1)
    try:
        with pytest.raises(TransportFailure):
            transport.request(RequestDescriptor("scale"))
    finally:
        transport.close()


def test_submit_delivers_unexpected_worker_errors(dummy_logger):
    transport = make_transport(FakeSession(exc=RuntimeError("socket in a bad state")))
    done = threading.Event()
    outcomes = []

    def callback(outcome):
        outcomes.append(outcome)
        done.set()

    transport.submit(RequestDescriptor("sample"), callback)
    assert done.wait(5)
    assert not outcomes[0].ok
    assert isinstance(outcomes[0].failure, RpcError)
    assert "socket in a bad state" in str(outcomes[0].failure)
    assert outcomes[0].descriptor.command == "sample"
    assert "Unexpected error during sample exchange" in dummy_logger.text
    transport.close()


def test_deeply_nested_response_is_decode_failure(rpc_server):
    rpc_server.responses["scale"] = (200, "[" * 100000 + "]" * 100000)
    transport = RpcTransport(rpc_server.base_url, timeout=5)
    try:
        outcome = transport.exchange(RequestDescriptor("scale"))
    finally:
        transport.close()
    assert isinstance(outcome.failure, DecodeFailure)
