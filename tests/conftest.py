import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs

import pytest

from core.envelope import Envelope, RpcOutcome
from core.exceptions import TransportFailure
from core.frame import CoordinateFrame
from frontend.views.surface import DrawingContext, Surface


class RecordingContext(DrawingContext):
    def __init__(self) -> None:
        super().__init__((1, 2, 3))
        self.strokes = []
        self._path = []

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x, y) -> None:
        self._path.append((x, y))

    def line_to(self, x, y) -> None:
        self._path.append((x, y))

    def stroke(self) -> None:
        self.strokes.append((self.stroke_style, list(self._path)))


class RecordingSurface(Surface):
    def __init__(self, frame=None) -> None:
        if frame is None:
            frame = CoordinateFrame(min_x=0, max_x=700, min_y=50, max_y=450)
        super().__init__(frame, RecordingContext())
        self.calls = []

    def axis(self, axis_id, ticks) -> None:
        self.calls.append(("axis", axis_id, list(ticks)))

    def line(self, points) -> None:
        self.calls.append(("line", [list(p) for p in points]))

    def redraw(self) -> None:
        self.calls.append(("redraw",))


class ManualTransport:
    """Holds submitted requests until a test completes them, in any order."""
    def __init__(self) -> None:
        self.submitted = []

    def submit(self, descriptor, callback):
        self.submitted.append((descriptor, callback))
        return None

    def _find(self, command):
        for i, (descriptor, callback) in enumerate(self.submitted):
            if descriptor.command == command:
                return self.submitted.pop(i)
        raise AssertionError(f"no pending request for {command!r}")

    def succeed(self, command, values):
        descriptor, callback = self._find(command)
        callback(RpcOutcome(descriptor, envelope=Envelope(error="", values=values)))

    def fail(self, command, failure=None):
        descriptor, callback = self._find(command)
        callback(RpcOutcome(descriptor, failure=failure or TransportFailure()))


class RenderSpy:
    def __init__(self) -> None:
        self.calls = []

    def __call__(self, xs, ys) -> None:
        self.calls.append((list(xs), list(ys)))


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def transport():
    return ManualTransport()


@pytest.fixture
def render_spy():
    return RenderSpy()


class _RpcHandler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        form = parse_qs(self.rfile.read(length).decode())
        self.server.received.append(form)
        if self.path != "/rpc":
            self.send_error(404)
            return
        cmd = json.loads(form["rpc"][0]).get("Cmd")
        status, body = self.server.responses.get(cmd, (200, json.dumps({"Error": "unsupported command", "Values": None})))
        payload = body.encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def rpc_server():
    """
    A local spectrum server. Tests set ``server.responses[cmd] = (status, body)``.
    """
    server = ThreadingHTTPServer(("127.0.0.1", 0), _RpcHandler)
    server.responses = {}
    server.received = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    server.base_url = f"http://127.0.0.1:{server.server_address[1]}"
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog
