import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

BACKPLANE_ENV_VARS = (
    "BACKPLANE_URL",
    "HTTPS_PROXY",
    "https_proxy",
    "backplane_url",
    "BACKPLANE_CONFIG",
    "BACKPLANE_ENVIRONMENT",
    "BACKPLANE_PROBE_TIMEOUT",
    "BACKPLANE_CONNECTION_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the developer's own backplane settings out of every test."""
    for name in BACKPLANE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    """Write a backplane config file and point BACKPLANE_CONFIG at it."""
    def _write(data, raw=False):
        path = tmp_path / "backplane.json"
        path.write_text(data if raw else json.dumps(data), encoding="utf-8")
        monkeypatch.setenv("BACKPLANE_CONFIG", str(path))
        return path
    return _write


class _RecordingHandler(BaseHTTPRequestHandler):
    """Answer every request with the server's status code and record it.

    Requests sent through it as a forward proxy arrive with an absolute URL
    as the path.
    """

    def _reply(self):
        self.server.requests.append((self.command, self.path))
        self.send_response(self.server.status_code)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def do_GET(self):
        self._reply()

    def do_HEAD(self):
        self._reply()

    def log_message(self, format, *args):
        pass


@pytest.fixture
def http_server():
    """Start local HTTP servers usable as a backplane API or a forward proxy."""
    servers = []

    def _start(status_code=200):
        server = ThreadingHTTPServer(("127.0.0.1", 0), _RecordingHandler)
        server.status_code = status_code
        server.requests = []
        host, port = server.server_address[:2]
        server.url = f"http://{host}:{port}"
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        servers.append(server)
        return server

    yield _start

    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture
def unused_url():
    """URL of a local port with nothing listening on it."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _RecordingHandler)
    host, port = server.server_address[:2]
    server.server_close()
    return f"http://{host}:{port}"
