import json
import threading
import urllib.error
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qsl

import pytest

from oaiclient.pagination import Pagination, Transport, encode_query


class _Handler(BaseHTTPRequestHandler):
    def log_message(self, *args):
        pass

    def _reply(self, status, body, content_type="application/json"):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.records.append(
            {"method": self.command, "path": self.path, "headers": self.headers}
        )
        if self.path.startswith("/v1/missing"):
            self._reply(404, b'{"error": {"message": "no such thing"}}')
        elif self.path == "/v1/raw":
            self._reply(200, b"\x00\x01audio", "audio/mpeg")
        elif self.path == "/v1/empty":
            self._reply(200, b"")
        else:
            reply = {
                "method": self.command,
                "path": self.path,
                "body": json.loads(body) if body else None,
            }
            self._reply(200, json.dumps(reply).encode())

    do_GET = _handle
    do_POST = _handle
    do_DELETE = _handle


@pytest.fixture
def server(monkeypatch):
    monkeypatch.setenv("no_proxy", "*")
    monkeypatch.setenv("NO_PROXY", "*")
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.records = []
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()


def _transport(server, **kwargs):
    base_url = f"http://127.0.0.1:{server.server_address[1]}/v1"
    return Transport("placeholder", base_url, **kwargs)


def test_query_params_only_has_set_options():
    assert Pagination().query_params() == {}
    assert Pagination(limit=20, order="desc").query_params() == {
        "limit": "20",
        "order": "desc",
    }
    full = Pagination(limit=1, order="asc", after="obj_foo", before="obj_bar")
    assert set(full.query_params()) == {"limit", "order", "after", "before"}


def test_encode_query_sorts_and_escapes():
    assert encode_query({}) == ""
    assert encode_query({"b": "x y", "a": "1"}) == "?a=1&b=x+y"


def test_encode_query_round_trip():
    params = Pagination(limit=20, order="desc", after="vs_abc122", before="vs_abc123")
    query = encode_query(params.query_params())
    decoded = parse_qsl(query[1:])
    assert dict(decoded) == params.query_params()
    assert [key for key, _ in decoded] == sorted(key for key, _ in decoded)


def test_default_base_url():
    assert Transport("placeholder").base_url == "https://api.openai.com/v1"


def test_request_sends_json_and_headers(server):
    transport = _transport(server, organization="org-example")
    reply = transport.request("POST", "/threads", {"key": "value"}, True)
    assert reply == {"method": "POST", "path": "/v1/threads", "body": {"key": "value"}}
    headers = server.records[-1]["headers"]
    assert headers["Authorization"] == "Bearer placeholder"
    assert headers["OpenAI-Beta"] == "assistants=v2"
    assert headers["OpenAI-Organization"] == "org-example"
    assert headers["Content-Type"] == "application/json"


def test_request_without_beta_has_no_beta_header(server):
    transport = _transport(server)
    reply = transport.request("GET", "/models" + encode_query({"limit": "5"}))
    assert reply["path"] == "/v1/models?limit=5"
    assert reply["body"] is None
    assert server.records[-1]["headers"].get("OpenAI-Beta") is None


def test_empty_reply_gives_none(server):
    assert _transport(server).request("DELETE", "/empty") is None
    assert server.records[-1]["method"] == "DELETE"


def test_error_status_raises(server):
    with pytest.raises(urllib.error.HTTPError) as excinfo:
        _transport(server).request("GET", "/missing")
    assert excinfo.value.code == 404


def test_request_raw_returns_bytes(server):
    assert _transport(server).request_raw("POST", "/raw", {"input": "Hello!"}) == (
        b"\x00\x01audio"
    )