import io
import json

import pytest

from oaiclient.stream_reader import (
    StreamAPIError,
    StreamReader,
    TooManyEmptyStreamMessagesError,
)

DATA1 = (
    b'{"id":"1","object":"completion","created":1598069254,"model":"text-davinci-002",'
    b'"choices":[{"text":"response1","finish_reason":"max_tokens"}]}'
)
DATA2 = (
    b'{"id":"2","object":"completion","created":1598069255,"model":"text-davinci-002",'
    b'"choices":[{"text":"response2","finish_reason":"max_tokens"}]}'
)
EXPECTED1 = {
    "id": "1",
    "object": "completion",
    "created": 1598069254,
    "model": "text-davinci-002",
    "choices": [{"text": "response1", "finish_reason": "max_tokens"}],
}
EXPECTED2 = {
    "id": "2",
    "object": "completion",
    "created": 1598069255,
    "model": "text-davinci-002",
    "choices": [{"text": "response2", "finish_reason": "max_tokens"}],
}
DONE = b"event: done\ndata: [DONE]\n\n"


def _reader(data, **kwargs):
    return StreamReader(io.BytesIO(data), **kwargs)


def _message(payload):
    return b"event: message\ndata: " + payload + b"\n\n"


def test_stream_yields_messages_then_eof():
    stream = _reader(_message(DATA1) + _message(DATA2) + DONE)
    assert stream.recv() == EXPECTED1
    assert stream.recv() == EXPECTED2
    with pytest.raises(EOFError):
        stream.recv()
    with pytest.raises(EOFError):
        stream.recv()


def test_iteration_collects_all_messages():
    stream = _reader(_message(DATA1) + _message(DATA2) + DONE)
    assert list(stream) == [EXPECTED1, EXPECTED2]


def test_custom_parse_function():
    stream = _reader(_message(DATA1) + DONE, parse=lambda raw: json.loads(raw)["id"])
    assert list(stream) == ["1"]


def test_error_body_raises_api_error():
    lines = [
        "{",
        '"error": {',
        '"message": "Incorrect API key provided: sk-***************************************",',
        '"type": "invalid_request_error",',
        '"param": null,',
        '"code": "invalid_api_key"',
        "}",
        "}",
    ]
    stream = _reader("".join(line + "\n" for line in lines).encode())
    with pytest.raises(StreamAPIError) as excinfo:
        stream.recv()
    assert excinfo.value.type == "invalid_request_error"
    assert excinfo.value.code == "invalid_api_key"
    assert excinfo.value.param is None
    assert excinfo.value.message.startswith("Incorrect API key provided")


def test_data_line_with_error_object_raises_api_error():
    stream = _reader(
        b'data: {"error": {"message": "bad thing", "type": "server_error"}}\n\n'
    )
    with pytest.raises(StreamAPIError) as excinfo:
        stream.recv_raw()
    assert excinfo.value.message == "bad thing"
    assert str(excinfo.value) == "error, bad thing"


def test_too_many_empty_messages_with_default_limit():
    data = (
        _message(DATA1)
        + b"\n" * 299
        + _message(DATA2)
        + DONE
    )
    stream = _reader(data)
    assert stream.recv() == EXPECTED1
    with pytest.raises(TooManyEmptyStreamMessagesError) as excinfo:
        stream.recv()
    assert str(excinfo.value) == "stream has sent too many empty messages"


def test_too_many_empty_messages_with_small_limit():
    stream = _reader(b"\n\n\n\n", empty_messages_limit=3)
    with pytest.raises(TooManyEmptyStreamMessagesError):
        stream.recv()


def test_empty_messages_within_limit_are_skipped():
    stream = _reader(b"\n\n\ndata: [1]\n", empty_messages_limit=3)
    assert stream.recv() == [1]


def test_unterminated_stream_ends_with_eof():
    stream = _reader(_message(DATA1))
    assert stream.recv() == EXPECTED1
    with pytest.raises(EOFError):
        stream.recv()


def test_broken_json_raises_decode_error():
    broken = b'{"id":"2","object":"completion","created":1598069255,"model":'
    stream = _reader(_message(DATA1) + _message(broken) + DONE)
    assert stream.recv() == EXPECTED1
    with pytest.raises(json.JSONDecodeError):
        stream.recv()


def test_unparseable_error_buffer_gives_eof():
    stream = _reader(b"{\n")
    with pytest.raises(EOFError):
        stream.recv()


def test_recv_raw_returns_payload_without_prefix():
    stream = _reader(b'data: {"key": "value"}\n')
    assert stream.recv_raw() == b'{"key": "value"}'


def test_partial_last_line_is_not_returned():
    stream = _reader(b'data: {"key": "value"}')
    with pytest.raises(EOFError):
        stream.recv_raw()


def test_context_manager_closes_source():
    source = io.BytesIO(b"data: [DONE]\n")
    with StreamReader(source) as stream:
        assert list(stream) == []
    assert source.closed