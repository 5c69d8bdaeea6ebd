"""Reading of server-sent event streams of JSON messages."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")

DEFAULT_EMPTY_MESSAGES_LIMIT = 300

_HEADER_DATA = re.compile(rb"^data:\s*")
_ERROR_PREFIX = re.compile(rb'^data:\s*{"error":')


class TooManyEmptyStreamMessagesError(Exception):
    """The stream sent more non-data lines in a row than allowed."""

    def __init__(self, message: str = "stream has sent too many empty messages") -> None:
        super().__init__(message)


class StreamAPIError(Exception):
    """An error object the server sent inside the stream."""

    def __init__(
        self,
        message: Any = "",
        type: str = "",
        param: Any = None,
        code: Any = None,
    ) -> None:
        super().__init__(f"error, {message}")
        self.message = message
        self.type = type
        self.param = param
        self.code = code

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StreamAPIError:
        return cls(
            message=data.get("message", ""),
            type=data.get("type") or "",
            param=data.get("param"),
            code=data.get("code"),
        )


class StreamReader(Generic[T]):
    """Yields the ``data:`` payloads of an event stream, decoded by ``parse``.

    ``source`` is a binary file-like object with ``readline``. The end of the
    stream, whether by ``[DONE]`` or by the connection closing, raises
    ``EOFError`` from ``recv`` and ends iteration.
    """

    def __init__(
        self,
        source: Any,
        parse: Callable[[bytes], T] = json.loads,
        *,
        empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._source = source
        self._parse = parse
        self.empty_messages_limit = empty_messages_limit
        self.headers = dict(headers or {})
        self._finished = False
        self._errors = bytearray()

    def recv_raw(self) -> bytes:
        """Return the next data payload without decoding it."""
        if self._finished:
            raise EOFError("stream finished")
        return self._process_lines()

    def recv(self) -> T:
        """Return the next data payload, decoded."""
        return self._parse(self.recv_raw())

    def _read_line(self) -> bytes:
        line = self._source.readline()
        return line.encode() if isinstance(line, str) else line

    def _process_lines(self) -> bytes:
        empty_messages = 0
        has_error_prefix = False
        while True:
            line = self._read_line()
            if not line.endswith(b"\n") or has_error_prefix:
                error = self._unmarshal_error()
                if error is not None:
                    raise error
                raise EOFError("stream ended")

            stripped = line.strip()
            if _ERROR_PREFIX.match(stripped):
                has_error_prefix = True
            if has_error_prefix or not _HEADER_DATA.match(stripped):
                if has_error_prefix:
                    stripped = _HEADER_DATA.sub(b"", stripped, count=1)
                self._errors += stripped
                empty_messages += 1
                if empty_messages > self.empty_messages_limit:
                    raise TooManyEmptyStreamMessagesError()
                continue

            payload = _HEADER_DATA.sub(b"", stripped, count=1)
            if payload == b"[DONE]":
                self._finished = True
                raise EOFError("stream finished")
            return payload

    def _unmarshal_error(self) -> StreamAPIError | None:
        if not self._errors:
            return None
        try:
            data = json.loads(bytes(self._errors))
        except ValueError:
            return None
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            return StreamAPIError.from_dict(data["error"])
        return None

    def close(self) -> None:
        """Close the underlying source."""
        close = getattr(self._source, "close", None)
        if close is not None:
            close()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.recv()
            except EOFError:
                return

    def __enter__(self) -> StreamReader[T]:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()