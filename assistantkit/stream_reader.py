"""Reading of server-sent event streams produced by the API."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator
from typing import Any, Generic, Protocol, TypeVar

T = TypeVar("T")

DEFAULT_EMPTY_MESSAGES_LIMIT = 300

_HEADER_DATA = re.compile(rb"^data:\s*")
_ERROR_PREFIX = re.compile(rb'^data:\s*{"error":')


class _LineSource(Protocol):
    def readline(self) -> bytes: ...

    def close(self) -> None: ...


class TooManyEmptyStreamMessagesError(Exception):
    """The stream sent more lines without data than the configured limit."""

    def __init__(self) -> None:
        super().__init__("stream has sent too many empty messages")


class StreamAPIError(Exception):
    """An error object reported by the API."""

    def __init__(
        self,
        message: str,
        error_type: str | None = None,
        param: str | None = None,
        code: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.type = error_type
        self.param = param
        self.code = code


def _error_fields(payload: Any) -> dict[str, Any] | None:
    """Extract error fields from a decoded ``{"error": ...}`` document."""
    if not isinstance(payload, dict) or "error" not in payload:
        return None
    error = payload["error"]
    if isinstance(error, dict):
        return {
            "message": str(error.get("message") or ""),
            "error_type": error.get("type"),
            "param": error.get("param"),
            "code": error.get("code"),
        }
    if isinstance(error, str):
        return {"message": error}
    return None


class StreamReader(Generic[T]):
    """Reads ``data:`` events from a line-oriented byte stream and decodes them."""

    def __init__(
        self,
        source: _LineSource,
        decode: Callable[[bytes], T] = json.loads,
        empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT,
    ) -> None:
        self._source = source
        self._decode = decode
        self._empty_messages_limit = empty_messages_limit
        self._finished = False
        self._errors = bytearray()

    def recv(self) -> T:
        """Return the next decoded event; raise ``EOFError`` at the end of the stream."""
        return self._decode(self.recv_raw())

    def recv_raw(self) -> bytes:
        """Return the payload of the next ``data:`` line without decoding it."""
        if self._finished:
            raise EOFError("stream finished")

        empty_messages = 0
        has_error_prefix = False
        while True:
            raw_line = self._source.readline()
            read_failed = not raw_line.endswith(b"\n")
            if read_failed or has_error_prefix:
                error = self._unmarshal_error()
                if error is not None:
                    raise error
                if read_failed:
                    raise EOFError("stream ended")
                raise ValueError("malformed error event in stream")

            line = raw_line.strip()
            if _ERROR_PREFIX.match(line):
                has_error_prefix = True
            if not _HEADER_DATA.match(line) or has_error_prefix:
                if has_error_prefix:
                    line = _HEADER_DATA.sub(b"", line, count=1)
                self._errors += line
                empty_messages += 1
                if empty_messages > self._empty_messages_limit:
                    raise TooManyEmptyStreamMessagesError()
                continue

            payload = _HEADER_DATA.sub(b"", line, count=1)
            if payload == b"[DONE]":
                self._finished = True
                raise EOFError("stream finished")
            return payload

    def _unmarshal_error(self) -> StreamAPIError | None:
        if not self._errors:
            return None
        try:
            payload = json.loads(bytes(self._errors))
        except ValueError:
            return None
        fields = _error_fields(payload)
        return StreamAPIError(**fields) if fields is not None else None

    def close(self) -> None:
        """Close the underlying stream."""
        self._source.close()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.recv()
            except EOFError:
                return

    def __enter__(self) -> StreamReader[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()