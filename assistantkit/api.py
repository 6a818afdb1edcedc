"""HTTP transport shared by the API resource modules."""

from __future__ import annotations

import dataclasses
import json
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from .stream_reader import (
    DEFAULT_EMPTY_MESSAGES_LIMIT,
    StreamAPIError,
    StreamReader,
    _error_fields,
)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_ASSISTANT_VERSION = "v2"
_ASSISTANT_PATHS = ("/assistants", "/threads", "/vector_stores")


@dataclass
class ClientConfig:
    """Connection settings for the API."""

    auth_token: str
    base_url: str = DEFAULT_BASE_URL
    org_id: str = ""
    assistant_version: str = DEFAULT_ASSISTANT_VERSION
    empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT
    timeout: float | None = None


class APIError(StreamAPIError):
    """An error response from the API, with its HTTP status code."""

    def __init__(
        self,
        message: str,
        error_type: str | None = None,
        param: str | None = None,
        code: Any = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, error_type, param, code)
        self.status_code = status_code


@dataclass
class Pagination:
    """Cursor options for list endpoints."""

    limit: int | None = None
    order: str | None = None
    after: str | None = None
    before: str | None = None

    def to_query(self) -> dict[str, str]:
        """Return the options that are set, as query parameters."""
        values = {"limit": self.limit, "order": self.order, "after": self.after, "before": self.before}
        return {key: str(value) for key, value in values.items() if value is not None}


class RawResponse:
    """An undecoded response body, such as generated audio."""

    def __init__(self, response: Any) -> None:
        self._response = response
        self.headers = dict(response.headers.items())

    def read(self) -> bytes:
        """Return the remaining body bytes."""
        return self._response.read()

    def close(self) -> None:
        """Release the connection."""
        self._response.close()

    def __enter__(self) -> RawResponse:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _encode_body(body: Any) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode()
    if hasattr(body, "to_dict"):
        body = body.to_dict()
    elif dataclasses.is_dataclass(body) and not isinstance(body, type):
        body = dataclasses.asdict(body)
    return json.dumps(body).encode()


def _api_error(status: int, payload: bytes) -> APIError:
    try:
        fields = _error_fields(json.loads(payload))
    except ValueError:
        fields = None
    if fields is None:
        text = payload.decode("utf-8", errors="replace").strip()
        fields = {"message": text or f"HTTP status {status}"}
    return APIError(**fields, status_code=status)


class Transport:
    """Sends authenticated requests to the API and decodes the replies."""

    def __init__(self, config: ClientConfig) -> None:
        self.config = config
        self.last_headers: dict[str, str] = {}

    def full_url(self, path: str) -> str:
        """Join the configured base URL and an endpoint path."""
        return self.config.base_url.rstrip("/") + path

    def _open(
        self,
        method: str,
        path: str,
        body: Any,
        query: dict[str, str] | None,
        beta: bool | None,
        extra_headers: dict[str, str] | None = None,
    ) -> Any:
        url = self.full_url(path)
        if query:
            url += "?" + urlencode(sorted(query.items()))
        data = _encode_body(body)
        headers = {"Authorization": f"Bearer {self.config.auth_token}"}
        if data is not None:
            headers["Content-Type"] = "application/json"
        if self.config.org_id:
            headers["OpenAI-Organization"] = self.config.org_id
        if beta is None:
            beta = path.startswith(_ASSISTANT_PATHS)
        if beta:
            headers["OpenAI-Beta"] = f"assistants={self.config.assistant_version}"
        headers.update(extra_headers or {})

        request = urllib.request.Request(url, data=data, headers=headers, method=method)
        try:
            response = urllib.request.urlopen(request, timeout=self.config.timeout)
        except urllib.error.HTTPError as exc:
            try:
                payload = exc.read()
                self.last_headers = dict(exc.headers.items()) if exc.headers else {}
            finally:
                exc.close()
            raise _api_error(exc.code, payload) from None
        self.last_headers = dict(response.headers.items())
        return response

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: dict[str, str] | None = None,
        beta: bool | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON reply, or None for an empty body.

        ``beta`` adds the assistants header; when left as None it is sent for
        assistant, thread and vector store paths.
        """
        with self._open(method, path, body, query, beta) as response:
            payload = response.read()
        if not payload.strip():
            return None
        return json.loads(payload)

    def stream(
        self,
        method: str,
        path: str,
        body: Any = None,
        decode: Callable[[bytes], Any] = json.loads,
    ) -> StreamReader[Any]:
        """Send a request and return a reader over the server-sent events of the reply."""
        response = self._open(
            method,
            path,
            body,
            None,
            None,
            {"Accept": "text/event-stream", "Cache-Control": "no-cache"},
        )
        return StreamReader(response, decode, self.config.empty_messages_limit)

    def raw(self, method: str, path: str, body: Any = None) -> RawResponse:
        """Send a request and return the reply body undecoded."""
        return RawResponse(self._open(method, path, body, None, None))