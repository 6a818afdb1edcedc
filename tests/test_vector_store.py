import json
import threading
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import parse_qs, urlsplit

import pytest

from assistantkit.api import APIError, ClientConfig, Pagination, Transport
from assistantkit.vector_store import (
    VectorStoreExpires,
    VectorStoreRequest,
    VectorStoresAPI,
)

STORE_ID = "vs_abc123"
STORE_NAME = "TestStore"
FILE_ID = "file-test0000000000000001"
BATCH_ID = "vsfb_abc123"
PAGINATION = Pagination(limit=20, order="desc", after="vs_abc122", before="vs_abc123")
EXPECTED_QUERY = {
    "limit": ["20"],
    "order": ["desc"],
    "after": ["vs_abc122"],
    "before": ["vs_abc123"],
}


@dataclass
class _Call:
    method: str
    path: str
    query: dict[str, list[str]]
    headers: dict[str, str]
    body: Any


class _Handler(BaseHTTPRequestHandler):
    def _handle(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        raw = self.rfile.read(length) if length else b""
        parts = urlsplit(self.path)
        call = _Call(
            self.command,
            parts.path,
            parse_qs(parts.query),
            {k.lower(): v for k, v in self.headers.items()},
            json.loads(raw) if raw else None,
        )
        self.server.calls.append(call)
        route = self.server.routes.get((self.command, parts.path))
        if route is None:
            status = 404
            payload = b'{"error":{"message":"not found","type":"invalid_request_error"}}'
        else:
            status = 200
            result = route(call)
            payload = result if isinstance(result, bytes) else json.dumps(result).encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = do_POST = do_DELETE = _handle

    def log_message(self, *args: Any) -> None:
        pass


def _store(name: str = STORE_NAME) -> dict[str, Any]:
    return {"id": STORE_ID, "object": "vector_store", "created_at": 1234567890, "name": name}


def _file(file_id: str = FILE_ID, status: str = "") -> dict[str, Any]:
    return {
        "id": file_id,
        "object": "vector_store.file",
        "created_at": 1234567890,
        "vector_store_id": STORE_ID,
        "status": status,
    }


def _batch(status: str, completed: int) -> dict[str, Any]:
    return {
        "id": BATCH_ID,
        "object": "vector_store.file_batch",
        "created_at": 1234567890,
        "vector_store_id": STORE_ID,
        "status": status,
        "file_counts": {"in_progress": 0, "completed": completed, "failed": 0, "cancelled": 0, "total": 0},
    }


def _routes() -> dict[tuple[str, str], Any]:
    base = f"/v1/vector_stores/{STORE_ID}"
    return {
        ("POST", "/v1/vector_stores"): lambda call: _store(call.body.get("name", "")),
        ("GET", "/v1/vector_stores"): lambda call: {
            "data": [_store()],
            "first_id": STORE_ID,
            "last_id": STORE_ID,
            "has_more": False,
        },
        ("GET", base): lambda call: _store(),
        ("POST", base): lambda call: _store(call.body.get("name", "")),
        ("DELETE", base): lambda call: (
            b'{\n "id": "vectorstore_abc123",\n "object": "vector_store.deleted",\n "deleted": true\n}\n'
        ),
        ("GET", base + "/files"): lambda call: {"data": [_file()]},
        ("POST", base + "/files"): lambda call: _file(call.body["file_id"]),
        ("GET", f"{base}/files/{FILE_ID}"): lambda call: _file(status="completed"),
        ("DELETE", f"{base}/files/{FILE_ID}"): lambda call: (
            b'{\n id: "file-test0000000000000001",\n object: "vector_store.file.deleted",\n deleted: true\n}\n'
        ),
        ("POST", base + "/file_batches"): lambda call: _batch("completed", len(call.body["file_ids"])),
        ("GET", f"{base}/file_batches/{BATCH_ID}"): lambda call: _batch("completed", 1),
        ("POST", f"{base}/file_batches/{BATCH_ID}/cancel"): lambda call: _batch("cancelling", 1),
        ("GET", f"{base}/file_batches/{BATCH_ID}/files"): lambda call: {"data": [_file()]},
    }


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.calls = []
    httpd.routes = _routes()
    worker = threading.Thread(target=httpd.serve_forever, daemon=True)
    worker.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()


@pytest.fixture
def api(server):
    config = ClientConfig(auth_token="token", base_url=f"http://127.0.0.1:{server.server_port}/v1")
    return VectorStoresAPI(Transport(config))


def test_create_vector_store(api, server):
    store = api.create(VectorStoreRequest(name=STORE_NAME))
    assert store.id == STORE_ID
    assert store.name == STORE_NAME
    assert server.calls[-1].body == {"name": STORE_NAME}
    assert server.calls[-1].headers["openai-beta"] == "assistants=v2"


def test_retrieve_vector_store(api):
    store = api.retrieve(STORE_ID)
    assert store.name == STORE_NAME
    assert store.created_at == 1234567890
    assert store.expires_after is None


def test_delete_vector_store(api):
    status = api.delete(STORE_ID)
    assert status.id == "vectorstore_abc123"
    assert status.object == "vector_store.deleted"
    assert status.deleted is True


def test_list_vector_stores(api, server):
    page = api.list(PAGINATION)
    assert [s.id for s in page.vector_stores] == [STORE_ID]
    assert page.first_id == STORE_ID
    assert page.last_id == STORE_ID
    assert page.has_more is False
    assert server.calls[-1].query == EXPECTED_QUERY


def test_list_vector_stores_without_pagination_sends_no_query(api, server):
    page = api.list()
    assert [s.id for s in page.vector_stores] == [STORE_ID]
    assert page.has_more is False
    assert server.calls[-1].query == {}


def test_create_vector_store_file(api, server):
    created = api.create_file(STORE_ID, FILE_ID)
    assert created.id == FILE_ID
    assert created.vector_store_id == STORE_ID
    assert server.calls[-1].body == {"file_id": FILE_ID}


def test_list_vector_store_files(api, server):
    page = api.list_files(STORE_ID, PAGINATION)
    assert [f.id for f in page.vector_store_files] == [FILE_ID]
    assert page.first_id is None
    assert server.calls[-1].query == EXPECTED_QUERY


def test_retrieve_vector_store_file(api):
    found = api.retrieve_file(STORE_ID, FILE_ID)
    assert found.status == "completed"
    assert found.object == "vector_store.file"


def test_delete_vector_store_file_ignores_body(api, server):
    assert api.delete_file(STORE_ID, FILE_ID) is None
    assert server.calls[-1].method == "DELETE"
    assert server.calls[-1].path == f"/v1/vector_stores/{STORE_ID}/files/{FILE_ID}"


def test_modify_vector_store(api, server):
    store = api.modify(STORE_ID, VectorStoreRequest(name="Renamed"))
    assert store.name == "Renamed"
    assert server.calls[-1].method == "POST"


def test_create_vector_store_file_batch(api, server):
    batch = api.create_file_batch(STORE_ID, [FILE_ID])
    assert batch.id == BATCH_ID
    assert batch.status == "completed"
    assert batch.file_counts.completed == 1
    assert server.calls[-1].body == {"file_ids": [FILE_ID]}


def test_retrieve_vector_store_file_batch(api):
    batch = api.retrieve_file_batch(STORE_ID, BATCH_ID)
    assert batch.status == "completed"
    assert batch.vector_store_id == STORE_ID


def test_list_vector_store_files_in_batch(api, server):
    page = api.list_files_in_batch(STORE_ID, BATCH_ID, PAGINATION)
    assert [f.id for f in page.vector_store_files] == [FILE_ID]
    assert server.calls[-1].query == EXPECTED_QUERY


def test_cancel_vector_store_file_batch(api, server):
    batch = api.cancel_file_batch(STORE_ID, BATCH_ID)
    assert batch.status == "cancelling"
    assert server.calls[-1].path == f"/v1/vector_stores/{STORE_ID}/file_batches/{BATCH_ID}/cancel"


def test_unknown_vector_store_raises_api_error(api):
    with pytest.raises(APIError) as info:
        api.retrieve("vs_missing")
    assert info.value.status_code == 404


def test_request_to_dict_omits_empty_fields():
    assert VectorStoreRequest().to_dict() == {}
    request = VectorStoreRequest(
        name="n",
        file_ids=["f1"],
        expires_after=VectorStoreExpires(anchor="last_active_at", days=7),
        metadata={"k": "v"},
    )
    assert request.to_dict() == {
        "name": "n",
        "file_ids": ["f1"],
        "expires_after": {"anchor": "last_active_at", "days": 7},
        "metadata": {"k": "v"},
    }