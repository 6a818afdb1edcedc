"""Vector stores, their files and file batches."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .api import Pagination, Transport

_VECTOR_STORES = "/vector_stores"
_FILES = "/files"
_FILE_BATCHES = "/file_batches"


@dataclass
class VectorStoreFileCount:
    """File counts of a vector store or batch, by processing state."""

    in_progress: int = 0
    completed: int = 0
    failed: int = 0
    cancelled: int = 0
    total: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> VectorStoreFileCount:
        data = data or {}
        return cls(
            in_progress=int(data.get("in_progress") or 0),
            completed=int(data.get("completed") or 0),
            failed=int(data.get("failed") or 0),
            cancelled=int(data.get("cancelled") or 0),
            total=int(data.get("total") or 0),
        )


@dataclass
class VectorStoreExpires:
    """Expiry policy: the store expires ``days`` after ``anchor``."""

    anchor: str
    days: int

    def to_dict(self) -> dict[str, Any]:
        return {"anchor": self.anchor, "days": self.days}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> VectorStoreExpires | None:
        if data is None:
            return None
        return cls(anchor=str(data.get("anchor") or ""), days=int(data.get("days") or 0))


@dataclass
class VectorStore:
    """A vector store as returned by the API."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    name: str = ""
    usage_bytes: int = 0
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)
    status: str = ""
    expires_after: VectorStoreExpires | None = None
    expires_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> VectorStore:
        data = data or {}
        expires_at = data.get("expires_at")
        return cls(
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            created_at=int(data.get("created_at") or 0),
            name=str(data.get("name") or ""),
            usage_bytes=int(data.get("usage_bytes") or 0),
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts")),
            status=str(data.get("status") or ""),
            expires_after=VectorStoreExpires.from_dict(data.get("expires_after")),
            expires_at=None if expires_at is None else int(expires_at),
            metadata=data.get("metadata"),
        )


@dataclass
class VectorStoreRequest:
    """Parameters for creating or modifying a vector store."""

    name: str = ""
    file_ids: list[str] = field(default_factory=list)
    expires_after: VectorStoreExpires | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.expires_after is not None:
            out["expires_after"] = self.expires_after.to_dict()
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


@dataclass
class VectorStoresList:
    """A page of vector stores."""

    vector_stores: list[VectorStore] = field(default_factory=list)
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> VectorStoresList:
        data = data or {}
        return cls(
            vector_stores=[VectorStore.from_dict(v) for v in data.get("data") or []],
            first_id=_optional_str(data.get("first_id")),
            last_id=_optional_str(data.get("last_id")),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class VectorStoreDeleteResponse:
    """The outcome of deleting a vector store."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> VectorStoreDeleteResponse:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            deleted=bool(data.get("deleted")),
        )


@dataclass
class VectorStoreFile:
    """A file attached to a vector store."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    usage_bytes: int = 0
    status: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> VectorStoreFile:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            created_at=int(data.get("created_at") or 0),
            vector_store_id=str(data.get("vector_store_id") or ""),
            usage_bytes=int(data.get("usage_bytes") or 0),
            status=str(data.get("status") or ""),
        )


@dataclass
class VectorStoreFilesList:
    """A page of vector store files."""

    vector_store_files: list[VectorStoreFile] = field(default_factory=list)
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> VectorStoreFilesList:
        data = data or {}
        return cls(
            vector_store_files=[VectorStoreFile.from_dict(v) for v in data.get("data") or []],
            first_id=_optional_str(data.get("first_id")),
            last_id=_optional_str(data.get("last_id")),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class VectorStoreFileBatch:
    """A batch of files being added to a vector store."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    status: str = ""
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> VectorStoreFileBatch:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            created_at=int(data.get("created_at") or 0),
            vector_store_id=str(data.get("vector_store_id") or ""),
            status=str(data.get("status") or ""),
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts")),
        )


def _query(pagination: Pagination | None) -> dict[str, str] | None:
    return pagination.to_query() if pagination is not None else None


class VectorStoresAPI:
    """Operations on vector stores, their files and file batches."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def _store_path(self, vector_store_id: str) -> str:
        return f"{_VECTOR_STORES}/{vector_store_id}"

    def create(self, request: VectorStoreRequest) -> VectorStore:
        """Create a vector store."""
        return VectorStore.from_dict(self._transport.request("POST", _VECTOR_STORES, request, beta=True))

    def retrieve(self, vector_store_id: str) -> VectorStore:
        """Fetch a vector store."""
        return VectorStore.from_dict(
            self._transport.request("GET", self._store_path(vector_store_id), beta=True)
        )

    def modify(self, vector_store_id: str, request: VectorStoreRequest) -> VectorStore:
        """Change a vector store."""
        return VectorStore.from_dict(
            self._transport.request("POST", self._store_path(vector_store_id), request, beta=True)
        )

    def delete(self, vector_store_id: str) -> VectorStoreDeleteResponse:
        """Delete a vector store."""
        return VectorStoreDeleteResponse.from_dict(
            self._transport.request("DELETE", self._store_path(vector_store_id), beta=True)
        )

    def list(self, pagination: Pagination | None = None) -> VectorStoresList:
        """List vector stores."""
        return VectorStoresList.from_dict(
            self._transport.request("GET", _VECTOR_STORES, query=_query(pagination), beta=True)
        )

    def create_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        """Attach an uploaded file to a vector store."""
        return VectorStoreFile.from_dict(
            self._transport.request(
                "POST", self._store_path(vector_store_id) + _FILES, {"file_id": file_id}, beta=True
            )
        )

    def retrieve_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        """Fetch a file of a vector store."""
        return VectorStoreFile.from_dict(
            self._transport.request(
                "GET", f"{self._store_path(vector_store_id)}{_FILES}/{file_id}", beta=True
            )
        )

    def delete_file(self, vector_store_id: str, file_id: str) -> None:
        """Remove a file from a vector store; the reply body is not inspected."""
        with self._transport.raw("DELETE", f"{self._store_path(vector_store_id)}{_FILES}/{file_id}") as reply:
            reply.read()

    def list_files(self, vector_store_id: str, pagination: Pagination | None = None) -> VectorStoreFilesList:
        """List the files of a vector store."""
        return VectorStoreFilesList.from_dict(
            self._transport.request(
                "GET", self._store_path(vector_store_id) + _FILES, query=_query(pagination), beta=True
            )
        )

    def create_file_batch(self, vector_store_id: str, file_ids: list[str]) -> VectorStoreFileBatch:
        """Attach several uploaded files to a vector store at once."""
        return VectorStoreFileBatch.from_dict(
            self._transport.request(
                "POST",
                self._store_path(vector_store_id) + _FILE_BATCHES,
                {"file_ids": list(file_ids)},
                beta=True,
            )
        )

    def retrieve_file_batch(self, vector_store_id: str, batch_id: str) -> VectorStoreFileBatch:
        """Fetch a file batch."""
        return VectorStoreFileBatch.from_dict(
            self._transport.request(
                "GET", f"{self._store_path(vector_store_id)}{_FILE_BATCHES}/{batch_id}", beta=True
            )
        )

    def cancel_file_batch(self, vector_store_id: str, batch_id: str) -> VectorStoreFileBatch:
        """Cancel the processing of a file batch."""
        return VectorStoreFileBatch.from_dict(
            self._transport.request(
                "POST", f"{self._store_path(vector_store_id)}{_FILE_BATCHES}/{batch_id}/cancel", beta=True
            )
        )

    def list_files_in_batch(
        self, vector_store_id: str, batch_id: str, pagination: Pagination | None = None
    ) -> VectorStoreFilesList:
        """List the files of a file batch."""
        return VectorStoreFilesList.from_dict(
            self._transport.request(
                "GET",
                f"{self._store_path(vector_store_id)}{_FILE_BATCHES}/{batch_id}/files",
                query=_query(pagination),
                beta=True,
            )
        )