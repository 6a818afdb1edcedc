"""Threads: conversations that hold messages for an assistant."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .api import Transport

_THREADS = "/threads"


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


class ThreadMessageRole(str, Enum):
    """Who authored a thread message."""

    ASSISTANT = "assistant"
    USER = "user"


class ChunkingStrategyType(str, Enum):
    """How files are split into chunks for a vector store."""

    AUTO = "auto"
    STATIC = "static"


@dataclass
class ThreadAttachmentTool:
    """A tool that an attached file is made available to."""

    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ThreadAttachmentTool:
        data = data or {}
        return cls(type=str(data.get("type") or ""))


@dataclass
class ThreadAttachment:
    """A file attached to a message together with the tools that may use it."""

    file_id: str
    tools: list[ThreadAttachmentTool] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"file_id": self.file_id, "tools": [tool.to_dict() for tool in self.tools]}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ThreadAttachment:
        data = data or {}
        return cls(
            file_id=str(data.get("file_id") or ""),
            tools=[ThreadAttachmentTool.from_dict(t) for t in data.get("tools") or []],
        )


@dataclass
class ThreadMessage:
    """A message used to seed a thread."""

    role: ThreadMessageRole | str
    content: str
    file_ids: list[str] = field(default_factory=list)
    attachments: list[ThreadAttachment] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": _value(self.role), "content": self.content}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.attachments:
            out["attachments"] = [a.to_dict() for a in self.attachments]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ThreadMessage:
        data = data or {}
        role = str(data.get("role") or "")
        try:
            parsed_role: ThreadMessageRole | str = ThreadMessageRole(role)
        except ValueError:
            parsed_role = role
        return cls(
            role=parsed_role,
            content=str(data.get("content") or ""),
            file_ids=list(data.get("file_ids") or []),
            attachments=[ThreadAttachment.from_dict(a) for a in data.get("attachments") or []],
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass
class ChunkingStrategy:
    """Chunking settings; the token sizes apply to the static strategy."""

    type: ChunkingStrategyType | str = ChunkingStrategyType.AUTO
    max_chunk_size_tokens: int | None = None
    chunk_overlap_tokens: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": _value(self.type)}
        if self.max_chunk_size_tokens is not None or self.chunk_overlap_tokens is not None:
            out["static"] = {
                "max_chunk_size_tokens": self.max_chunk_size_tokens or 0,
                "chunk_overlap_tokens": self.chunk_overlap_tokens or 0,
            }
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ChunkingStrategy:
        data = data or {}
        kind = str(data.get("type") or "")
        try:
            parsed: ChunkingStrategyType | str = ChunkingStrategyType(kind)
        except ValueError:
            parsed = kind
        static = data.get("static")
        if isinstance(static, dict):
            return cls(
                type=parsed,
                max_chunk_size_tokens=int(static.get("max_chunk_size_tokens") or 0),
                chunk_overlap_tokens=int(static.get("chunk_overlap_tokens") or 0),
            )
        return cls(type=parsed)


def _store_to_dict(store: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if store.get("file_ids"):
        out["file_ids"] = list(store["file_ids"])
    strategy = store.get("chunking_strategy")
    if strategy is not None:
        out["chunking_strategy"] = strategy.to_dict() if isinstance(strategy, ChunkingStrategy) else strategy
    if store.get("metadata"):
        out["metadata"] = dict(store["metadata"])
    return out


def _store_from_dict(data: dict[str, Any]) -> dict[str, Any]:
    store = dict(data)
    if isinstance(store.get("chunking_strategy"), dict):
        store["chunking_strategy"] = ChunkingStrategy.from_dict(store["chunking_strategy"])
    return store


@dataclass
class ToolResources:
    """Resources made available to the assistant's tools.

    ``None`` leaves a tool's section out entirely; an empty list sends the
    section without entries. Entries of ``vector_stores`` are mappings with
    optional ``file_ids``, ``chunking_strategy`` and ``metadata`` keys.
    """

    code_interpreter_file_ids: list[str] | None = None
    vector_store_ids: list[str] | None = None
    vector_stores: list[dict[str, Any]] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.code_interpreter_file_ids is not None:
            interpreter: dict[str, Any] = {}
            if self.code_interpreter_file_ids:
                interpreter["file_ids"] = list(self.code_interpreter_file_ids)
            out["code_interpreter"] = interpreter
        if self.vector_store_ids is not None or self.vector_stores is not None:
            search: dict[str, Any] = {}
            if self.vector_store_ids:
                search["vector_store_ids"] = list(self.vector_store_ids)
            if self.vector_stores:
                search["vector_stores"] = [_store_to_dict(s) for s in self.vector_stores]
            out["file_search"] = search
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ToolResources:
        data = data or {}
        resources = cls()
        interpreter = data.get("code_interpreter")
        if isinstance(interpreter, dict):
            resources.code_interpreter_file_ids = list(interpreter.get("file_ids") or [])
        search = data.get("file_search")
        if isinstance(search, dict):
            resources.vector_store_ids = list(search.get("vector_store_ids") or [])
            stores = search.get("vector_stores")
            if stores:
                resources.vector_stores = [_store_from_dict(s) for s in stores]
        return resources


@dataclass
class ThreadRequest:
    """Parameters for creating a thread."""

    messages: list[ThreadMessage] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    tool_resources: ToolResources | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.messages:
            out["messages"] = [m.to_dict() for m in self.messages]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.tool_resources is not None:
            out["tool_resources"] = self.tool_resources.to_dict()
        return out


@dataclass
class ModifyThreadRequest:
    """Parameters for modifying a thread; metadata is always sent."""

    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"metadata": None if self.metadata is None else dict(self.metadata)}
        if self.tool_resources is not None:
            out["tool_resources"] = self.tool_resources.to_dict()
        return out


@dataclass
class Thread:
    """A thread as returned by the API."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources = field(default_factory=ToolResources)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Thread:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            created_at=int(data.get("created_at") or 0),
            metadata=data.get("metadata"),
            tool_resources=ToolResources.from_dict(data.get("tool_resources")),
        )


@dataclass
class ThreadDeleteResponse:
    """The outcome of deleting a thread."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ThreadDeleteResponse:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            deleted=bool(data.get("deleted")),
        )


class ThreadsAPI:
    """Operations on threads."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def create(self, request: ThreadRequest) -> Thread:
        """Create a new thread."""
        return Thread.from_dict(self._transport.request("POST", _THREADS, request, beta=True))

    def retrieve(self, thread_id: str) -> Thread:
        """Fetch a thread."""
        return Thread.from_dict(self._transport.request("GET", f"{_THREADS}/{thread_id}", beta=True))

    def modify(self, thread_id: str, request: ModifyThreadRequest) -> Thread:
        """Change a thread's metadata or tool resources."""
        return Thread.from_dict(
            self._transport.request("POST", f"{_THREADS}/{thread_id}", request, beta=True)
        )

    def delete(self, thread_id: str) -> ThreadDeleteResponse:
        """Delete a thread."""
        return ThreadDeleteResponse.from_dict(
            self._transport.request("DELETE", f"{_THREADS}/{thread_id}", beta=True)
        )