"""Messages inside assistant threads, and the files attached to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .api import Transport
from .thread import ThreadAttachment

_MESSAGES = "messages"


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


@dataclass
class MessageText:
    """The text part of a message, with its annotations."""

    value: str = ""
    annotations: list[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> MessageText:
        data = data or {}
        return cls(value=str(data.get("value") or ""), annotations=list(data.get("annotations") or []))


@dataclass
class ImageFile:
    """An image stored as an uploaded file."""

    file_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ImageFile:
        data = data or {}
        return cls(file_id=str(data.get("file_id") or ""))


@dataclass
class ImageURL:
    """An image referenced by URL."""

    url: str = ""
    detail: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ImageURL:
        data = data or {}
        return cls(url=str(data.get("url") or ""), detail=str(data.get("detail") or ""))


@dataclass
class MessageContent:
    """One content part of a message: text or an image."""

    type: str = ""
    text: MessageText | None = None
    image_file: ImageFile | None = None
    image_url: ImageURL | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> MessageContent:
        data = data or {}
        text = data.get("text")
        image_file = data.get("image_file")
        image_url = data.get("image_url")
        return cls(
            type=str(data.get("type") or ""),
            text=MessageText.from_dict(text) if text is not None else None,
            image_file=ImageFile.from_dict(image_file) if image_file is not None else None,
            image_url=ImageURL.from_dict(image_url) if image_url is not None else None,
        )


@dataclass
class Message:
    """A message of a thread as returned by the API."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    role: str = ""
    content: list[MessageContent] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    assistant_id: str | None = None
    run_id: str | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Message:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            created_at=int(data.get("created_at") or 0),
            thread_id=str(data.get("thread_id") or ""),
            role=str(data.get("role") or ""),
            content=[MessageContent.from_dict(c) for c in data.get("content") or []],
            file_ids=list(data.get("file_ids") or []),
            assistant_id=_optional_str(data.get("assistant_id")),
            run_id=_optional_str(data.get("run_id")),
            metadata=data.get("metadata"),
        )


@dataclass
class MessagesList:
    """A page of messages."""

    messages: list[Message] = field(default_factory=list)
    object: str = ""
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> MessagesList:
        data = data or {}
        return cls(
            messages=[Message.from_dict(m) for m in data.get("data") or []],
            object=str(data.get("object") or ""),
            first_id=_optional_str(data.get("first_id")),
            last_id=_optional_str(data.get("last_id")),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class MessageRequest:
    """Parameters for adding a message to a thread."""

    role: str
    content: str
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    attachments: list[ThreadAttachment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": _value(self.role), "content": self.content}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.attachments:
            out["attachments"] = [a.to_dict() for a in self.attachments]
        return out


@dataclass
class MessageFile:
    """A file attached to a message."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    message_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> MessageFile:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            created_at=int(data.get("created_at") or 0),
            message_id=str(data.get("message_id") or ""),
        )


@dataclass
class MessageFilesList:
    """The files attached to a message."""

    message_files: list[MessageFile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> MessageFilesList:
        data = data or {}
        return cls(message_files=[MessageFile.from_dict(f) for f in data.get("data") or []])


@dataclass
class MessageDeletionStatus:
    """The outcome of deleting a message."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> MessageDeletionStatus:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            deleted=bool(data.get("deleted")),
        )


class MessagesAPI:
    """Operations on the messages of a thread."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @staticmethod
    def _path(thread_id: str, *parts: str) -> str:
        return "/".join(("", "threads", thread_id, _MESSAGES, *parts))

    def create(self, thread_id: str, request: MessageRequest) -> Message:
        """Add a message to a thread."""
        return Message.from_dict(self._transport.request("POST", self._path(thread_id), request, beta=True))

    def list(
        self,
        thread_id: str,
        limit: int | None = None,
        order: str | None = None,
        after: str | None = None,
        before: str | None = None,
        run_id: str | None = None,
    ) -> MessagesList:
        """List the messages of a thread; options left as None are not sent."""
        options = {"limit": limit, "order": order, "after": after, "before": before, "run_id": run_id}
        query = {key: str(value) for key, value in options.items() if value is not None}
        return MessagesList.from_dict(
            self._transport.request("GET", self._path(thread_id), query=query or None, beta=True)
        )

    def retrieve(self, thread_id: str, message_id: str) -> Message:
        """Fetch a message."""
        return Message.from_dict(
            self._transport.request("GET", self._path(thread_id, message_id), beta=True)
        )

    def modify(self, thread_id: str, message_id: str, metadata: dict[str, str]) -> Message:
        """Replace the metadata of a message."""
        return Message.from_dict(
            self._transport.request(
                "POST", self._path(thread_id, message_id), {"metadata": metadata}, beta=True
            )
        )

    def retrieve_file(self, thread_id: str, message_id: str, file_id: str) -> MessageFile:
        """Fetch a file attached to a message."""
        return MessageFile.from_dict(
            self._transport.request("GET", self._path(thread_id, message_id, "files", file_id), beta=True)
        )

    def list_files(self, thread_id: str, message_id: str) -> MessageFilesList:
        """List the files attached to a message."""
        return MessageFilesList.from_dict(
            self._transport.request("GET", self._path(thread_id, message_id, "files"), beta=True)
        )

    def delete(self, thread_id: str, message_id: str) -> MessageDeletionStatus:
        """Delete a message."""
        return MessageDeletionStatus.from_dict(
            self._transport.request("DELETE", self._path(thread_id, message_id), beta=True)
        )