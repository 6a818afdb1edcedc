"""Listing, inspecting and deleting models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .api import Transport


@dataclass
class Permission:
    """A permission entry of a model."""

    created_at: int = 0
    id: str = ""
    object: str = ""
    allow_create_engine: bool = False
    allow_sampling: bool = False
    allow_logprobs: bool = False
    allow_search_indices: bool = False
    allow_view: bool = False
    allow_fine_tuning: bool = False
    organization: str = ""
    group: Any = None
    is_blocking: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Permission:
        data = data or {}
        return cls(
            created_at=int(data.get("created") or 0),
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            allow_create_engine=bool(data.get("allow_create_engine")),
            allow_sampling=bool(data.get("allow_sampling")),
            allow_logprobs=bool(data.get("allow_logprobs")),
            allow_search_indices=bool(data.get("allow_search_indices")),
            allow_view=bool(data.get("allow_view")),
            allow_fine_tuning=bool(data.get("allow_fine_tuning")),
            organization=str(data.get("organization") or ""),
            group=data.get("group"),
            is_blocking=bool(data.get("is_blocking")),
        )


@dataclass
class Model:
    """A model and its ownership details."""

    created_at: int = 0
    id: str = ""
    object: str = ""
    owned_by: str = ""
    permission: list[Permission] = field(default_factory=list)
    root: str = ""
    parent: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Model:
        data = data or {}
        return cls(
            created_at=int(data.get("created") or 0),
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            owned_by=str(data.get("owned_by") or ""),
            permission=[Permission.from_dict(p) for p in data.get("permission") or []],
            root=str(data.get("root") or ""),
            parent=str(data.get("parent") or ""),
        )


@dataclass
class ModelsList:
    """The models available to the user or organization."""

    models: list[Model] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ModelsList:
        data = data or {}
        return cls(models=[Model.from_dict(m) for m in data.get("data") or []])


@dataclass
class FineTuneModelDeleteResponse:
    """The outcome of deleting a fine-tuned model."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTuneModelDeleteResponse:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            object=str(data.get("object") or ""),
            deleted=bool(data.get("deleted")),
        )


class ModelsAPI:
    """Operations on models."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def list(self) -> ModelsList:
        """List the currently available models."""
        return ModelsList.from_dict(self._transport.request("GET", "/models", beta=False))

    def get(self, model_id: str) -> Model:
        """Fetch one model."""
        return Model.from_dict(self._transport.request("GET", f"/models/{model_id}", beta=False))

    def delete_fine_tune(self, model_id: str) -> FineTuneModelDeleteResponse:
        """Delete a fine-tuned model; requires the owner role."""
        return FineTuneModelDeleteResponse.from_dict(
            self._transport.request("DELETE", f"/models/{model_id}", beta=False)
        )