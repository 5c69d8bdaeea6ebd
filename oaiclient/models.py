"""The models endpoint: list, inspect and delete models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Permission:
    """What an organisation may do with a model."""

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
    def from_dict(cls, data: dict[str, Any]) -> Permission:
        flags = (
            "allow_create_engine",
            "allow_sampling",
            "allow_logprobs",
            "allow_search_indices",
            "allow_view",
            "allow_fine_tuning",
            "is_blocking",
        )
        return cls(
            created_at=int(data.get("created") or 0),
            id=data.get("id") or "",
            object=data.get("object") or "",
            organization=data.get("organization") or "",
            group=data.get("group"),
            **{name: bool(data.get(name, False)) for name in flags},
        )


@dataclass
class Model:
    """A model and who owns it."""

    created_at: int = 0
    id: str = ""
    object: str = ""
    owned_by: str = ""
    permission: list[Permission] = field(default_factory=list)
    root: str = ""
    parent: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Model:
        return cls(
            created_at=int(data.get("created") or 0),
            id=data.get("id") or "",
            object=data.get("object") or "",
            owned_by=data.get("owned_by") or "",
            permission=[Permission.from_dict(p) for p in data.get("permission") or []],
            root=data.get("root") or "",
            parent=data.get("parent") or "",
        )


@dataclass
class ModelsList:
    """The models available to the caller."""

    models: list[Model] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModelsList:
        return cls(models=[Model.from_dict(m) for m in data.get("data") or []])


@dataclass
class FineTuneModelDeleteResponse:
    """The outcome of deleting a fine-tuned model."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FineTuneModelDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted", False)),
        )


class Models:
    """Model calls made through a transport."""

    def __init__(self, transport: Any) -> None:
        self._transport = transport

    def list(self) -> ModelsList:
        """List the currently available models."""
        reply = self._transport.request("GET", "/models", None, False)
        return ModelsList.from_dict(reply or {})

    def get(self, model_id: str) -> Model:
        """Fetch one model."""
        reply = self._transport.request("GET", f"/models/{model_id}", None, False)
        return Model.from_dict(reply or {})

    def delete_fine_tune(self, model_id: str) -> FineTuneModelDeleteResponse:
        """Delete a fine-tuned model; needs the Owner role in the organisation."""
        reply = self._transport.request("DELETE", f"/models/{model_id}", None, False)
        return FineTuneModelDeleteResponse.from_dict(reply or {})