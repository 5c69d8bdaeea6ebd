"""Assistant threads: create, retrieve, modify and delete."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

THREADS_PATH = "/threads"


class ThreadMessageRole(str, Enum):
    """Who wrote a message in a thread."""

    ASSISTANT = "assistant"
    USER = "user"


class ChunkingStrategyType(str, Enum):
    """How files are split into chunks for a vector store."""

    AUTO = "auto"
    STATIC = "static"


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


@dataclass
class ThreadAttachment:
    """A file attached to a message, with the tools that may use it."""

    file_id: str
    tools: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_id": self.file_id,
            "tools": [{"type": _value(tool)} for tool in self.tools],
        }


@dataclass
class ThreadMessage:
    """A message to place in a new thread."""

    role: ThreadMessageRole | str
    content: str
    file_ids: list[str] = field(default_factory=list)
    attachments: list[ThreadAttachment] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": _value(self.role), "content": self.content}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.attachments:
            out["attachments"] = [a.to_dict() for a in self.attachments]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class ThreadRequest:
    """The contents of a thread to create.

    ``tool_resources`` is sent as given, e.g.
    ``{"code_interpreter": {"file_ids": [...]}}``.
    """

    messages: list[ThreadMessage] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    tool_resources: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.messages:
            out["messages"] = [m.to_dict() for m in self.messages]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.tool_resources is not None:
            out["tool_resources"] = self.tool_resources
        return out


@dataclass
class ModifyThreadRequest:
    """New metadata and tool resources for a thread; metadata is always sent."""

    metadata: dict[str, Any] | None = None
    tool_resources: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"metadata": self.metadata}
        if self.tool_resources is not None:
            out["tool_resources"] = self.tool_resources
        return out


@dataclass
class Thread:
    """A conversation thread as returned by the API."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    metadata: dict[str, Any] | None = None
    tool_resources: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Thread:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            metadata=data.get("metadata"),
            tool_resources=dict(data.get("tool_resources") or {}),
        )


@dataclass
class ThreadDeleteResponse:
    """The outcome of deleting a thread."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ThreadDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted", False)),
        )


class Threads:
    """Thread calls made through a transport."""

    def __init__(self, transport: Any) -> None:
        self._transport = transport

    def create(self, request: ThreadRequest) -> Thread:
        """Create a new thread."""
        reply = self._transport.request("POST", THREADS_PATH, request.to_dict(), True)
        return Thread.from_dict(reply or {})

    def retrieve(self, thread_id: str) -> Thread:
        """Fetch a thread."""
        reply = self._transport.request("GET", f"{THREADS_PATH}/{thread_id}", None, True)
        return Thread.from_dict(reply or {})

    def modify(self, thread_id: str, request: ModifyThreadRequest) -> Thread:
        """Change a thread's metadata or tool resources."""
        reply = self._transport.request(
            "POST", f"{THREADS_PATH}/{thread_id}", request.to_dict(), True
        )
        return Thread.from_dict(reply or {})

    def delete(self, thread_id: str) -> ThreadDeleteResponse:
        """Delete a thread."""
        reply = self._transport.request(
            "DELETE", f"{THREADS_PATH}/{thread_id}", None, True
        )
        return ThreadDeleteResponse.from_dict(reply or {})