"""Messages within assistant threads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .pagination import encode_query
from .thread import ThreadAttachment

MESSAGES_SUFFIX = "messages"


@dataclass
class MessageContent:
    """One part of a message: text, an uploaded image or an image URL."""

    type: str = ""
    text: str | None = None
    annotations: list[Any] = field(default_factory=list)
    image_file_id: str | None = None
    image_url: str | None = None
    image_detail: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageContent:
        text = data.get("text")
        image_file = data.get("image_file")
        image_url = data.get("image_url")
        return cls(
            type=data.get("type") or "",
            text=(text.get("value") or "") if text else None,
            annotations=list((text or {}).get("annotations") or []),
            image_file_id=(image_file.get("file_id") or "") if image_file else None,
            image_url=(image_url.get("url") or "") if image_url else None,
            image_detail=(image_url.get("detail") or "") if image_url else None,
        )


@dataclass
class Message:
    """A message in a thread."""

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
    def from_dict(cls, data: dict[str, Any]) -> Message:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            thread_id=data.get("thread_id") or "",
            role=data.get("role") or "",
            content=[MessageContent.from_dict(c) for c in data.get("content") or []],
            file_ids=list(data.get("file_ids") or []),
            assistant_id=data.get("assistant_id"),
            run_id=data.get("run_id"),
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
    def from_dict(cls, data: dict[str, Any]) -> MessagesList:
        return cls(
            messages=[Message.from_dict(m) for m in data.get("data") or []],
            object=data.get("object") or "",
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
            has_more=bool(data.get("has_more", False)),
        )


@dataclass
class MessageRequest:
    """A message to add to a thread."""

    role: str
    content: str
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    attachments: list[ThreadAttachment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        role = getattr(self.role, "value", self.role)
        out: dict[str, Any] = {"role": role, "content": self.content}
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
    def from_dict(cls, data: dict[str, Any]) -> MessageFile:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            message_id=data.get("message_id") or "",
        )


@dataclass
class MessageFilesList:
    """The files attached to a message."""

    message_files: list[MessageFile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageFilesList:
        return cls(
            message_files=[MessageFile.from_dict(f) for f in data.get("data") or []]
        )


@dataclass
class MessageDeletionStatus:
    """The outcome of deleting a message."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageDeletionStatus:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted", False)),
        )


class Messages:
    """Message calls made through a transport."""

    def __init__(self, transport: Any) -> None:
        self._transport = transport

    @staticmethod
    def _path(thread_id: str, *parts: str) -> str:
        return "/".join(("", "threads", thread_id, MESSAGES_SUFFIX, *parts))

    def _call(self, method: str, path: str, body: Any = None) -> dict[str, Any]:
        return self._transport.request(method, path, body, True) or {}

    def create(self, thread_id: str, request: MessageRequest) -> Message:
        """Add a message to a thread."""
        return Message.from_dict(
            self._call("POST", self._path(thread_id), request.to_dict())
        )

    def list(
        self,
        thread_id: str,
        limit: int | None = None,
        order: str | None = None,
        after: str | None = None,
        before: str | None = None,
        run_id: str | None = None,
    ) -> MessagesList:
        """Fetch the messages of a thread; unset options are not sent."""
        params: dict[str, str] = {}
        if limit is not None:
            params["limit"] = str(int(limit))
        if order is not None:
            params["order"] = order
        if after is not None:
            params["after"] = after
        if before is not None:
            params["before"] = before
        if run_id is not None:
            params["run_id"] = run_id
        path = self._path(thread_id) + encode_query(params)
        return MessagesList.from_dict(self._call("GET", path))

    def retrieve(self, thread_id: str, message_id: str) -> Message:
        """Fetch one message."""
        return Message.from_dict(self._call("GET", self._path(thread_id, message_id)))

    def modify(
        self, thread_id: str, message_id: str, metadata: dict[str, str]
    ) -> Message:
        """Replace a message's metadata."""
        return Message.from_dict(
            self._call(
                "POST", self._path(thread_id, message_id), {"metadata": metadata}
            )
        )

    def retrieve_file(self, thread_id: str, message_id: str, file_id: str) -> MessageFile:
        """Fetch one file attached to a message."""
        path = self._path(thread_id, message_id, "files", file_id)
        return MessageFile.from_dict(self._call("GET", path))

    def list_files(self, thread_id: str, message_id: str) -> MessageFilesList:
        """Fetch all files attached to a message."""
        path = self._path(thread_id, message_id, "files")
        return MessageFilesList.from_dict(self._call("GET", path))

    def delete(self, thread_id: str, message_id: str) -> MessageDeletionStatus:
        """Delete a message."""
        return MessageDeletionStatus.from_dict(
            self._call("DELETE", self._path(thread_id, message_id))
        )