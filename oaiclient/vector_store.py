"""Vector stores, their files and their file batches."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .pagination import Pagination, encode_query

VECTOR_STORES_PATH = "/vector_stores"
FILES_SUFFIX = "/files"
FILE_BATCHES_SUFFIX = "/file_batches"


def _opt_int(value: Any) -> int | None:
    return int(value) if value is not None else None


@dataclass
class VectorStoreFileCount:
    """How many files of a store or batch are in each state."""

    in_progress: int = 0
    completed: int = 0
    failed: int = 0
    cancelled: int = 0
    total: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreFileCount:
        return cls(
            in_progress=int(data.get("in_progress") or 0),
            completed=int(data.get("completed") or 0),
            failed=int(data.get("failed") or 0),
            cancelled=int(data.get("cancelled") or 0),
            total=int(data.get("total") or 0),
        )


@dataclass
class VectorStoreExpires:
    """When a vector store expires: ``days`` after the ``anchor`` event."""

    anchor: str = ""
    days: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"anchor": self.anchor, "days": self.days}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreExpires:
        return cls(anchor=data.get("anchor") or "", days=int(data.get("days") or 0))


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
    def from_dict(cls, data: dict[str, Any]) -> VectorStore:
        expires_after = data.get("expires_after")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            name=data.get("name") or "",
            usage_bytes=int(data.get("usage_bytes") or 0),
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts") or {}),
            status=data.get("status") or "",
            expires_after=(
                VectorStoreExpires.from_dict(expires_after)
                if expires_after is not None
                else None
            ),
            expires_at=_opt_int(data.get("expires_at")),
            metadata=data.get("metadata"),
        )


@dataclass
class VectorStoreRequest:
    """The parameters of a vector store to create or modify; empty ones are not sent."""

    name: str = ""
    file_ids: list[str] = field(default_factory=list)
    expires_after: VectorStoreExpires | None = None
    metadata: dict[str, Any] | None = None

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


@dataclass
class VectorStoresList:
    """A page of vector stores."""

    vector_stores: list[VectorStore] = field(default_factory=list)
    last_id: str | None = None
    first_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoresList:
        return cls(
            vector_stores=[VectorStore.from_dict(v) for v in data.get("data") or []],
            last_id=data.get("last_id"),
            first_id=data.get("first_id"),
            has_more=bool(data.get("has_more", False)),
        )


@dataclass
class VectorStoreDeleteResponse:
    """The outcome of deleting a vector store."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted", False)),
        )


@dataclass
class VectorStoreFile:
    """A file in a vector store."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    usage_bytes: int = 0
    status: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreFile:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            vector_store_id=data.get("vector_store_id") or "",
            usage_bytes=int(data.get("usage_bytes") or 0),
            status=data.get("status") or "",
        )


@dataclass
class VectorStoreFilesList:
    """A page of vector store files."""

    vector_store_files: list[VectorStoreFile] = field(default_factory=list)
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreFilesList:
        return cls(
            vector_store_files=[
                VectorStoreFile.from_dict(f) for f in data.get("data") or []
            ],
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
            has_more=bool(data.get("has_more", False)),
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
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreFileBatch:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            vector_store_id=data.get("vector_store_id") or "",
            status=data.get("status") or "",
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts") or {}),
        )


class VectorStores:
    """Vector store calls made through a transport."""

    def __init__(self, transport: Any) -> None:
        self._transport = transport

    def _call(self, method: str, path: str, body: Any = None) -> dict[str, Any]:
        return self._transport.request(method, path, body, True) or {}

    @staticmethod
    def _store(vector_store_id: str) -> str:
        return f"{VECTOR_STORES_PATH}/{vector_store_id}"

    @staticmethod
    def _query(pagination: Pagination | None) -> str:
        return encode_query((pagination or Pagination()).query_params())

    def create(self, request: VectorStoreRequest) -> VectorStore:
        """Create a new vector store."""
        return VectorStore.from_dict(
            self._call("POST", VECTOR_STORES_PATH, request.to_dict())
        )

    def retrieve(self, vector_store_id: str) -> VectorStore:
        """Fetch a vector store."""
        return VectorStore.from_dict(self._call("GET", self._store(vector_store_id)))

    def modify(self, vector_store_id: str, request: VectorStoreRequest) -> VectorStore:
        """Change a vector store."""
        return VectorStore.from_dict(
            self._call("POST", self._store(vector_store_id), request.to_dict())
        )

    def delete(self, vector_store_id: str) -> VectorStoreDeleteResponse:
        """Delete a vector store."""
        return VectorStoreDeleteResponse.from_dict(
            self._call("DELETE", self._store(vector_store_id))
        )

    def list(self, pagination: Pagination | None = None) -> VectorStoresList:
        """Fetch a page of vector stores."""
        path = VECTOR_STORES_PATH + self._query(pagination)
        return VectorStoresList.from_dict(self._call("GET", path))

    def create_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        """Add an uploaded file to a vector store."""
        path = self._store(vector_store_id) + FILES_SUFFIX
        return VectorStoreFile.from_dict(self._call("POST", path, {"file_id": file_id}))

    def retrieve_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        """Fetch one file of a vector store."""
        path = f"{self._store(vector_store_id)}{FILES_SUFFIX}/{file_id}"
        return VectorStoreFile.from_dict(self._call("GET", path))

    def delete_file(self, vector_store_id: str, file_id: str) -> None:
        """Remove a file from a vector store; the reply body is not used."""
        path = f"{self._store(vector_store_id)}{FILES_SUFFIX}/{file_id}"
        try:
            self._transport.request("DELETE", path, None, True)
        except ValueError:
            pass

    def list_files(
        self, vector_store_id: str, pagination: Pagination | None = None
    ) -> VectorStoreFilesList:
        """Fetch a page of the files of a vector store."""
        path = self._store(vector_store_id) + FILES_SUFFIX + self._query(pagination)
        return VectorStoreFilesList.from_dict(self._call("GET", path))

    def create_file_batch(
        self, vector_store_id: str, file_ids: list[str]
    ) -> VectorStoreFileBatch:
        """Add several uploaded files to a vector store at once."""
        path = self._store(vector_store_id) + FILE_BATCHES_SUFFIX
        return VectorStoreFileBatch.from_dict(
            self._call("POST", path, {"file_ids": list(file_ids)})
        )

    def retrieve_file_batch(
        self, vector_store_id: str, batch_id: str
    ) -> VectorStoreFileBatch:
        """Fetch a file batch."""
        path = f"{self._store(vector_store_id)}{FILE_BATCHES_SUFFIX}/{batch_id}"
        return VectorStoreFileBatch.from_dict(self._call("GET", path))

    def cancel_file_batch(
        self, vector_store_id: str, batch_id: str
    ) -> VectorStoreFileBatch:
        """Cancel a file batch in progress."""
        path = f"{self._store(vector_store_id)}{FILE_BATCHES_SUFFIX}/{batch_id}/cancel"
        return VectorStoreFileBatch.from_dict(self._call("POST", path))

    def list_files_in_batch(
        self,
        vector_store_id: str,
        batch_id: str,
        pagination: Pagination | None = None,
    ) -> VectorStoreFilesList:
        """Fetch a page of the files of a batch."""
        path = (
            f"{self._store(vector_store_id)}{FILE_BATCHES_SUFFIX}/{batch_id}/files"
            + self._query(pagination)
        )
        return VectorStoreFilesList.from_dict(self._call("GET", path))