"""JSON Schema definitions as nested dataclasses."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class DataType(str, Enum):
    """The primitive and container types a schema can describe."""

    OBJECT = "object"
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    ARRAY = "array"
    NULL = "null"
    BOOLEAN = "boolean"


@dataclass
class Definition:
    """A small subset of JSON Schema, enough for function-call parameters.

    ``additional_properties`` may be ``True``, ``False`` or another
    ``Definition``; ``None`` leaves it out of the serialised schema.
    """

    type: DataType | None = None
    description: str = ""
    enum: list[str] | None = None
    properties: dict[str, Definition] | None = None
    required: list[str] | None = None
    items: Definition | None = None
    additional_properties: Any = None
    nullable: bool = False
    ref: str = ""
    defs: dict[str, Definition] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the schema as a JSON-ready dict, leaving out empty members."""
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = DataType(self.type).value
        if self.description:
            out["description"] = self.description
        if self.enum:
            out["enum"] = list(self.enum)
        if self.properties:
            out["properties"] = {
                name: prop.to_dict() for name, prop in self.properties.items()
            }
        if self.required:
            out["required"] = list(self.required)
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.additional_properties is not None:
            extra = self.additional_properties
            out["additionalProperties"] = (
                extra.to_dict() if isinstance(extra, Definition) else extra
            )
        if self.nullable:
            out["nullable"] = True
        if self.ref:
            out["$ref"] = self.ref
        if self.defs:
            out["$defs"] = {name: d.to_dict() for name, d in self.defs.items()}
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Definition:
        """Build a definition from its JSON form."""
        extra = data.get("additionalProperties")
        if isinstance(extra, dict):
            extra = cls.from_dict(extra)
        properties = data.get("properties")
        defs = data.get("$defs")
        items = data.get("items")
        enum = data.get("enum")
        required = data.get("required")
        return cls(
            type=DataType(data["type"]) if data.get("type") else None,
            description=data.get("description", ""),
            enum=list(enum) if enum is not None else None,
            properties=(
                {k: cls.from_dict(v) for k, v in properties.items()}
                if properties is not None
                else None
            ),
            required=list(required) if required is not None else None,
            items=cls.from_dict(items) if items is not None else None,
            additional_properties=extra,
            nullable=bool(data.get("nullable", False)),
            ref=data.get("$ref", ""),
            defs=(
                {k: cls.from_dict(v) for k, v in defs.items()}
                if defs is not None
                else None
            ),
        )

    def to_json(self) -> str:
        """Serialise the schema to a JSON string."""
        return json.dumps(self.to_dict())

    def unmarshal(self, content: str | bytes) -> Any:
        """Decode ``content`` as JSON, check it against this schema and return it."""
        from .validate import verify_schema_and_unmarshal

        return verify_schema_and_unmarshal(self, content)