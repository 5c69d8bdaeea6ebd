"""The moderation endpoint: checks text against the usage policies."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

MODERATION_OMNI_LATEST = "omni-moderation-latest"
MODERATION_OMNI_20240926 = "omni-moderation-2024-09-26"
MODERATION_TEXT_STABLE = "text-moderation-stable"
MODERATION_TEXT_LATEST = "text-moderation-latest"
# Deprecated; no longer accepted by the endpoint.
MODERATION_TEXT_001 = "text-moderation-001"

VALID_MODERATION_MODELS = frozenset(
    {
        MODERATION_OMNI_LATEST,
        MODERATION_OMNI_20240926,
        MODERATION_TEXT_STABLE,
        MODERATION_TEXT_LATEST,
    }
)

_CATEGORY_KEYS = {
    "hate": "hate",
    "hate_threatening": "hate/threatening",
    "harassment": "harassment",
    "harassment_threatening": "harassment/threatening",
    "self_harm": "self-harm",
    "self_harm_intent": "self-harm/intent",
    "self_harm_instructions": "self-harm/instructions",
    "sexual": "sexual",
    "sexual_minors": "sexual/minors",
    "violence": "violence",
    "violence_graphic": "violence/graphic",
}


class InvalidModerationModelError(ValueError):
    """The requested model cannot be used for moderation."""

    def __init__(
        self,
        message: str = (
            "this model is not supported with moderation, please use "
            "text-moderation-stable or text-moderation-latest instead"
        ),
    ) -> None:
        super().__init__(message)


@dataclass
class ModerationRequest:
    """The text to check and, optionally, the model to check it with."""

    input: str = ""
    model: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.input:
            out["input"] = self.input
        if self.model:
            out["model"] = self.model
        return out


@dataclass
class ResultCategories:
    """Which policy categories the input was flagged for."""

    hate: bool = False
    hate_threatening: bool = False
    harassment: bool = False
    harassment_threatening: bool = False
    self_harm: bool = False
    self_harm_intent: bool = False
    self_harm_instructions: bool = False
    sexual: bool = False
    sexual_minors: bool = False
    violence: bool = False
    violence_graphic: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResultCategories:
        return cls(
            **{f.name: bool(data.get(_CATEGORY_KEYS[f.name], False)) for f in fields(cls)}
        )


@dataclass
class ResultCategoryScores:
    """The model's confidence for each policy category."""

    hate: float = 0.0
    hate_threatening: float = 0.0
    harassment: float = 0.0
    harassment_threatening: float = 0.0
    self_harm: float = 0.0
    self_harm_intent: float = 0.0
    self_harm_instructions: float = 0.0
    sexual: float = 0.0
    sexual_minors: float = 0.0
    violence: float = 0.0
    violence_graphic: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResultCategoryScores:
        return cls(
            **{
                f.name: float(data.get(_CATEGORY_KEYS[f.name]) or 0.0)
                for f in fields(cls)
            }
        )


@dataclass
class ModerationResult:
    """The verdict for one input."""

    categories: ResultCategories = field(default_factory=ResultCategories)
    category_scores: ResultCategoryScores = field(default_factory=ResultCategoryScores)
    flagged: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModerationResult:
        return cls(
            categories=ResultCategories.from_dict(data.get("categories") or {}),
            category_scores=ResultCategoryScores.from_dict(
                data.get("category_scores") or {}
            ),
            flagged=bool(data.get("flagged", False)),
        )


@dataclass
class ModerationResponse:
    """The reply of the moderation endpoint."""

    id: str = ""
    model: str = ""
    results: list[ModerationResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModerationResponse:
        return cls(
            id=data.get("id") or "",
            model=data.get("model") or "",
            results=[ModerationResult.from_dict(r) for r in data.get("results") or []],
        )


class Moderations:
    """Moderation calls made through a transport."""

    def __init__(self, transport: Any) -> None:
        self._transport = transport

    def create(self, request: ModerationRequest) -> ModerationResponse:
        """Check the request's input; an empty model lets the server choose."""
        if request.model and request.model not in VALID_MODERATION_MODELS:
            raise InvalidModerationModelError()
        reply = self._transport.request("POST", "/moderations", request.to_dict(), False)
        return ModerationResponse.from_dict(reply or {})