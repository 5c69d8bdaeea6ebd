"""Checks on chat requests sent to reasoning models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_REASONING_PREFIXES = ("o1", "o3", "o4", "gpt-5")


class ReasoningModelError(ValueError):
    """A request uses a parameter a reasoning model does not accept."""

    default_message = "this request is not supported by reasoning models"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ReasoningModelMaxTokensError(ReasoningModelError):
    """``max_tokens`` was set; reasoning models need ``max_completion_tokens``."""

    default_message = "this model is not supported MaxTokens, please use MaxCompletionTokens"


class ReasoningModelLogprobsError(ReasoningModelError):
    """Log probabilities were requested."""

    default_message = "this model has beta-limitations, logprobs not supported"


class ReasoningModelLimitationsError(ReasoningModelError):
    """A sampling parameter differs from its fixed value."""

    default_message = (
        "this model has beta-limitations, temperature, top_p and n are fixed at 1, "
        "while presence_penalty and frequency_penalty are fixed at 0"
    )


def _get(request: Any, name: str) -> Any:
    if isinstance(request, Mapping):
        return request.get(name)
    return getattr(request, name, None)


class ReasoningValidator:
    """Validates chat requests aimed at o1, o3, o4 and gpt-5 models."""

    def validate(self, request: Any) -> None:
        """Raise a ``ReasoningModelError`` if the request breaks a model limitation.

        ``request`` is a mapping or an object with the chat request's fields;
        requests for other models always pass.
        """
        model = _get(request, "model") or ""
        if not model.startswith(_REASONING_PREFIXES):
            return

        if (_get(request, "max_tokens") or 0) > 0:
            raise ReasoningModelMaxTokensError()
        if _get(request, "logprobs"):
            raise ReasoningModelLogprobsError()
        for name in ("temperature", "top_p", "n"):
            value = _get(request, name) or 0
            if value > 0 and value != 1:
                raise ReasoningModelLimitationsError()
        for name in ("presence_penalty", "frequency_penalty"):
            if (_get(request, name) or 0) > 0:
                raise ReasoningModelLimitationsError()