"""Rate-limit information carried in API response headers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from fractions import Fraction
from typing import Any

_UNIT_SECONDS = {
    "ns": Fraction(1, 1_000_000_000),
    "us": Fraction(1, 1_000_000),
    "µs": Fraction(1, 1_000_000),
    "μs": Fraction(1, 1_000_000),
    "ms": Fraction(1, 1_000),
    "s": Fraction(1),
    "m": Fraction(60),
    "h": Fraction(3600),
}
_COMPONENT = r"([0-9]+\.?[0-9]*|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)"
_DURATION = re.compile(rf"(?:{_COMPONENT})+")
_PART = re.compile(_COMPONENT)
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``1h2m3.5s``; malformed text counts as zero."""
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0" or not _DURATION.fullmatch(text):
        return timedelta(0)
    total = sum(
        (Fraction(number) * _UNIT_SECONDS[unit] for number, unit in _PART.findall(text)),
        Fraction(0),
    )
    return timedelta(seconds=float(sign * total))


def _atoi(value: str) -> int:
    return int(value) if _INTEGER.fullmatch(value) else 0


def _header(headers: Any, name: str) -> str:
    for key, value in headers.items():
        if key.lower() == name:
            if isinstance(value, (list, tuple)):
                return str(value[0]) if value else ""
            return str(value)
    return ""


class ResetTime(str):
    """A reset interval as sent by the server, e.g. ``6m0s``."""

    def time(self) -> datetime:
        """Return the moment, from now, at which the limit resets."""
        return datetime.now(timezone.utc) + _parse_duration(str(self))


@dataclass
class RateLimitHeaders:
    """The ``x-ratelimit-*`` values of one response."""

    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: ResetTime = field(default_factory=ResetTime)
    reset_tokens: ResetTime = field(default_factory=ResetTime)

    @classmethod
    def from_headers(cls, headers: Any) -> RateLimitHeaders:
        """Read the values from a header mapping; missing or bad numbers give 0."""
        return cls(
            limit_requests=_atoi(_header(headers, "x-ratelimit-limit-requests")),
            limit_tokens=_atoi(_header(headers, "x-ratelimit-limit-tokens")),
            remaining_requests=_atoi(_header(headers, "x-ratelimit-remaining-requests")),
            remaining_tokens=_atoi(_header(headers, "x-ratelimit-remaining-tokens")),
            reset_requests=ResetTime(_header(headers, "x-ratelimit-reset-requests")),
            reset_tokens=ResetTime(_header(headers, "x-ratelimit-reset-tokens")),
        )