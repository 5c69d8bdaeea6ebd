"""List pagination and the HTTP transport shared by API resources."""

from __future__ import annotations

import json
import urllib.request
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_ASSISTANT_VERSION = "v2"


@dataclass
class Pagination:
    """Cursor options for list endpoints; unset options are not sent."""

    limit: int | None = None
    order: str | None = None
    after: str | None = None
    before: str | None = None

    def query_params(self) -> dict[str, str]:
        """Return the set options as query parameters."""
        params: dict[str, str] = {}
        if self.limit is not None:
            params["limit"] = str(int(self.limit))
        for name in ("order", "after", "before"):
            value = getattr(self, name)
            if value is not None:
                params[name] = value
        return params


def encode_query(params: Mapping[str, str] | Iterable[tuple[str, str]]) -> str:
    """Encode parameters sorted by key as ``?k=v&...``, or ``""`` when there are none."""
    pairs = list(params.items()) if isinstance(params, Mapping) else list(params)
    if not pairs:
        return ""
    pairs.sort(key=lambda pair: pair[0])
    return "?" + urlencode(pairs)


class Transport:
    """Sends JSON requests to the API and returns the decoded replies.

    Error statuses raise ``urllib.error.HTTPError``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        organization: str = "",
        assistant_version: str = DEFAULT_ASSISTANT_VERSION,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.organization = organization
        self.assistant_version = assistant_version
        self.timeout = timeout

    def _send(self, method: str, path: str, body: Any, beta: bool) -> bytes:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        data = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"
        if self.organization:
            headers["OpenAI-Organization"] = self.organization
        if beta:
            headers["OpenAI-Beta"] = f"assistants={self.assistant_version}"
        request = urllib.request.Request(
            self.base_url + path, data=data, headers=headers, method=method
        )
        options = {} if self.timeout is None else {"timeout": self.timeout}
        with urllib.request.urlopen(request, **options) as response:
            return response.read()

    def request(
        self, method: str, path: str, body: Any = None, beta: bool = False
    ) -> Any:
        """Send a request and return the decoded JSON reply, or None if it is empty.

        ``beta`` marks requests to the assistants endpoints.
        """
        raw = self._send(method, path, body, beta)
        if not raw.strip():
            return None
        return json.loads(raw)

    def request_raw(self, method: str, path: str, body: Any = None) -> bytes:
        """Send a request and return the reply body unchanged."""
        return self._send(method, path, body, False)