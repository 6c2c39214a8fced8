"""Shared fake for `requests.Session.request` used by provider and CLI tests."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any, Callable

import requests


class MockRequestsResponse:
    """Minimal requests response mock for HTTP transport patching."""

    def __init__(self, *, payload: bytes, status_code: int = 200) -> None:
        """Initialize response with raw payload bytes and HTTP status."""

        self.content = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        """Raise HTTPError when the response status represents a failure."""

        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code} error", response=self)


@dataclass(slots=True)
class RecordedRequest:
    """One request captured by `HttpStub`."""

    method: str
    url: str
    headers: dict[str, str]
    params: dict[str, str] | None
    json: Any
    data: Any
    timeout: float | None
    trust_env: bool


@dataclass(slots=True)
class _Route:
    method: str
    url_fragment: str
    responder: Callable[[RecordedRequest], MockRequestsResponse]


@dataclass
class HttpStub:
    """Route-based fake for `requests.Session.request`.

    Routes match on method and a URL substring; the first match answers.
    Unmatched requests fail the test.
    """

    calls: list[RecordedRequest] = field(default_factory=list)
    routes: list[_Route] = field(default_factory=list)

    def add(
        self,
        method: str,
        url_fragment: str,
        *,
        payload: bytes | dict[str, Any] = b"",
        status_code: int = 200,
    ) -> None:
        """Answer matching requests with a fixed payload (dicts are JSON-encoded)."""

        body = json.dumps(payload).encode("utf-8") if isinstance(payload, dict) else payload

        def _respond(_request: RecordedRequest) -> MockRequestsResponse:
            return MockRequestsResponse(payload=body, status_code=status_code)

        self.routes.append(_Route(method.upper(), url_fragment, _respond))

    def add_error(self, method: str, url_fragment: str, exc: Exception) -> None:
        """Raise `exc` for matching requests."""

        def _raise(_request: RecordedRequest) -> MockRequestsResponse:
            raise exc

        self.routes.append(_Route(method.upper(), url_fragment, _raise))

    def handle(
        self, session: requests.Session, method: str, url: str, **kwargs: Any
    ) -> MockRequestsResponse:
        """Record a request and return the first matching route's response."""

        params = kwargs.get("params")
        recorded = RecordedRequest(
            method=method.upper(),
            url=url,
            headers=dict(kwargs.get("headers") or {}),
            params=dict(params) if params is not None else None,
            json=kwargs.get("json"),
            data=kwargs.get("data"),
            timeout=kwargs.get("timeout"),
            trust_env=session.trust_env,
        )
        self.calls.append(recorded)
        for route in self.routes:
            if route.method == recorded.method and route.url_fragment in url:
                return route.responder(recorded)
        raise AssertionError(f"unexpected request: {method} {url}")

    def calls_to(self, url_fragment: str) -> list[RecordedRequest]:
        """Return recorded requests whose URL contains `url_fragment`."""

        return [call for call in self.calls if url_fragment in call.url]
