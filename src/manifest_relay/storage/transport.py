"""The one capability the registry client needs from HTTP: send a request,
get a response.

``httpx.Client`` already has exactly this shape, so production code passes
one straight through.  Tests hand in a client wrapped around
``httpx.MockTransport`` instead.
"""

from dataclasses import dataclass, field
from typing import Protocol

import httpx

from ..exceptions import TransportError

SUCCESS_CODES = (200, 201)


class Transport(Protocol):
    """Anything that can send one request and return its response."""

    def send(self, request: httpx.Request) -> httpx.Response: ...


def send_request(
    transport: Transport, request: httpx.Request
) -> httpx.Response:
    """Send ``request``, turning httpx failures into `TransportError`."""
    try:
        return transport.send(request)
    except httpx.RequestError as e:
        raise TransportError(
            f"{request.method} {request.url} failed: {e}", str(request.url)
        ) from e


def parse_absolute_url(url: str | httpx.URL) -> httpx.URL:
    """Parse ``url``, insisting on an ``http`` or ``https`` URL with a host.

    Raises
    ------
    ValueError
        If the URL cannot be parsed or is not absolute.
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise ValueError(f"Invalid URL '{url}': {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ValueError(f"URL '{url}' is missing protocol or host")
    return parsed


@dataclass(frozen=True)
class ManifestRequest:
    """A request that may be sent more than once.

    The body is serialized before the first attempt and the same bytes are
    used for every `httpx.Request` built from it.
    """

    method: str
    url: httpx.URL
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    @property
    def host(self) -> str:
        """Registry host as credential stores key it: ``host[:port]``."""
        return self.url.netloc.decode("ascii")

    def build(self, authorization: str = "") -> httpx.Request:
        headers = dict(self.headers)
        if authorization:
            headers["Authorization"] = authorization
        return httpx.Request(
            self.method, self.url, headers=headers, content=self.body
        )
