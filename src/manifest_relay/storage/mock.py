"""Scripted stand-in for the network, for tests and offline harnesses."""

from collections import deque

import httpx


class ScriptedTransport(httpx.MockTransport):
    """httpx transport that answers from a queue of canned responses.

    Each request pops the next entry.  An entry that is an exception is
    raised instead of answered.  Every request is recorded, so callers can
    check exactly what was sent, and running off the end of the script is
    an error rather than a silent success.

    Parameters
    ----------
    *script
        Responses (or exceptions) in the order they should be produced.
    """

    def __init__(self, *script: httpx.Response | Exception) -> None:
        super().__init__(self._answer)
        self._script: deque[httpx.Response | Exception] = deque(script)
        self.requests: list[httpx.Request] = []

    def add(self, *script: httpx.Response | Exception) -> None:
        """Append more responses to the script."""
        self._script.extend(script)

    @property
    def remaining(self) -> int:
        return len(self._script)

    def requests_to(self, host: str) -> list[httpx.Request]:
        """Recorded requests whose URL host is ``host``."""
        return [r for r in self.requests if r.url.host == host]

    def _answer(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if not self._script:
            raise AssertionError(
                f"Unscripted request: {request.method} {request.url}"
            )
        entry = self._script.popleft()
        if isinstance(entry, Exception):
            raise entry
        return entry
