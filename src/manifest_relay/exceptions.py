"""Exceptions raised while talking to a container registry."""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for failures talking to a container registry.

    Parameters
    ----------
    message
        Human-readable description of the failure.
    url
        URL of the request that failed, if known.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class TransportError(RegistryError):
    """The request could not be sent, or the URL was unusable."""


class NoChallengeError(RegistryError):
    """A 401 arrived without a usable ``Bearer`` challenge."""


class MalformedRealmError(RegistryError):
    """The challenge realm is not an absolute URL."""

    def __init__(self, realm: str, url: str | None = None) -> None:
        super().__init__(
            f"Bearer challenge realm '{realm}' is not an absolute URL", url
        )
        self.realm = realm


class TokenExchangeStatusError(RegistryError):
    """The token endpoint answered with something other than 200."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(
            f"Failed to obtain bearer token from {url}: "
            f"status code is {status_code}",
            url,
        )
        self.status_code = status_code


class DecodeError(RegistryError):
    """A response body that should have been JSON could not be decoded."""


class UnexpectedStatusError(RegistryError):
    """The manifest endpoint's final status was not a success."""

    def __init__(
        self,
        status_code: int,
        url: str,
        method: str = "GET",
        *,
        bearer: bool = False,
    ) -> None:
        auth = " with bearer auth" if bearer else ""
        super().__init__(
            f"{method} {url} failed{auth}: status code {status_code}", url
        )
        self.status_code = status_code
        self.method = method
        self.bearer = bearer
