"""Model for a bearer authentication challenge from a registry."""

import re
from dataclasses import dataclass
from typing import Self

from ..exceptions import NoChallengeError

BEARER_PREFIX = "Bearer "

# Either name="value" (value may hold commas and spaces, but no quotes) or
# any other run of characters up to the next comma or whitespace.
_TOKEN_RE = re.compile(r'([A-Za-z0-9]+)="([^"]*)"|[^\s,]+')


def parse_challenge_params(raw: str) -> dict[str, str]:
    """Break the text following ``Bearer `` into its attributes.

    ``name="value"`` tokens map name to value.  Anything else (including
    unquoted ``name=value``) is kept whole as a key with an empty value.
    Later duplicates overwrite earlier ones.
    """
    params: dict[str, str] = {}
    for match in _TOKEN_RE.finditer(raw):
        name, value = match.group(1), match.group(2)
        if name is None:
            params[match.group(0)] = ""
        else:
            params[name] = value
    return params


@dataclass(frozen=True)
class Challenge:
    """The attributes of a ``WWW-Authenticate: Bearer ...`` header we use.

    Nothing checks that ``realm`` is present or sensible; that surfaces
    when the token URL is built from it.
    """

    realm: str
    service: str = ""
    scope: str = ""

    @classmethod
    def from_header(cls, header: str | None, url: str | None = None) -> Self:
        """Parse a ``WWW-Authenticate`` value from the response to ``url``.

        Raises
        ------
        NoChallengeError
            The header is absent or is not a ``Bearer`` challenge.
        """
        if not header or not header.startswith(BEARER_PREFIX):
            suffix = f" in response from {url}" if url else ""
            raise NoChallengeError(
                f"No bearer WWW-Authenticate header{suffix}", url
            )
        params = parse_challenge_params(header[len(BEARER_PREFIX) :])
        return cls(
            realm=params.get("realm", ""),
            service=params.get("service", ""),
            scope=params.get("scope", ""),
        )
