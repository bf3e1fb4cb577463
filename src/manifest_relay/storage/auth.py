"""Basic-to-bearer authentication negotiation for Docker registries.

The registry is first asked with whatever basic credentials we hold for its
host (possibly none).  If it answers 401 with a ``Bearer`` challenge, the
challenge names a token service; we present the same basic credentials
there, and the token it issues is used for one more attempt.

https://distribution.github.io/distribution/spec/auth/token/
"""

from contextlib import closing

import httpx
import structlog
from pydantic import ValidationError
from structlog.stdlib import BoundLogger

from ..config import CredentialStore
from ..exceptions import (
    DecodeError,
    MalformedRealmError,
    TokenExchangeStatusError,
)
from ..models.challenge import BEARER_PREFIX, Challenge
from ..models.token import TokenResponse
from .transport import Transport, parse_absolute_url, send_request


def _response_url(response: httpx.Response) -> str | None:
    # Responses built by hand (in tests, say) have no request attached.
    try:
        return str(response.request.url)
    except RuntimeError:
        return None


class AuthNegotiator:
    """Produce ``Authorization`` header values for registry requests.

    Parameters
    ----------
    transport
        Used to send the token exchange request.
    credentials
        Host to basic-auth header value.  Never modified.
    logger
        Logger to use for messages.
    """

    def __init__(
        self,
        transport: Transport,
        credentials: CredentialStore,
        logger: BoundLogger | None = None,
    ) -> None:
        self._transport = transport
        self._credentials = credentials
        self._logger = logger or structlog.get_logger(__name__)

    def build_basic_auth(self, host: str) -> str:
        """Return the stored credential for ``host``, or ``""``."""
        basic = self._credentials.get(host, "")
        if not basic or not basic.strip():
            return ""
        return basic

    def resolve_challenge_url(self, response: httpx.Response) -> httpx.URL:
        """Turn the ``Bearer`` challenge on ``response`` into a token URL.

        ``service`` and ``scope`` are always present as query parameters,
        empty if the challenge omitted them.

        Raises
        ------
        NoChallengeError
            No ``WWW-Authenticate: Bearer ...`` header on the response.
        MalformedRealmError
            The challenge realm is missing or not an absolute URL.
        """
        url = _response_url(response)
        headers = response.headers.get_list("WWW-Authenticate")
        header = next(
            (h for h in headers if h.startswith(BEARER_PREFIX)), None
        )
        challenge = Challenge.from_header(header, url)
        try:
            realm = parse_absolute_url(challenge.realm)
        except ValueError as e:
            raise MalformedRealmError(challenge.realm, url) from e
        return realm.copy_with(
            params={"service": challenge.service, "scope": challenge.scope}
        )

    def exchange_for_token(
        self, response: httpx.Response, basic_auth: str
    ) -> str:
        """Answer the challenge on ``response`` and return a bearer header
        value.

        Raises
        ------
        NoChallengeError
            No usable challenge on ``response``.
        MalformedRealmError
            The challenge realm is not an absolute URL.
        TransportError
            The token request could not be sent.
        TokenExchangeStatusError
            The token endpoint answered with anything but 200.
        DecodeError
            The token endpoint's body was not a token JSON object.
        """
        token_url = self.resolve_challenge_url(response)
        headers = {"Accept": "application/json"}
        if basic_auth:
            headers["Authorization"] = basic_auth
        self._logger.debug(
            "Requesting bearer token",
            url=str(token_url),
            with_basic_auth=bool(basic_auth),
        )
        request = httpx.Request("GET", token_url, headers=headers)
        token_response = send_request(self._transport, request)
        with closing(token_response):
            if token_response.status_code != 200:
                raise TokenExchangeStatusError(
                    token_response.status_code, str(token_url)
                )
            try:
                token = TokenResponse.model_validate_json(
                    token_response.read()
                )
            except ValidationError as e:
                raise DecodeError(
                    f"Could not decode token response from {token_url}: {e}",
                    str(token_url),
                ) from e
        if not (token.token or token.access_token):
            self._logger.warning(f"Token endpoint {token_url} sent no token")
        return token.bearer
