"""Client for reading and writing manifests in a Docker registry."""

from contextlib import closing

import httpx
import structlog
from pydantic import ValidationError
from structlog.stdlib import BoundLogger

from ..config import CredentialStore
from ..exceptions import (
    DecodeError,
    RegistryError,
    TransportError,
    UnexpectedStatusError,
)
from ..models.manifest import Manifest
from ..models.media_type import MediaType
from .auth import AuthNegotiator
from .transport import (
    SUCCESS_CODES,
    ManifestRequest,
    Transport,
    parse_absolute_url,
    send_request,
)


class ManifestClient:
    """Get and put v2 manifests, negotiating authentication as needed.

    Each call starts from scratch: basic credentials for the registry host
    (if we have any), then, on a 401, exactly one bearer token exchange and
    one retry.  Nothing is cached between calls.

    Note that this is synchronous.  The whole negotiation for one manifest
    is a strict sequence of at most three requests, so there is nothing to
    overlap within a call.

    Parameters
    ----------
    transport
        Sends requests to the registry and to its token service.
    credentials
        Host to basic-auth header value.
    logger
        Logger to use for messages.
    """

    def __init__(
        self,
        transport: Transport,
        credentials: CredentialStore | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._transport = transport
        self._logger = logger or structlog.get_logger(__name__)
        self._negotiator = AuthNegotiator(
            transport, credentials or {}, logger=self._logger
        )

    def get_manifest(self, url: str) -> Manifest:
        """Fetch and decode the manifest at ``url``.

        Raises
        ------
        RegistryError
            Any failure; see `~manifest_relay.exceptions`.
        """
        try:
            request = ManifestRequest(
                method="GET",
                url=self._parse_url(url),
                headers={"Accept": MediaType.MANIFEST_V2.value},
            )
            response = self._authenticated_request(request)
            with closing(response):
                manifest = self._decode_manifest(response, url)
        except RegistryError as e:
            self._logger.error(
                "Failed to GET v2 manifest", url=url, error=str(e)
            )
            raise
        self._logger.debug(
            f"Read v2 manifest with {len(manifest.layers)} layers", url=url
        )
        return manifest

    def put_manifest(self, url: str, manifest: Manifest) -> None:
        """Store ``manifest`` at ``url`` (normally a tag reference).

        Raises
        ------
        RegistryError
            Any failure; see `~manifest_relay.exceptions`.
        """
        try:
            request = ManifestRequest(
                method="PUT",
                url=self._parse_url(url),
                headers={"Content-Type": MediaType.MANIFEST_V2.value},
                body=manifest.to_json(),
            )
            response = self._authenticated_request(request)
            response.close()
        except RegistryError as e:
            self._logger.error(
                "Failed to PUT v2 manifest", url=url, error=str(e)
            )
            raise
        self._logger.info(f"Stored v2 manifest at {url}")

    def _parse_url(self, url: str) -> httpx.URL:
        try:
            return parse_absolute_url(url)
        except ValueError as e:
            raise TransportError(str(e), url) from e

    def _decode_manifest(
        self, response: httpx.Response, url: str
    ) -> Manifest:
        try:
            return Manifest.model_validate_json(response.read())
        except ValidationError as e:
            raise DecodeError(
                f"Could not decode manifest from {url}: {e}", url
            ) from e

    def _authenticated_request(
        self, request: ManifestRequest
    ) -> httpx.Response:
        """Send ``request``, escalating from basic to bearer auth on a 401.

        On success the final response is returned open, and the caller must
        close it.  Every other response is closed here.
        """
        url = str(request.url)
        basic_auth = self._negotiator.build_basic_auth(request.host)
        response = send_request(self._transport, request.build(basic_auth))
        if response.status_code in SUCCESS_CODES:
            return response
        with closing(response):
            if response.status_code != 401:
                raise UnexpectedStatusError(
                    response.status_code, url, request.method
                )
            self._logger.debug(
                f"{request.method} {url} challenged; escalating"
            )
            bearer_auth = self._negotiator.exchange_for_token(
                response, basic_auth
            )
        response = send_request(self._transport, request.build(bearer_auth))
        if response.status_code not in SUCCESS_CODES:
            response.close()
            raise UnexpectedStatusError(
                response.status_code, url, request.method, bearer=True
            )
        return response
