"""Component factory."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import closing, contextmanager
from typing import Self

import httpx
import structlog
from structlog.stdlib import BoundLogger

from .config import ClientConfig, CredentialStore, DockerConfig
from .services.relay import ManifestRelay
from .storage.registry import ManifestClient


class Factory:
    """Build manifest relay components.

    Parameters
    ----------
    config
        Client configuration.
    transport
        httpx transport to use instead of the network.  Intended for the
        test suite.
    logger
        Logger to use for messages.
    """

    @classmethod
    @contextmanager
    def standalone(
        cls,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> Iterator[Self]:
        """Context manager for manifest relay components.

        Parameters
        ----------
        config
            Client configuration.
        transport
            Optional replacement httpx transport.

        Yields
        ------
        Factory
            Newly-created factory.  Its HTTP client is closed on exit.
        """
        factory = cls(config, transport=transport)
        with closing(factory):
            yield factory

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        log_level = logging.DEBUG if config.debug else logging.INFO
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(log_level)
        )
        self._logger = logger or structlog.get_logger(__name__)
        self._config = config
        self._credentials = self._load_credentials()
        # send() does not apply client defaults to requests built elsewhere,
        # so a request hook supplies the timeout and User-Agent.
        self._http_client = httpx.Client(
            timeout=config.timeout,
            transport=transport,
            event_hooks={"request": [self._prepare_request]},
        )

    def _prepare_request(self, request: httpx.Request) -> None:
        request.headers["User-Agent"] = self._config.user_agent
        request.extensions.setdefault(
            "timeout", httpx.Timeout(self._config.timeout).as_dict()
        )

    def _load_credentials(self) -> CredentialStore:
        if self._config.docker_config is None:
            self._logger.debug("No Docker config; requests start anonymous")
            return {}
        path = self._config.docker_config.expanduser()
        creds = DockerConfig.from_file(path).credentials()
        self._logger.debug(
            f"Loaded credentials for {len(creds)} registries from {path}"
        )
        return creds

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    def create_manifest_client(self) -> ManifestClient:
        return ManifestClient(
            self._http_client, self._credentials, logger=self._logger
        )

    def create_relay(self) -> ManifestRelay:
        return ManifestRelay(
            self.create_manifest_client(), logger=self._logger
        )

    def close(self) -> None:
        self._http_client.close()
