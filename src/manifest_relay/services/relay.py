"""Copy manifests from one reference to another."""

import structlog
from structlog.stdlib import BoundLogger

from ..models.manifest import Manifest
from ..storage.registry import ManifestClient


class ManifestRelay:
    """Read a manifest from one reference and store it under another.

    The usual case is retagging within a repository, or promoting an image
    between repositories of the same registry where the blobs are already
    present.  Blobs are never copied; if the destination does not have
    them, the registry rejects the PUT and that error propagates.

    Each side negotiates its own authentication, so source and destination
    may be on different hosts with different credentials.
    """

    def __init__(
        self, client: ManifestClient, logger: BoundLogger | None = None
    ) -> None:
        self._client = client
        self._logger = logger or structlog.get_logger(__name__)

    def copy(self, source_url: str, destination_url: str) -> Manifest:
        """Copy the manifest and return it."""
        manifest = self._client.get_manifest(source_url)
        self._logger.debug(
            f"Relaying manifest for config {manifest.config.digest}",
            source=source_url,
            destination=destination_url,
        )
        self._client.put_manifest(destination_url, manifest)
        self._logger.info(f"Copied {source_url} to {destination_url}")
        return manifest
