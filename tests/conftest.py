"""Test fixtures for manifest relay."""

from collections.abc import Iterator
from pathlib import Path
from tempfile import TemporaryDirectory

import httpx
import pytest
import yaml

from manifest_relay.models.manifest import Manifest
from manifest_relay.storage.mock import ScriptedTransport
from manifest_relay.storage.registry import ManifestClient

REGISTRY = "registry.example.com"

support_dir = Path(__file__).parent / "support"


@pytest.fixture
def manifest_json() -> bytes:
    """Raw v2 manifest, as a registry would serve it."""
    return (support_dir / "manifest.json").read_bytes()


@pytest.fixture
def manifest(manifest_json: bytes) -> Manifest:
    """Decoded v2 manifest."""
    return Manifest.model_validate_json(manifest_json)


@pytest.fixture
def transport() -> ScriptedTransport:
    """Scripted network; tests add responses to it."""
    return ScriptedTransport()


@pytest.fixture
def http_client(transport: ScriptedTransport) -> Iterator[httpx.Client]:
    """HTTP client that talks only to the scripted network."""
    with httpx.Client(transport=transport) as client:
        yield client


@pytest.fixture
def credentials() -> dict[str, str]:
    """Credential store with an entry for the test registry."""
    return {REGISTRY: "Basic ZmJvb3RoOmh1bnRlcjI="}


@pytest.fixture
def manifest_client(
    http_client: httpx.Client, credentials: dict[str, str]
) -> ManifestClient:
    """Manifest client holding basic credentials for the test registry."""
    return ManifestClient(http_client, credentials)


@pytest.fixture
def anonymous_client(http_client: httpx.Client) -> ManifestClient:
    """Manifest client with no credentials at all."""
    return ManifestClient(http_client)


@pytest.fixture
def test_config() -> Iterator[Path]:
    """YAML client configuration pointing at the support Docker config."""
    with TemporaryDirectory() as td:
        new_config = Path(td) / "config.yaml"
        config = yaml.safe_load((support_dir / "config.yaml").read_text())
        config["dockerConfig"] = str(support_dir / "docker-config.json")
        new_config.write_text(yaml.dump(config))

        yield new_config


@pytest.fixture
def manifest_url() -> str:
    """Manifest URL on the test registry."""
    return f"https://{REGISTRY}/v2/lsst-sqre/sciplat-lab/manifests/w_2024_01"


@pytest.fixture
def challenge() -> str:
    """Bearer challenge naming the test token service."""
    return (
        'Bearer realm="https://auth.example.com/token",'
        'service="registry.example.com",'
        'scope="repository:lsst-sqre/sciplat-lab:pull"'
    )


@pytest.fixture
def challenge_401(challenge: str) -> httpx.Response:
    """Registry refusal carrying the bearer challenge."""
    return httpx.Response(401, headers={"WWW-Authenticate": challenge})


@pytest.fixture
def token_200() -> httpx.Response:
    """Token service answer with token ``abc``."""
    return httpx.Response(200, json={"token": "abc"})
