"""Test building components from configuration."""

from pathlib import Path

import httpx

from manifest_relay.config import ClientConfig
from manifest_relay.factory import Factory
from manifest_relay.storage.mock import ScriptedTransport


def test_credentials_loaded(test_config: Path) -> None:
    cfg = ClientConfig.from_file(test_config)
    with Factory.standalone(cfg) as factory:
        assert factory.credentials == {
            "registry.example.com": "Basic ZmJvb3RoOmh1bnRlcjI=",
            "localhost:5000": "Basic ZmJvb3RoOmh1bnRlcjI=",
        }


def test_no_docker_config() -> None:
    with Factory.standalone(ClientConfig()) as factory:
        assert factory.credentials == {}


def test_client_requests(
    test_config: Path, manifest_url: str, manifest_json: bytes
) -> None:
    """Requests carry the configured User-Agent and stored credentials."""
    cfg = ClientConfig.from_file(test_config)
    transport = ScriptedTransport(httpx.Response(200, content=manifest_json))
    with Factory.standalone(cfg, transport=transport) as factory:
        factory.create_manifest_client().get_manifest(manifest_url)
    (req,) = transport.requests
    assert req.headers["User-Agent"] == "manifest-relay-tests"
    assert req.headers["Authorization"] == "Basic ZmJvb3RoOmh1bnRlcjI="
    assert req.extensions["timeout"]["read"] == 30
