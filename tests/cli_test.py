"""Test the command-line interface."""

import json
from pathlib import Path

import httpx
import pytest

from manifest_relay.cli import _load_config, _parse_args, _run, main
from manifest_relay.config import ClientConfig
from manifest_relay.factory import Factory
from manifest_relay.models.manifest import Manifest
from manifest_relay.storage.mock import ScriptedTransport


def test_parse_args() -> None:
    args = _parse_args(["-d", "get", "https://r/v2/x/manifests/y"])
    assert args.debug
    assert args.command == "get"
    assert args.url == "https://r/v2/x/manifests/y"
    assert args.output is None
    assert args.config_file is None


def test_parse_args_requires_command() -> None:
    with pytest.raises(SystemExit):
        _parse_args([])


def test_load_config_overrides(test_config: Path, tmp_path: Path) -> None:
    other = tmp_path / "config.json"
    args = _parse_args(
        ["-c", str(test_config), "-a", str(other), "copy", "a", "b"]
    )
    cfg = _load_config(args)
    assert cfg.docker_config == other
    assert cfg.user_agent == "manifest-relay-tests"


def test_load_config_default() -> None:
    args = _parse_args(["put", "https://r/v2/x/manifests/y", "f"])
    cfg = _load_config(args)
    assert cfg == ClientConfig()


def test_get_to_file(
    tmp_path: Path, manifest_url: str, manifest_json: bytes
) -> None:
    output = tmp_path / "manifest.json"
    args = _parse_args(["get", manifest_url, "-o", str(output)])
    transport = ScriptedTransport(httpx.Response(200, content=manifest_json))
    with Factory.standalone(ClientConfig(), transport=transport) as factory:
        _run(args, factory)
    assert json.loads(output.read_text()) == json.loads(manifest_json)


def test_get_to_stdout(
    capsys: pytest.CaptureFixture[str],
    manifest_url: str,
    manifest_json: bytes,
    manifest: Manifest,
) -> None:
    args = _parse_args(["get", manifest_url])
    transport = ScriptedTransport(httpx.Response(200, content=manifest_json))
    with Factory.standalone(ClientConfig(), transport=transport) as factory:
        _run(args, factory)
    out = capsys.readouterr().out
    assert Manifest.model_validate_json(out) == manifest


def test_put(tmp_path: Path, manifest_url: str, manifest_json: bytes) -> None:
    manifest_file = tmp_path / "manifest.json"
    manifest_file.write_bytes(manifest_json)
    args = _parse_args(["put", manifest_url, str(manifest_file)])
    transport = ScriptedTransport(httpx.Response(201))
    with Factory.standalone(ClientConfig(), transport=transport) as factory:
        _run(args, factory)
    (req,) = transport.requests
    assert req.method == "PUT"
    assert json.loads(req.content) == json.loads(manifest_json)


def test_copy(manifest_url: str, manifest_json: bytes) -> None:
    destination = manifest_url.replace("w_2024_01", "recommended")
    args = _parse_args(["copy", manifest_url, destination])
    transport = ScriptedTransport(
        httpx.Response(200, content=manifest_json), httpx.Response(201)
    )
    with Factory.standalone(ClientConfig(), transport=transport) as factory:
        _run(args, factory)
    assert [str(r.url) for r in transport.requests] == [
        manifest_url,
        destination,
    ]


def test_main_reports_errors(capsys: pytest.CaptureFixture[str]) -> None:
    """A malformed URL fails before anything touches the network."""
    assert main(["get", "::qwertyhello"]) == 1
    assert "manifest-relay:" in capsys.readouterr().err
