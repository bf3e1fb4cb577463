"""CLI for Manifest Relay."""

import argparse
import sys
from pathlib import Path

from .config import ClientConfig
from .exceptions import RegistryError
from .factory import Factory
from .models.manifest import Manifest


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Read and write Docker v2 image manifests."
    )
    parser.add_argument(
        "-c",
        "--config-file",
        "--file",
        type=Path,
        help="client config file (YAML)",
        default=None,
    )
    parser.add_argument(
        "-a",
        "--docker-config",
        type=Path,
        help="Docker config.json holding registry credentials",
        default=None,
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
        default=False,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    get = subparsers.add_parser("get", help="Fetch a manifest")
    get.add_argument(
        "url", help="manifest URL (.../v2/<name>/manifests/<ref>)"
    )
    get.add_argument(
        "-o",
        "--output",
        type=Path,
        help="write manifest JSON here instead of standard output",
        default=None,
    )

    put = subparsers.add_parser("put", help="Store a manifest")
    put.add_argument(
        "url", help="manifest URL (.../v2/<name>/manifests/<tag>)"
    )
    put.add_argument("file", type=Path, help="manifest JSON file")

    copy = subparsers.add_parser(
        "copy", help="Store the manifest from one reference under another"
    )
    copy.add_argument("source", help="source manifest URL")
    copy.add_argument("destination", help="destination manifest URL")

    return parser.parse_args(argv)


def _load_config(args: argparse.Namespace) -> ClientConfig:
    if args.config_file:
        cfg = ClientConfig.from_file(args.config_file)
    else:
        cfg = ClientConfig()

    # Override settings in config, if specified here
    if args.docker_config:
        cfg.docker_config = args.docker_config
    if args.debug:
        cfg.debug = True
    return cfg


def _run(args: argparse.Namespace, factory: Factory) -> None:
    match args.command:
        case "get":
            manifest = factory.create_manifest_client().get_manifest(args.url)
            text = manifest.model_dump_json(
                by_alias=True, exclude_unset=True, indent=2
            )
            if args.output:
                args.output.write_text(text + "\n")
            else:
                print(text)
        case "put":
            manifest = Manifest.model_validate_json(args.file.read_text())
            factory.create_manifest_client().put_manifest(args.url, manifest)
        case "copy":
            factory.create_relay().copy(args.source, args.destination)


def main(argv: list[str] | None = None) -> int:
    """Run a manifest relay command; return the process exit status."""
    args = _parse_args(argv)
    cfg = _load_config(args)
    with Factory.standalone(cfg) as factory:
        try:
            _run(args, factory)
        except RegistryError as e:
            print(f"manifest-relay: {e}", file=sys.stderr)
            return 1
    return 0
