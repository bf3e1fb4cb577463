"""Configuration for the manifest relay client."""

from __future__ import annotations

import base64
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Self

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from safir.pydantic import CamelCaseModel

# Registry host (host[:port]) to a ready-made Authorization header value.
type CredentialStore = Mapping[str, str]


class RegistryAuth(BaseModel):
    """One entry of the ``auths`` section of a Docker ``config.json``."""

    model_config = ConfigDict(extra="ignore")

    auth: Annotated[
        SecretStr | None,
        Field(
            title="Auth",
            description="Base64-encoded 'username:password'.",
            examples=["ZmJvb3RoOmh1bnRlcjI="],
        ),
    ] = None

    username: Annotated[
        str | None,
        Field(
            title="Username",
            description="Username, if 'auth' is not supplied.",
            examples=["fbooth"],
        ),
    ] = None

    password: Annotated[
        SecretStr | None,
        Field(
            title="Password",
            description="Password or token, if 'auth' is not supplied.",
            examples=["hunter2"],
        ),
    ] = None

    def basic_auth(self) -> str:
        """Return the ``Authorization`` header value, or the empty string
        if this entry carries no usable secret.
        """
        if self.auth and self.auth.get_secret_value():
            return f"Basic {self.auth.get_secret_value()}"
        if self.username and self.password:
            pair = f"{self.username}:{self.password.get_secret_value()}"
            encoded = base64.b64encode(pair.encode()).decode()
            return f"Basic {encoded}"
        return ""


class DockerConfig(BaseModel):
    """The subset of a Docker client ``config.json`` we care about."""

    model_config = ConfigDict(extra="ignore")

    auths: Annotated[
        dict[str, RegistryAuth],
        Field(
            title="Auths",
            description="Credentials keyed by registry host.",
            default_factory=dict,
        ),
    ]

    @classmethod
    def from_file(cls, path: Path) -> Self:
        return cls.model_validate_json(path.read_text())

    def credentials(self) -> dict[str, str]:
        """Build the host-to-credential lookup, skipping unusable entries."""
        creds: dict[str, str] = {}
        for host, entry in self.auths.items():
            basic = entry.basic_auth()
            if basic:
                creds[host] = basic
        return creds


class ClientConfig(CamelCaseModel):
    """Configuration for the registry client and its transport."""

    docker_config: Annotated[
        Path | None,
        Field(
            title="Docker config",
            description=(
                "Docker client config.json to read registry credentials "
                "from.  If not supplied, requests start unauthenticated."
            ),
            examples=[Path("~/.docker/config.json")],
        ),
    ] = None

    timeout: Annotated[
        float,
        Field(
            title="Timeout",
            description="Timeout in seconds for each HTTP request.",
            gt=0,
        ),
    ] = 10.0

    user_agent: Annotated[
        str,
        Field(
            title="User agent",
            description="User-Agent header sent with every request.",
        ),
    ] = "manifest-relay"

    debug: Annotated[
        bool,
        Field(
            title="Debug",
            description="Much more verbose logging.",
        ),
    ] = False

    @classmethod
    def from_file(cls, path: Path) -> Self:
        return cls.model_validate(yaml.safe_load(path.read_text()) or {})
