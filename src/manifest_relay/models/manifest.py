"""Model for a Docker image manifest, version 2, schema 2.

https://distribution.github.io/distribution/spec/manifest-v2-2/

The client does not interpret manifests.  These models exist so a manifest
can be handed around as a typed object and written back out unchanged, so
fields we do not know about are retained rather than dropped.
"""

from typing import Annotated, Any

from pydantic import ConfigDict, Field
from safir.pydantic import CamelCaseModel

from .media_type import MediaType


class Descriptor(CamelCaseModel):
    """Reference to a blob (image config or layer) by digest."""

    model_config = ConfigDict(extra="allow")

    media_type: Annotated[
        str,
        Field(
            title="Media type",
            description="MIME type of the referenced object.",
            examples=[MediaType.LAYER.value],
        ),
    ]

    size: Annotated[
        int,
        Field(
            title="Size",
            description="Size in bytes of the referenced object.",
            ge=0,
        ),
    ]

    digest: Annotated[
        str,
        Field(
            title="Digest",
            description="Content digest of the referenced object.",
            examples=[
                "sha256:e692418e4cbaf90ca69d05a66403747b"
                "aa33ee08806650b51fab815ad7fc331f"
            ],
        ),
    ]

    urls: Annotated[
        list[str] | None,
        Field(
            title="URLs",
            description="Alternate locations for foreign layers.",
        ),
    ] = None

    annotations: Annotated[
        dict[str, str] | None,
        Field(title="Annotations", description="Arbitrary metadata."),
    ] = None

    platform: Annotated[
        dict[str, Any] | None,
        Field(
            title="Platform",
            description="Platform requirements, for manifest list entries.",
        ),
    ] = None


class Manifest(CamelCaseModel):
    """Image manifest: one config blob plus an ordered list of layers."""

    model_config = ConfigDict(extra="allow")

    schema_version: Annotated[
        int,
        Field(
            title="Schema version",
            description="Manifest schema version; always 2 here.",
        ),
    ] = 2

    media_type: Annotated[
        str,
        Field(
            title="Media type",
            description="MIME type of the manifest itself.",
        ),
    ] = MediaType.MANIFEST_V2.value

    config: Annotated[
        Descriptor,
        Field(
            title="Config",
            description="Descriptor for the image configuration blob.",
        ),
    ]

    layers: Annotated[
        list[Descriptor],
        Field(
            title="Layers",
            description="Layer descriptors, base layer first.",
            default_factory=list,
        ),
    ]

    def to_json(self) -> bytes:
        """Serialize with camelCase keys, writing only fields that were set."""
        return self.model_dump_json(by_alias=True, exclude_unset=True).encode()
