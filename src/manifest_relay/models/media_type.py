from enum import Enum


class MediaType(Enum):
    """Media types a registry uses to describe manifests and the blobs they
    reference.  Only the Docker v2 schema 2 manifest is read and written by
    the client; the rest are recognized so descriptors can be inspected.
    """

    MANIFEST_V2 = "application/vnd.docker.distribution.manifest.v2+json"
    MANIFEST_LIST_V2 = (
        "application/vnd.docker.distribution.manifest.list.v2+json"
    )
    CONTAINER_CONFIG = "application/vnd.docker.container.image.v1+json"
    LAYER = "application/vnd.docker.image.rootfs.diff.tar.gzip"
    FOREIGN_LAYER = (
        "application/vnd.docker.image.rootfs.foreign.diff.tar.gzip"
    )
    OCI_MANIFEST = "application/vnd.oci.image.manifest.v1+json"
    OCI_INDEX = "application/vnd.oci.image.index.v1+json"
