"""Schema registry client, wire models, and the ordered registrar."""

from __future__ import annotations

from protoreg.registry.client import DEFAULT_REGISTRY_URL, ApicurioRegistryClient, RegistryClient
from protoreg.registry.models import (
    ARTIFACT_TYPE,
    CONTENT_TYPE,
    DEFAULT_GROUP_ID,
    FIRST_VERSION,
    ArtifactMetadata,
    ArtifactReference,
    CreateArtifactRequest,
    CreateContentRequest,
    CreateVersionRequest,
    VersionMetadata,
)
from protoreg.registry.registrar import (
    ArtifactRegistrar,
    RegistrationResult,
    RegistrationStatus,
    is_conflict,
    read_file_bytes,
)

__all__ = [
    "ARTIFACT_TYPE",
    "CONTENT_TYPE",
    "DEFAULT_GROUP_ID",
    "DEFAULT_REGISTRY_URL",
    "FIRST_VERSION",
    "ApicurioRegistryClient",
    "ArtifactMetadata",
    "ArtifactReference",
    "ArtifactRegistrar",
    "CreateArtifactRequest",
    "CreateContentRequest",
    "CreateVersionRequest",
    "RegistrationResult",
    "RegistrationStatus",
    "RegistryClient",
    "VersionMetadata",
    "is_conflict",
    "read_file_bytes",
]
