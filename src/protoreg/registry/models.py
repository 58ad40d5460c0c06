"""Registry wire models and fixed registration constants."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "DEFAULT_GROUP_ID",
    "FIRST_VERSION",
    "ARTIFACT_TYPE",
    "CONTENT_TYPE",
    "ArtifactReference",
    "CreateContentRequest",
    "CreateVersionRequest",
    "CreateArtifactRequest",
    "ArtifactMetadata",
    "VersionMetadata",
]

DEFAULT_GROUP_ID = "default"
FIRST_VERSION = "1"
ARTIFACT_TYPE = "PROTOBUF"
CONTENT_TYPE = "application/x-protobuffer"


class _RegistryModel(BaseModel):
    """Base for models exchanged with the registry (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        """Serialize with registry field names, dropping unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ArtifactReference(_RegistryModel):
    """Pointer from one artifact version to another artifact version."""

    name: str
    artifact_id: str = Field(alias="artifactId")
    group_id: str = Field(default=DEFAULT_GROUP_ID, alias="groupId")
    version: str = FIRST_VERSION


class CreateContentRequest(_RegistryModel):
    content: str
    content_type: str = Field(default=CONTENT_TYPE, alias="contentType")
    references: list[ArtifactReference] = Field(default_factory=list)


class CreateVersionRequest(_RegistryModel):
    content: CreateContentRequest
    version: str | None = None


class CreateArtifactRequest(_RegistryModel):
    """Body of ``POST /groups/{groupId}/artifacts``."""

    artifact_id: str = Field(alias="artifactId")
    artifact_type: str = Field(default=ARTIFACT_TYPE, alias="artifactType")
    first_version: CreateVersionRequest = Field(alias="firstVersion")


class ArtifactMetadata(_RegistryModel):
    artifact_id: str = Field(alias="artifactId")
    group_id: str | None = Field(default=None, alias="groupId")
    artifact_type: str | None = Field(default=None, alias="artifactType")
    name: str | None = None
    created_on: str | None = Field(default=None, alias="createdOn")


class VersionMetadata(_RegistryModel):
    artifact_id: str = Field(alias="artifactId")
    version: str
    group_id: str | None = Field(default=None, alias="groupId")
    global_id: int | None = Field(default=None, alias="globalId")
    content_id: int | None = Field(default=None, alias="contentId")
    state: str | None = None
