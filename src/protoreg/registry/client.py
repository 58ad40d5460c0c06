"""Registry client protocol and an Apicurio v3 REST implementation."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Protocol
from urllib.parse import quote

import requests

from protoreg.errors import RegistryNotReadyError, RegistryRequestError
from protoreg.registry.models import (
    ArtifactMetadata,
    CreateArtifactRequest,
    VersionMetadata,
)

logger = logging.getLogger(__name__)

__all__ = ["RegistryClient", "ApicurioRegistryClient", "DEFAULT_REGISTRY_URL"]

DEFAULT_REGISTRY_URL = "http://localhost:8001/apis/registry/v3"


class RegistryClient(Protocol):
    """Capabilities the registrar needs from a schema registry."""

    def create_artifact(self, group_id: str, request: CreateArtifactRequest) -> ArtifactMetadata: ...

    def get_artifact_metadata(self, group_id: str, artifact_id: str) -> ArtifactMetadata: ...

    def get_artifact_version_metadata(self, group_id: str, artifact_id: str, version: str) -> VersionMetadata: ...


class ApicurioRegistryClient:
    """Thin wrapper around the Apicurio Registry v3 REST API.

    Every failure is raised as :class:`RegistryRequestError`; a 409 on create
    surfaces with ``is_conflict`` set.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_URL,
        *,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def _artifacts_url(self, group_id: str) -> str:
        return f"{self._base_url}/groups/{quote(group_id, safe='')}/artifacts"

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise RegistryRequestError(message=f"{method} {url} failed: {e}", url=url, cause=e) from e

        if response.status_code >= 400:
            raise RegistryRequestError(
                message=f"{method} {url} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
                url=url,
            )
        try:
            return response.json()
        except ValueError as e:
            raise RegistryRequestError(
                message=f"{method} {url} returned a non-JSON body",
                status_code=response.status_code,
                url=url,
                cause=e,
            ) from e

    def create_artifact(self, group_id: str, request: CreateArtifactRequest) -> ArtifactMetadata:
        """Create an artifact together with its first version."""
        data = self._request("POST", self._artifacts_url(group_id), json=request.to_wire())
        # v3 wraps the artifact metadata next to the first version's metadata.
        if isinstance(data, dict) and isinstance(data.get("artifact"), dict):
            data = data["artifact"]
        return ArtifactMetadata.model_validate(data)

    def get_artifact_metadata(self, group_id: str, artifact_id: str) -> ArtifactMetadata:
        url = f"{self._artifacts_url(group_id)}/{quote(artifact_id, safe='')}"
        return ArtifactMetadata.model_validate(self._request("GET", url))

    def get_artifact_version_metadata(self, group_id: str, artifact_id: str, version: str) -> VersionMetadata:
        url = (
            f"{self._artifacts_url(group_id)}/{quote(artifact_id, safe='')}"
            f"/versions/{quote(version, safe='')}"
        )
        return VersionMetadata.model_validate(self._request("GET", url))

    def wait_until_ready(
        self,
        health_url: str,
        retries: int = 30,
        interval: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Poll ``health_url`` until it answers 200.

        Raises:
            RegistryNotReadyError: If the registry is still not ready after ``retries`` attempts.
        """
        for attempt in range(1, retries + 1):
            status: int | str = "N/A"
            error: Exception | None = None
            try:
                response = self._session.get(health_url, timeout=self._timeout)
                status = response.status_code
                if status == 200:
                    logger.info("Registry is ready at %s", health_url)
                    return
            except requests.RequestException as e:
                error = e
            logger.info(
                "Attempt %d/%d: registry not ready (status %s, error %s)",
                attempt,
                retries,
                status,
                error,
            )
            if attempt < retries:
                sleep(interval)
        raise RegistryNotReadyError(health_url=health_url, attempts=retries)
