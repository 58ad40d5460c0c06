"""Ordered, idempotent, verified registration of schema artifacts."""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from protoreg.discovery.types import DependencyGraph
from protoreg.errors import (
    PipelineTimeoutError,
    RegistrationError,
    RegistryRequestError,
    VerificationError,
)
from protoreg.identity import artifact_id_for
from protoreg.registry.client import RegistryClient
from protoreg.registry.models import (
    ARTIFACT_TYPE,
    CONTENT_TYPE,
    DEFAULT_GROUP_ID,
    FIRST_VERSION,
    ArtifactReference,
    CreateArtifactRequest,
    CreateContentRequest,
    CreateVersionRequest,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ArtifactRegistrar",
    "RegistrationResult",
    "RegistrationStatus",
    "is_conflict",
    "read_file_bytes",
]


class RegistrationStatus(enum.Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of registering one schema file."""

    path: Path
    artifact_id: str
    status: RegistrationStatus
    reason: str | None = None


def read_file_bytes(path: Path) -> bytes:
    return Path(path).read_bytes()


def is_conflict(error: Exception) -> bool:
    """Return True if ``error`` means the artifact is already registered.

    A :class:`RegistryRequestError` is judged by its status code alone; one
    without a status (a transport failure) is never a conflict. Clients other
    than :class:`ApicurioRegistryClient` may raise opaque errors, so only for
    those is the textual status checked as a fallback.
    """
    if isinstance(error, RegistryRequestError):
        return error.is_conflict
    return "409" in str(error)


class ArtifactRegistrar:
    """Registers files in a precomputed order against a schema registry.

    Each artifact is created with references to the local files it imports
    and then polled until its metadata is readable, so no dependent is
    submitted before its dependencies are visible.
    """

    def __init__(
        self,
        client: RegistryClient,
        graph: DependencyGraph,
        *,
        content_loader: Callable[[Path], bytes] = read_file_bytes,
        group_id: str = DEFAULT_GROUP_ID,
        version: str = FIRST_VERSION,
        verify_retries: int = 5,
        verify_interval: float = 1.0,
        verify_version: bool = False,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        deadline: float | None = None,
    ) -> None:
        """Initialize the registrar.

        Args:
            client: Registry capability set.
            graph: Dependency graph the order was computed from.
            content_loader: Reads raw file content by path.
            group_id: Registry group for every artifact and reference.
            version: Version label references point at.
            verify_retries: Metadata polling attempts per artifact.
            verify_interval: Seconds to wait between polling attempts.
            verify_version: Also require the version metadata to be readable.
            sleep: Blocking wait used between attempts.
            clock: Monotonic clock compared against ``deadline``.
            deadline: Absolute ``clock()`` value after which the run stops.
        """
        if verify_retries < 1:
            raise ValueError("verify_retries must be at least 1")
        self._client = client
        self._graph = graph
        self._content_loader = content_loader
        self._group_id = group_id
        self._version = version
        self._verify_retries = verify_retries
        self._verify_interval = verify_interval
        self._verify_version = verify_version
        self._sleep = sleep
        self._clock = clock
        self._deadline = deadline
        self.results: list[RegistrationResult] = []

    def artifact_id(self, path: Path) -> str:
        return artifact_id_for(self._graph.import_key_for(path))

    def build_references(self, path: Path) -> list[ArtifactReference]:
        """References for every local import of ``path``; external imports are left out."""
        return [
            ArtifactReference(
                name=imp,
                artifact_id=artifact_id_for(imp),
                group_id=self._group_id,
                version=self._version,
            )
            for imp in self._graph.local_imports(path)
        ]

    def build_request(self, path: Path, content: str) -> CreateArtifactRequest:
        return CreateArtifactRequest(
            artifact_id=self.artifact_id(path),
            artifact_type=ARTIFACT_TYPE,
            first_version=CreateVersionRequest(
                content=CreateContentRequest(
                    content=content,
                    content_type=CONTENT_TYPE,
                    references=self.build_references(path),
                ),
            ),
        )

    def register_all(self, order: list[Path]) -> list[RegistrationResult]:
        """Register every file in ``order``, stopping at the first fatal error."""
        results = []
        for path in order:
            results.append(self.register_one(path))
        logger.info("Registered %d artifacts", len(results))
        return results

    def register_one(self, path: Path) -> RegistrationResult:
        """Create one artifact (tolerating conflicts) and wait until it is visible.

        Raises:
            RegistrationError: If content cannot be read or the registry rejects the create.
            VerificationError: If the artifact never becomes visible.
            PipelineTimeoutError: If the deadline passes.
        """
        artifact_id = self.artifact_id(path)
        try:
            self._check_deadline(artifact_id)
        except PipelineTimeoutError as e:
            self._record(path, artifact_id, RegistrationStatus.FAILED, e.message)
            raise

        try:
            raw = self._content_loader(path)
            content = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        except (OSError, UnicodeDecodeError) as e:
            self._record(path, artifact_id, RegistrationStatus.FAILED, str(e))
            raise RegistrationError(artifact_id=artifact_id, reason=f"cannot read {path}: {e}", cause=e) from e

        request = self.build_request(path, content)
        logger.debug(
            "Submitting %s with references %s",
            artifact_id,
            [ref.artifact_id for ref in request.first_version.content.references],
        )

        status = RegistrationStatus.CREATED
        try:
            self._client.create_artifact(self._group_id, request)
        except Exception as e:
            if not is_conflict(e):
                self._record(path, artifact_id, RegistrationStatus.FAILED, str(e))
                raise RegistrationError(artifact_id=artifact_id, reason=str(e), cause=e) from e
            status = RegistrationStatus.ALREADY_EXISTS
            logger.info("Already registered: %s", artifact_id)
        else:
            logger.info("Registered: %s", artifact_id)

        try:
            self.wait_until_visible(artifact_id)
        except (VerificationError, PipelineTimeoutError) as e:
            self._record(path, artifact_id, RegistrationStatus.FAILED, e.message)
            raise

        return self._record(path, artifact_id, status)

    def wait_until_visible(self, artifact_id: str) -> None:
        """Poll the registry until ``artifact_id`` can be read back.

        Raises:
            VerificationError: If it is still not readable after the retry budget.
            PipelineTimeoutError: If the deadline passes between attempts.
        """
        last_error: Exception | None = None
        for attempt in range(1, self._verify_retries + 1):
            self._check_deadline(artifact_id)
            try:
                self._client.get_artifact_metadata(self._group_id, artifact_id)
                if self._verify_version:
                    self._client.get_artifact_version_metadata(self._group_id, artifact_id, self._version)
            except Exception as e:
                last_error = e
                logger.warning(
                    "Verification attempt %d/%d for %s failed: %s",
                    attempt,
                    self._verify_retries,
                    artifact_id,
                    e,
                )
                if attempt < self._verify_retries:
                    self._sleep(self._verify_interval)
                continue
            logger.info("Verified registration of: %s", artifact_id)
            return

        raise VerificationError(artifact_id=artifact_id, retries=self._verify_retries, cause=last_error)

    def _check_deadline(self, artifact_id: str) -> None:
        if self._deadline is not None and self._clock() >= self._deadline:
            raise PipelineTimeoutError(artifact_id=artifact_id)

    def _record(
        self,
        path: Path,
        artifact_id: str,
        status: RegistrationStatus,
        reason: str | None = None,
    ) -> RegistrationResult:
        result = RegistrationResult(path=path, artifact_id=artifact_id, status=status, reason=reason)
        self.results.append(result)
        return result
