"""Error hierarchy for the protoreg pipeline."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "PipelineError",
    "ConfigNotFoundError",
    "ConfigError",
    "ScanError",
    "CircularDependencyError",
    "RegistryRequestError",
    "RegistryNotReadyError",
    "RegistrationError",
    "VerificationError",
    "PipelineTimeoutError",
    "ErrorCodes",
]


class PipelineError(Exception):
    """Base error for all protoreg errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(PipelineError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(PipelineError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class ScanError(PipelineError):
    """Raised when the schema tree cannot be walked or a file cannot be read."""

    def __init__(self, path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="SCAN_ERROR",
            message=f"Failed to scan {path}: {reason}",
            details={"path": path, "reason": reason},
            **kwargs,
        )

    @property
    def path(self) -> str:
        """The file or directory that could not be scanned."""
        return self.details["path"]


class CircularDependencyError(PipelineError):
    """Raised when strict ordering finds an import cycle."""

    def __init__(self, cycle_path: list[str], **kwargs: Any) -> None:
        super().__init__(
            code="CIRCULAR_DEPENDENCY",
            message=f"Circular import detected: {' -> '.join(cycle_path)}",
            details={"cycle_path": cycle_path},
            **kwargs,
        )

    @property
    def cycle_path(self) -> list[str]:
        """Import-keys forming the cycle, first key repeated at the end."""
        return self.details["cycle_path"]


class RegistryRequestError(PipelineError):
    """Raised by registry clients when a request fails.

    ``status_code`` is ``None`` for transport failures where no response
    was received.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="REGISTRY_REQUEST_ERROR",
            message=message,
            details={"status_code": status_code, "url": url},
            **kwargs,
        )

    @property
    def status_code(self) -> int | None:
        """HTTP status returned by the registry, if any."""
        return self.details["status_code"]

    @property
    def is_conflict(self) -> bool:
        """True when the registry reported that the artifact already exists."""
        return self.status_code == 409


class RegistryNotReadyError(PipelineError):
    """Raised when the registry health endpoint never reports ready."""

    def __init__(self, health_url: str, attempts: int, **kwargs: Any) -> None:
        super().__init__(
            code="REGISTRY_NOT_READY",
            message=f"Registry at {health_url} not ready after {attempts} attempts",
            details={"health_url": health_url, "attempts": attempts},
            **kwargs,
        )


class RegistrationError(PipelineError):
    """Raised when an artifact cannot be registered."""

    def __init__(self, artifact_id: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="REGISTRATION_ERROR",
            message=f"Failed to register {artifact_id}: {reason}",
            details={"artifact_id": artifact_id, "reason": reason},
            **kwargs,
        )

    @property
    def artifact_id(self) -> str:
        """The artifact that failed to register."""
        return self.details["artifact_id"]


class VerificationError(PipelineError):
    """Raised when a registered artifact never becomes visible."""

    def __init__(self, artifact_id: str, retries: int, **kwargs: Any) -> None:
        super().__init__(
            code="VERIFICATION_ERROR",
            message=f"Failed to verify registration of {artifact_id} after {retries} attempts",
            details={"artifact_id": artifact_id, "retries": retries},
            **kwargs,
        )

    @property
    def artifact_id(self) -> str:
        """The artifact that could not be verified."""
        return self.details["artifact_id"]

    @property
    def retries(self) -> int:
        """Number of verification attempts made."""
        return self.details["retries"]


class PipelineTimeoutError(PipelineError):
    """Raised when the run deadline passes between files or retry attempts."""

    def __init__(self, artifact_id: str | None = None, **kwargs: Any) -> None:
        where = f" while processing {artifact_id}" if artifact_id else ""
        super().__init__(
            code="PIPELINE_TIMEOUT",
            message=f"Pipeline deadline exceeded{where}",
            details={"artifact_id": artifact_id},
            **kwargs,
        )


class ErrorCodes:
    """All pipeline error codes as constants.

    Example:
        if error.code == ErrorCodes.VERIFICATION_ERROR:
            rerun_later()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    SCAN_ERROR = "SCAN_ERROR"
    CIRCULAR_DEPENDENCY = "CIRCULAR_DEPENDENCY"
    REGISTRY_REQUEST_ERROR = "REGISTRY_REQUEST_ERROR"
    REGISTRY_NOT_READY = "REGISTRY_NOT_READY"
    REGISTRATION_ERROR = "REGISTRATION_ERROR"
    VERIFICATION_ERROR = "VERIFICATION_ERROR"
    PIPELINE_TIMEOUT = "PIPELINE_TIMEOUT"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
