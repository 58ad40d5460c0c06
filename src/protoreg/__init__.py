"""protoreg - Dependency-ordered registration of .proto files into a schema registry."""

from __future__ import annotations

# Config
from protoreg.config import Config

# Discovery
from protoreg.discovery import (
    DependencyGraph,
    ScanResult,
    SchemaFile,
    build_dependency_graph,
    graph_from_scan,
    resolve_registration_order,
    scan_schema_files,
)
from protoreg.identity import artifact_id_for

# Registry
from protoreg.registry import (
    ApicurioRegistryClient,
    ArtifactReference,
    ArtifactRegistrar,
    RegistrationResult,
    RegistrationStatus,
    RegistryClient,
)

# Pipeline
from protoreg.pipeline import PipelineDeps, plan_registration, run_pipeline

# Errors
from protoreg.errors import (
    CircularDependencyError,
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    PipelineError,
    PipelineTimeoutError,
    RegistrationError,
    RegistryNotReadyError,
    RegistryRequestError,
    ScanError,
    VerificationError,
)

__version__ = "0.1.0"

__all__ = [
    # Config
    "Config",
    # Discovery
    "DependencyGraph",
    "ScanResult",
    "SchemaFile",
    "artifact_id_for",
    "build_dependency_graph",
    "graph_from_scan",
    "resolve_registration_order",
    "scan_schema_files",
    # Registry
    "ApicurioRegistryClient",
    "ArtifactReference",
    "ArtifactRegistrar",
    "RegistrationResult",
    "RegistrationStatus",
    "RegistryClient",
    # Pipeline
    "PipelineDeps",
    "plan_registration",
    "run_pipeline",
    # Errors
    "ErrorCodes",
    "PipelineError",
    "ConfigError",
    "ConfigNotFoundError",
    "ScanError",
    "CircularDependencyError",
    "RegistryRequestError",
    "RegistryNotReadyError",
    "RegistrationError",
    "VerificationError",
    "PipelineTimeoutError",
]
