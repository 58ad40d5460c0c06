"""End-to-end pipeline: scan, order, and register a schema tree."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from protoreg.config import Config
from protoreg.discovery.graph import graph_from_scan
from protoreg.discovery.ordering import resolve_registration_order
from protoreg.discovery.scanner import scan_schema_files
from protoreg.discovery.types import DependencyGraph
from protoreg.registry.client import RegistryClient
from protoreg.registry.registrar import ArtifactRegistrar, RegistrationResult, read_file_bytes

logger = logging.getLogger(__name__)

__all__ = ["PipelineDeps", "plan_registration", "run_pipeline"]


@dataclass
class PipelineDeps:
    """External capabilities the pipeline runs against."""

    client: RegistryClient
    content_loader: Callable[[Path], bytes] = read_file_bytes
    sleep: Callable[[float], None] = time.sleep
    clock: Callable[[], float] = time.monotonic


def plan_registration(root: str | Path, config: Config | None = None) -> tuple[DependencyGraph, list[Path]]:
    """Scan ``root`` and compute the registration order without touching a registry."""
    config = config or Config()
    scan = scan_schema_files(root, extension=config.get("scan.extension"))
    graph = graph_from_scan(scan)
    order = resolve_registration_order(graph, strict=config.get("ordering.strict_cycles", False))
    return graph, order


def run_pipeline(
    root: str | Path,
    deps: PipelineDeps,
    config: Config | None = None,
) -> list[RegistrationResult]:
    """Register every schema file under ``root`` in dependency order.

    Raises:
        ScanError: Before any registry call, if the tree cannot be read.
        CircularDependencyError: If ``ordering.strict_cycles`` is set and a cycle exists.
        RegistrationError: If the registry rejects an artifact for a reason other than a conflict.
        VerificationError: If an artifact never becomes visible.
        PipelineTimeoutError: If ``pipeline.deadline`` seconds pass.
    """
    config = config or Config()
    config.validate()

    started = deps.clock()
    deadline_seconds = config.get("pipeline.deadline")
    deadline = started + deadline_seconds if deadline_seconds else None

    graph, order = plan_registration(root, config)
    logger.info("Registration order: %s", [graph.import_key_for(p) for p in order])

    registrar = ArtifactRegistrar(
        deps.client,
        graph,
        content_loader=deps.content_loader,
        group_id=config.get("registry.group_id"),
        verify_retries=config.get("verify.retries"),
        verify_interval=config.get("verify.interval"),
        verify_version=config.get("verify.check_version", False),
        sleep=deps.sleep,
        clock=deps.clock,
        deadline=deadline,
    )
    return registrar.register_all(order)
