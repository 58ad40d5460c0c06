"""Dependency graph construction from scan results."""

from __future__ import annotations

from pathlib import Path

from protoreg.discovery.types import DependencyGraph, ScanResult

__all__ = ["build_dependency_graph", "graph_from_scan"]


def build_dependency_graph(
    import_to_path: dict[str, Path],
    path_to_imports: dict[Path, list[str]],
) -> DependencyGraph:
    """Build a DependencyGraph from the scanner's two maps.

    Performs no I/O and no validation. Imports that do not resolve to a
    scanned file are kept as declared; consumers treat them as external.
    """
    imports = {path: list(path_to_imports.get(path, [])) for path in import_to_path.values()}
    for path, keys in path_to_imports.items():
        imports.setdefault(path, list(keys))
    return DependencyGraph(
        import_key_to_path=dict(import_to_path),
        path_to_imports=imports,
    )


def graph_from_scan(scan: ScanResult) -> DependencyGraph:
    """Shorthand for building the graph straight from a ScanResult."""
    return build_dependency_graph(scan.import_to_path, scan.path_to_imports)
