"""Schema discovery: scanning, dependency graph, and registration order.

Usage::

    from protoreg.discovery import graph_from_scan, resolve_registration_order, scan_schema_files

    scan = scan_schema_files("./proto")
    graph = graph_from_scan(scan)
    order = resolve_registration_order(graph)
"""

from __future__ import annotations

from protoreg.discovery.graph import build_dependency_graph, graph_from_scan
from protoreg.discovery.ordering import resolve_registration_order
from protoreg.discovery.scanner import parse_imports, scan_schema_files
from protoreg.discovery.types import DependencyGraph, ScanResult, SchemaFile

__all__ = [
    "DependencyGraph",
    "ScanResult",
    "SchemaFile",
    "build_dependency_graph",
    "graph_from_scan",
    "parse_imports",
    "resolve_registration_order",
    "scan_schema_files",
]
