"""Registration order via depth-first post-order traversal."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from protoreg.discovery.types import DependencyGraph
from protoreg.errors import CircularDependencyError

logger = logging.getLogger(__name__)

__all__ = ["resolve_registration_order"]


def resolve_registration_order(graph: DependencyGraph, strict: bool = False) -> list[Path]:
    """Order scanned files so every local import precedes its importer.

    Start points are taken in lexical order of import-key, which makes the
    result reproducible. A file is marked visited before its imports are
    walked, so a cycle cannot loop forever: the edge that closes it is
    skipped and logged. The walk keeps an explicit stack of frames, so long
    import chains are not bounded by the interpreter recursion limit.

    Args:
        graph: The dependency graph of one scan.
        strict: Raise on the first import cycle instead of breaking it.

    Returns:
        Every scanned file exactly once, dependencies first.

    Raises:
        CircularDependencyError: If ``strict`` is set and a cycle exists.
    """
    visited: set[Path] = set()
    on_path: list[Path] = []
    on_path_set: set[Path] = set()
    order: list[Path] = []

    for import_key in sorted(graph.import_key_to_path):
        start = graph.import_key_to_path[import_key]
        if start in visited:
            continue
        visited.add(start)
        on_path.append(start)
        on_path_set.add(start)
        stack: list[tuple[Path, Iterator[str]]] = [(start, iter(graph.local_imports(start)))]

        while stack:
            path, pending = stack[-1]
            for imp in pending:
                target = graph.import_key_to_path[imp]
                if target in on_path_set:
                    cycle = on_path[on_path.index(target):] + [target]
                    cycle_keys = [graph.import_key_for(p) for p in cycle]
                    if strict:
                        raise CircularDependencyError(cycle_path=cycle_keys)
                    logger.warning(
                        "Import cycle %s, skipping edge %s -> %s",
                        " -> ".join(cycle_keys),
                        graph.import_key_for(path),
                        imp,
                    )
                    continue
                if target in visited:
                    continue
                visited.add(target)
                on_path.append(target)
                on_path_set.add(target)
                stack.append((target, iter(graph.local_imports(target))))
                break
            else:
                stack.pop()
                on_path_set.discard(on_path.pop())
                order.append(path)

    return order
