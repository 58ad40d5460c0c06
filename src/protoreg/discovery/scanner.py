"""Directory scanner for discovering schema files and their imports."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from protoreg.discovery.types import ScanResult, SchemaFile
from protoreg.errors import ScanError
from protoreg.identity import SCHEMA_SUFFIX, artifact_id_for

logger = logging.getLogger(__name__)

__all__ = ["IMPORT_PATTERN", "parse_imports", "scan_schema_files"]

# Matches 'import "path/to/file.proto";' once the line is stripped.
IMPORT_PATTERN = re.compile(r'^import\s+"([^"]+)";')


def parse_imports(content: str) -> list[str]:
    """Return the import-keys declared in a schema file, in file order."""
    imports: list[str] = []
    # Lines end at "\n" only; other Unicode line breaks stay inside the line.
    for line in content.split("\n"):
        match = IMPORT_PATTERN.match(line.rstrip("\r").strip())
        if match:
            imports.append(match.group(1))
    return imports


def scan_schema_files(root: str | Path, extension: str = SCHEMA_SUFFIX) -> ScanResult:
    """Recursively scan ``root`` for schema files and parse their imports.

    Import-keys are paths relative to ``root`` with ``/`` separators, the
    same form used inside import statements.

    Raises:
        ScanError: If the tree cannot be walked, a file cannot be read, or
            two files would map to the same artifact ID. Nothing is returned
            on failure.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise ScanError(path=str(root), reason="not a directory")

    result = ScanResult(root=root)
    seen_ids: dict[str, str] = {}

    def _scan_dir(dir_path: Path) -> None:
        try:
            entries = sorted(os.scandir(dir_path), key=lambda e: e.name)
        except OSError as e:
            raise ScanError(path=str(dir_path), reason=str(e), cause=e) from e

        for entry in entries:
            entry_path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file()
            except OSError as e:
                raise ScanError(path=str(entry_path), reason=str(e), cause=e) from e

            if is_dir:
                _scan_dir(entry_path)
                continue
            if not is_file or not entry.name.endswith(extension):
                continue

            import_key = entry_path.relative_to(root).as_posix()
            artifact_id = artifact_id_for(import_key, suffix=extension)
            if artifact_id in seen_ids:
                raise ScanError(
                    path=str(entry_path),
                    reason=f"artifact ID '{artifact_id}' already derived from '{seen_ids[artifact_id]}'",
                )
            seen_ids[artifact_id] = import_key

            try:
                with open(entry_path, encoding="utf-8") as fh:
                    content = fh.read()
            except (OSError, UnicodeDecodeError) as e:
                raise ScanError(path=str(entry_path), reason=str(e), cause=e) from e

            imports = parse_imports(content)
            logger.debug("Discovered %s (%d imports)", import_key, len(imports))

            result.files.append(
                SchemaFile(
                    path=entry_path,
                    import_key=import_key,
                    content=content,
                    imports=tuple(imports),
                )
            )
            result.import_to_path[import_key] = entry_path
            result.path_to_imports[entry_path] = imports

    _scan_dir(root)
    logger.info("Scanned %s: %d schema files", root, len(result.files))
    return result
