"""Discovery types: SchemaFile, ScanResult, DependencyGraph."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

__all__ = [
    "SchemaFile",
    "ScanResult",
    "DependencyGraph",
]


@dataclass(frozen=True)
class SchemaFile:
    """A discovered schema file and the imports it declares."""

    path: Path
    import_key: str
    content: str
    imports: tuple[str, ...] = ()


@dataclass
class ScanResult:
    """Everything the scanner found under one root."""

    root: Path
    files: list[SchemaFile] = field(default_factory=list)
    import_to_path: dict[str, Path] = field(default_factory=dict)
    path_to_imports: dict[Path, list[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class DependencyGraph:
    """Import-key and path maps for one scan.

    Imports that have no entry in ``import_key_to_path`` are external
    (for example ``google/protobuf/timestamp.proto``) and are skipped for
    ordering and references.
    """

    import_key_to_path: dict[str, Path]
    path_to_imports: dict[Path, list[str]]
    _path_to_import_key: dict[Path, str] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._path_to_import_key.update({p: k for k, p in self.import_key_to_path.items()})

    def import_key_for(self, path: Path) -> str:
        """Return the import-key a scanned file is known by."""
        try:
            return self._path_to_import_key[path]
        except KeyError:
            raise KeyError(f"{path} is not part of this dependency graph") from None

    def resolve(self, import_key: str) -> Path | None:
        """Return the local path for an import-key, or None if it is external."""
        return self.import_key_to_path.get(import_key)

    def local_imports(self, path: Path) -> list[str]:
        """Declared imports of ``path`` that resolve locally, in declaration order."""
        seen: set[str] = set()
        result: list[str] = []
        for imp in self.path_to_imports.get(path, []):
            if imp in self.import_key_to_path and imp not in seen:
                seen.add(imp)
                result.append(imp)
        return result

    def external_imports(self, path: Path) -> list[str]:
        """Declared imports of ``path`` with no local file."""
        return [imp for imp in self.path_to_imports.get(path, []) if imp not in self.import_key_to_path]

    def __len__(self) -> int:
        return len(self.import_key_to_path)
