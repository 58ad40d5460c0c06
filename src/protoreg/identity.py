"""Artifact identifier derivation."""

from __future__ import annotations

import os

__all__ = ["SCHEMA_SUFFIX", "ID_SEPARATOR", "artifact_id_for"]

SCHEMA_SUFFIX = ".proto"
ID_SEPARATOR = "-"


def artifact_id_for(import_key: str, suffix: str = SCHEMA_SUFFIX) -> str:
    """Derive the registry artifact ID for an import-key.

    Strips the schema suffix and replaces every path separator with ``-``,
    so ``common/v1/base.proto`` becomes ``common-v1-base``. The registry
    stores references by this ID, so the mapping must not change.
    """
    if suffix and import_key.endswith(suffix):
        import_key = import_key[: -len(suffix)]
    artifact_id = import_key.replace("/", ID_SEPARATOR)
    if os.sep != "/":
        artifact_id = artifact_id.replace(os.sep, ID_SEPARATOR)
    return artifact_id
