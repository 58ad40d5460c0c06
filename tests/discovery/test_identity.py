"""Tests for artifact ID derivation across a scanned tree."""

from __future__ import annotations

from pathlib import Path

from protoreg.discovery.scanner import scan_schema_files
from protoreg.identity import artifact_id_for


class TestIdsOverScan:
    def test_injective_within_scan(self, sample_tree: Path) -> None:
        """Distinct import-keys in one scan never share an artifact ID."""
        keys = list(scan_schema_files(sample_tree).import_to_path)
        ids = [artifact_id_for(k) for k in keys]
        assert len(set(ids)) == len(keys)

    def test_stable_across_scans(self, sample_tree: Path) -> None:
        """Repeated scans derive the same IDs."""
        first = {artifact_id_for(k) for k in scan_schema_files(sample_tree).import_to_path}
        second = {artifact_id_for(k) for k in scan_schema_files(sample_tree).import_to_path}
        assert first == second

    def test_import_string_and_file_agree(self, sample_tree: Path) -> None:
        """An import string and the file it names derive the same ID."""
        scan = scan_schema_files(sample_tree)
        order_path = scan.import_to_path["orders/order.proto"]
        own_key = next(k for k, p in scan.import_to_path.items() if p == order_path)
        assert artifact_id_for(own_key) == artifact_id_for("orders/order.proto") == "orders-order"
