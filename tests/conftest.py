"""Shared test fixtures: proto trees and an in-memory registry."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from fakes import FakeClock, FakeRegistryClient


# === Fixtures ===


@pytest.fixture
def fake_registry() -> FakeRegistryClient:
    """Empty in-memory registry."""
    return FakeRegistryClient()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def write_proto(tmp_path: Path) -> Callable[..., Path]:
    """Write a .proto file under ``tmp_path/proto`` with the given imports."""
    root = tmp_path / "proto"
    root.mkdir(exist_ok=True)

    def _write(rel_path: str, imports: list[str] | None = None, body: str = "") -> Path:
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = ['syntax = "proto3";', ""]
        lines.extend(f'import "{imp}";' for imp in imports or [])
        lines.append("")
        lines.append(body or f"message {Path(rel_path).stem.title().replace('_', '')} {{}}")
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def proto_root(tmp_path: Path) -> Path:
    """Root directory used by ``write_proto``."""
    root = tmp_path / "proto"
    root.mkdir(exist_ok=True)
    return root


@pytest.fixture
def sample_tree(write_proto: Callable[..., Path], proto_root: Path) -> Path:
    """A small tree with nested packages, a diamond, and an external import.

    common/base.proto      no imports
    common/types.proto     -> common/base.proto
    orders/order.proto     -> common/base.proto, common/types.proto, google/protobuf/timestamp.proto
    orders/event.proto     -> orders/order.proto
    standalone.proto       no imports
    """
    write_proto("common/base.proto")
    write_proto("common/types.proto", ["common/base.proto"])
    write_proto(
        "orders/order.proto",
        ["common/base.proto", "common/types.proto", "google/protobuf/timestamp.proto"],
    )
    write_proto("orders/event.proto", ["orders/order.proto"])
    write_proto("standalone.proto")
    return proto_root
