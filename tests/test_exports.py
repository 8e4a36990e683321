"""Tests for the public package surface and source hygiene."""

import ast
from pathlib import Path

import pytest

import db_snapshot

SRC_DIR = Path(__file__).parent.parent / "src" / "db_snapshot"


class TestPublicApi:
    """Top-level exports resolve to real objects."""

    def test_version(self) -> None:
        assert db_snapshot.__version__ == "0.1.0"

    @pytest.mark.parametrize("name", db_snapshot.__all__)
    def test_export_resolves(self, name: str) -> None:
        assert getattr(db_snapshot, name) is not None

    def test_engine_exposes_two_operations(self) -> None:
        engine_cls = db_snapshot.DatabaseSnapshot
        assert callable(engine_cls.init)
        assert callable(engine_cls.restore_data)

    def test_errors_share_base(self) -> None:
        for error in (
            db_snapshot.CatalogQueryError,
            db_snapshot.SnapshotError,
            db_snapshot.RestoreError,
            db_snapshot.UnsupportedDialectError,
        ):
            assert issubclass(error, db_snapshot.DatabaseSnapshotError)


class TestSourceHygiene:
    """Library modules leave output to logging."""

    @pytest.mark.parametrize(
        "path", sorted(SRC_DIR.rglob("*.py")), ids=lambda p: str(p.relative_to(SRC_DIR))
    )
    def test_no_print_calls(self, path: Path) -> None:
        tree = ast.parse(path.read_text())
        for node in ast.walk(tree):
            if isinstance(node, ast.Call) and isinstance(node.func, ast.Name):
                assert node.func.id != "print", f"print() in {path.name}:{node.lineno}"
