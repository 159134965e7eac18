"""Tests for the versioned database migrator."""

from pathlib import Path

import aiosqlite
import pytest

from stockflow.config import Settings
from stockflow.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    discover_migrations,
    get_applied_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)


class TestMigrationInfo:
    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial_schema.sql"
        migration_file.write_text("SELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "001"
        assert info.name == "initial_schema"
        assert len(info.checksum) == 16

    def test_invalid_filename(self, tmp_path: Path):
        bad = tmp_path / "schema.sql"
        bad.write_text("SELECT 1;")
        with pytest.raises(ValueError):
            MigrationInfo.from_file(bad)

    def test_packaged_migrations_in_order(self):
        versions = [m.version for m in discover_migrations()]
        assert versions == sorted(versions)
        assert versions[:2] == ["001", "002"]


class TestInitializeDatabase:
    async def test_applies_all_then_nothing(self, settings: Settings, tmp_path: Path):
        db_path = tmp_path / "fresh.db"

        first = await initialize_database(db_path)
        second = await initialize_database(db_path)

        assert [r.version for r in first] == [m.version for m in discover_migrations()]
        assert all(r.success for r in first)
        assert second == []
        async with aiosqlite.connect(db_path) as conn:
            applied = await get_applied_migrations(conn)
        assert set(applied) == {m.version for m in discover_migrations()}

    async def test_backup_removed_after_success(self, settings: Settings, tmp_path: Path):
        db_path = tmp_path / "fresh.db"
        await initialize_database(db_path)

        await initialize_database(db_path, create_backup_before=True)

        assert list(tmp_path.glob("fresh.backup_*.db")) == []

    async def test_status_and_integrity(self, settings: Settings, tmp_path: Path):
        db_path = tmp_path / "fresh.db"

        before = await get_migration_status(db_path)
        await initialize_database(db_path)
        after = await get_migration_status(db_path)
        checks = await verify_schema_integrity(db_path)

        assert before["exists"] is False
        assert before["pending_migrations"]
        assert after["pending_migrations"] == []
        assert after["current_version"] == discover_migrations()[-1].version
        assert all(check["status"] == "PASS" for check in checks)
        tables = next(c for c in checks if c["check"] == "required_tables")
        assert tables["missing"] == []
        assert "stock_records" in REQUIRED_TABLES
