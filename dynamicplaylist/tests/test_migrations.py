"""The initial migration must describe the same columns as the ORM models."""

from __future__ import annotations

import importlib.util
from pathlib import Path

import sqlalchemy as sa

from dynamicplaylist.db.base import Base

MIGRATION = Path(__file__).resolve().parents[2] / "alembic" / "versions" / "20261019_000001_tags.py"


class _RecordingOp:
    def __init__(self) -> None:
        self.tables: dict[str, dict[str, sa.Column]] = {}

    def create_table(self, name, *elements, **kwargs):
        self.tables[name] = {element.name: element for element in elements if isinstance(element, sa.Column)}

    def create_index(self, *args, **kwargs):
        pass


def _migrated_tables() -> dict[str, dict[str, sa.Column]]:
    spec = importlib.util.spec_from_file_location("tags_migration", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    recorder = _RecordingOp()
    module.op = recorder
    module.upgrade()
    return recorder.tables


def test_migration_matches_model_columns_and_nullability():
    migrated = _migrated_tables()

    assert set(migrated) == set(Base.metadata.tables)
    for table_name, table in Base.metadata.tables.items():
        columns = migrated[table_name]
        assert set(columns) == set(table.columns.keys()), table_name
        for column in table.columns:
            assert columns[column.name].nullable == column.nullable, f"{table_name}.{column.name}"
