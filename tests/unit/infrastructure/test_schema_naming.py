from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.dialects import sqlite
from sqlalchemy.schema import CreateIndex, CreateTable

from src.infrastructure.db.base import Base
from src.infrastructure.db.orm.member import MemberORM  # noqa: F401
from src.infrastructure.db.orm.request import RequestORM  # noqa: F401

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "alembic" / "versions"


def _migration_source() -> str:
    return "\n".join(p.read_text(encoding="utf-8") for p in MIGRATIONS_DIR.glob("*.py"))


@pytest.mark.parametrize(
    "table, constraint",
    [
        ("members", "pk_members"),
        ("members", "uq_members_member_id"),
        ("requests", "pk_requests"),
    ],
)
def test_orm_constraint_names_match_migrations(table, constraint):
    ddl = str(CreateTable(Base.metadata.tables[table]).compile(dialect=sqlite.dialect()))

    assert f"CONSTRAINT {constraint}" in ddl
    assert f"name='{constraint}'" in _migration_source()


def test_orm_index_names_match_migrations():
    source = _migration_source()
    for index in Base.metadata.tables["requests"].indexes:
        ddl = str(CreateIndex(index).compile(dialect=sqlite.dialect()))
        name = ddl.split("INDEX ", 1)[1].split(" ON", 1)[0]
        assert f"'{name}'" in source
