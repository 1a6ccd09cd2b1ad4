"""Tests that the Alembic revisions build the schema the models expect."""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from los.db.base import Base
from los.models import domain  # noqa: F401

ALEMBIC_INI = Path(__file__).resolve().parents[1] / "alembic.ini"


def _alembic_config(db_path: Path) -> Config:
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{db_path}")
    return config


def test_upgrade_creates_model_tables_and_downgrade_removes_them(tmp_path):
    db_path = tmp_path / "migrated.db"
    config = _alembic_config(db_path)

    command.upgrade(config, "head")

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        inspector = inspect(engine)
        assert {"agents", "loans"} <= set(inspector.get_table_names())
        for table in Base.metadata.sorted_tables:
            migrated = {column["name"] for column in inspector.get_columns(table.name)}
            assert migrated == {column.name for column in table.columns}

        loan_indexes = {index["name"]: index for index in inspector.get_indexes("loans")}
        assert loan_indexes["ix_loans_loan_id"]["unique"]
        assert "ix_loans_status" in loan_indexes
        assert {fk["referred_table"] for fk in inspector.get_foreign_keys("loans")} == {"agents"}
    finally:
        engine.dispose()

    command.downgrade(config, "base")

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()
