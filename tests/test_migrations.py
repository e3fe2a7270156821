from pathlib import Path

from alembic import command
from alembic.autogenerate import compare_metadata
from alembic.config import Config
from alembic.migration import MigrationContext
from sqlalchemy import create_engine, inspect

from laundry_api.database import Base
from laundry_api import models  # noqa: F401

ROOT = Path(__file__).resolve().parent.parent


def alembic_config(database_url: str) -> Config:
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    return cfg


def test_upgrade_head_matches_models(tmp_path, monkeypatch):
    # Migrations must not need the token signing secret
    monkeypatch.delenv("JWT_SECRET", raising=False)
    url = f"sqlite:///{tmp_path}/laundry.db"

    command.upgrade(alembic_config(url), "head")

    engine = create_engine(url)
    try:
        with engine.connect() as conn:
            context = MigrationContext.configure(conn, opts={"compare_type": False})
            diff = [d for d in compare_metadata(context, Base.metadata) if "alembic_version" not in repr(d)]
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()

    assert diff == []
    assert {"users", "bookings"} <= tables


def test_downgrade_removes_tables(tmp_path):
    url = f"sqlite:///{tmp_path}/laundry.db"
    cfg = alembic_config(url)

    command.upgrade(cfg, "head")
    command.downgrade(cfg, "base")

    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()

    assert not {"users", "bookings"} & tables
