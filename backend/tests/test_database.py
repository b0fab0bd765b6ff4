"""Tests for the relational schema"""

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker

from catalog_api import migrate
from catalog_api.config import Settings
from catalog_api.models import AIAnalytics, ItemRecord
from catalog_api.utils.database import build_engine, init_db


@pytest.fixture
def engine():
    return create_engine("sqlite:///:memory:")


def test_init_db_creates_tables(engine):
    init_db(engine)

    inspector = inspect(engine)
    assert set(inspector.get_table_names()) == {"items", "ai_analytics"}
    columns = {column["name"] for column in inspector.get_columns("ai_analytics")}
    assert {"item_id", "action_type", "ai_response", "confidence_score", "created_at"} <= columns


def test_init_db_is_repeatable(engine):
    init_db(engine)
    init_db(engine)

    assert "items" in inspect(engine).get_table_names()


def test_analytics_rows_reference_items(engine):
    """An analytics row hangs off its item and goes with it"""

    init_db(engine)
    session = sessionmaker(bind=engine)()

    record = ItemRecord(id="1f7a9a2e-0000-4000-8000-000000000001", name="Lamp", tags=["light"])
    record.analytics.append(AIAnalytics(action_type="insights", ai_response={"category": "Home"}, confidence_score=0.9))
    session.add(record)
    session.commit()

    assert session.query(AIAnalytics).one().item.name == "Lamp"

    session.delete(record)
    session.commit()

    assert session.query(AIAnalytics).count() == 0
    session.close()


def test_build_engine_creates_sqlite_directory(tmp_path):
    path = tmp_path / "nested" / "catalog.db"

    engine = build_engine(f"sqlite:///{path}")
    init_db(engine)

    assert path.parent.is_dir()
    assert path.exists()


def test_migrate_main(tmp_path, monkeypatch):
    path = tmp_path / "catalog.db"
    monkeypatch.setattr(migrate, "get_settings", lambda: Settings(DATABASE_URL=f"sqlite:///{path}"))

    assert migrate.main() == 0
    assert path.exists()
