"""
Tests pour la configuration de la base de donnees.
"""

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import select

from cinetag.infrastructure.persistence import database
from cinetag.infrastructure.persistence.database import get_engine, init_db, open_session
from cinetag.infrastructure.persistence.models import SubcategoryModel


@pytest.fixture(autouse=True)
def fresh_engines(monkeypatch):
    """Isole le cache des engines pour chaque test."""
    engines = {}
    monkeypatch.setattr(database, "_engines", engines)
    yield engines
    for engine in engines.values():
        engine.dispose()


class TestGetEngine:
    """Tests pour get_engine."""

    def test_engine_cached_per_url(self, tmp_path):
        url = f"sqlite:///{tmp_path}/a.db"
        assert get_engine(url) is get_engine(url)
        assert get_engine(url) is not get_engine(f"sqlite:///{tmp_path}/b.db")

    def test_memory_database_uses_static_pool(self):
        assert isinstance(get_engine("sqlite://").pool, StaticPool)

    def test_parent_directory_created(self, tmp_path):
        target = tmp_path / "nested" / "dir"
        get_engine(f"sqlite:///{target}/cinetag.db")
        assert target.is_dir()


class TestInitDb:
    """Tests pour init_db."""

    def test_creates_tables_and_seeds_catalog(self, tmp_path):
        url = f"sqlite:///{tmp_path}/cinetag.db"
        init_db(url)

        session = open_session(url)
        try:
            rows = session.exec(select(SubcategoryModel)).all()
            assert len(rows) == 286
        finally:
            session.close()

    def test_init_twice_is_harmless(self, tmp_path):
        url = f"sqlite:///{tmp_path}/cinetag.db"
        init_db(url)
        init_db(url)

        session = open_session(url)
        try:
            assert len(session.exec(select(SubcategoryModel)).all()) == 286
        finally:
            session.close()
