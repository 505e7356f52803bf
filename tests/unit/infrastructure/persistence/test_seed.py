"""
Tests pour le chargement du catalogue de sous-categories predefinies.
"""

from collections import Counter

from sqlmodel import select

from cinetag.infrastructure.persistence.models import SubcategoryModel
from cinetag.infrastructure.persistence.seed import (
    load_predefined_subcategories,
    seed_predefined_subcategories,
)


class TestCatalogFile:
    """Coherence du fichier JSON."""

    def test_catalog_size(self):
        rows = load_predefined_subcategories()
        assert len(rows) == 286
        assert len({row["id"] for row in rows}) == 286

    def test_catalog_values(self):
        for row in load_predefined_subcategories():
            assert 1 <= row["category_id"] <= 9
            assert row["visibility"] in ("visible", "suggested")
            assert row["content_scope"] in ("movie", "tv", "both")
            assert row["name"].strip()

    def test_names_unique_within_category(self):
        """Deux sous-categories d'une meme categorie n'ont jamais le meme nom."""
        counts = Counter(
            (row["category_id"], row["name"].lower()) for row in load_predefined_subcategories()
        )
        assert max(counts.values()) == 1


class TestSeed:
    """Tests pour seed_predefined_subcategories."""

    def test_seed_inserts_catalog(self, session):
        """La fixture session a deja charge le catalogue complet."""
        rows = session.exec(select(SubcategoryModel)).all()
        assert len(rows) == 286
        assert all(row.owner is None for row in rows)

        mood = session.get(SubcategoryModel, 164)
        assert mood.name == "Mood"
        assert mood.category_id == 6
        assert mood.visibility == "visible"

    def test_seed_is_idempotent(self, session):
        assert seed_predefined_subcategories(session) == 0
        assert len(session.exec(select(SubcategoryModel)).all()) == 286

    def test_seed_keeps_promoted_rows(self, session):
        """Une sous-categorie promue n'est pas remise a suggested."""
        noir = session.get(SubcategoryModel, 176)
        assert noir.visibility == "suggested"
        noir.visibility = "visible"
        session.add(noir)
        session.commit()

        seed_predefined_subcategories(session)
        assert session.get(SubcategoryModel, 176).visibility == "visible"

    def test_seed_restores_missing_rows(self, session):
        session.delete(session.get(SubcategoryModel, 1))
        session.commit()

        assert seed_predefined_subcategories(session) == 1
        assert session.get(SubcategoryModel, 1).name == "Directing"
