"""
Tests pour TagLibraryView, copie locale jamais rafraichie implicitement.
"""

import pytest

from cinetag.core.value_objects import ContentType
from cinetag.services.tag_library import TagLibraryView


@pytest.fixture
def view(tag_store) -> TagLibraryView:
    return TagLibraryView(tag_store, most_used_limit=2)


class TestTagLibraryView:
    """Tests pour TagLibraryView."""

    def test_lazy_load(self, view, tag_store):
        tag_store.create(6, 164, "Dark")
        assert not view.is_loaded
        assert len(view) == 1
        assert view.is_loaded
        assert view.loaded_at is not None

    def test_snapshot_not_refreshed_implicitly(self, view, tag_store):
        tag_store.create(6, 164, "Dark")
        assert [tag.name for tag in view.tags] == ["Dark"]

        tag_store.create(6, 164, "Eerie")
        assert [tag.name for tag in view.tags] == ["Dark"]

        view.refresh()
        assert [tag.name for tag in view.tags] == ["Dark", "Eerie"]

    def test_invalidate(self, view, tag_store):
        tag_store.create(6, 164, "Dark")
        view.refresh()
        view.invalidate()
        assert not view.is_loaded
        assert view.loaded_at is None
        tag_store.create(6, 164, "Eerie")
        assert len(view) == 2

    def test_filters(self, view, tag_store):
        dark = tag_store.create(6, 164, "Dark", description="Ambiance sombre")
        tag_store.create(6, 163, "Bleak")
        tag_store.create(1, 1, "Auteur")

        assert [tag.name for tag in view.filter("SOMBRE")] == ["Dark"]
        assert len(view.filter("")) == 3
        assert [tag.name for tag in view.by_category(6)] == ["Bleak", "Dark"]
        assert [tag.name for tag in view.by_subcategory(1)] == ["Auteur"]
        assert view.get(dark.id).name == "Dark"
        assert view.get(9999) is None

    def test_most_used(self, view, tag_store, association_store):
        dark = tag_store.create(6, 164, "Dark")
        eerie = tag_store.create(6, 164, "Eerie")
        tag_store.create(6, 164, "Bleak")
        association_store.add(eerie.id, 550, ContentType.MOVIE)
        association_store.add(eerie.id, 77, ContentType.MOVIE)
        association_store.add(dark.id, 550, ContentType.MOVIE)

        assert [tag.name for tag in view.most_used()] == ["Eerie", "Dark"]
        assert [tag.name for tag in view.most_used(limit=1)] == ["Eerie"]
