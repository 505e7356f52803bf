"""
Tests pour le registre des categories fixes.
"""

import pytest

from cinetag.core.categories import CATEGORIES, CategoryRegistry
from cinetag.core.errors import ErrorKind, ValidationError


class TestCategoryRegistry:
    """Tests pour CategoryRegistry."""

    def test_nine_categories_sorted_by_id(self):
        """Les neuf categories sont retournees dans l'ordre des identifiants."""
        registry = CategoryRegistry()
        categories = registry.all()
        assert len(registry) == 9
        assert [c.id for c in categories] == list(range(1, 10))
        assert categories[0].name == "Production & Crew"
        assert categories[5].name == "Genre & Style"
        assert categories[8].name == "Audience & Reception"

    def test_every_category_has_icon(self):
        """Chaque categorie porte une icone et une description."""
        for category in CATEGORIES:
            assert category.icon
            assert category.description

    def test_get_unknown_returns_none(self):
        registry = CategoryRegistry()
        assert registry.get(10) is None
        assert registry.get(6).name == "Genre & Style"

    def test_get_by_name_ignores_case(self):
        registry = CategoryRegistry()
        assert registry.get_by_name("  genre & STYLE ").id == 6
        assert registry.get_by_name("Unknown") is None

    def test_require_missing_category(self):
        """Une categorie absente est une erreur de validation."""
        with pytest.raises(ValidationError) as exc_info:
            CategoryRegistry().require(None)
        assert exc_info.value.kind == ErrorKind.VALIDATION

    def test_require_unknown_category(self):
        with pytest.raises(ValidationError, match="inconnue"):
            CategoryRegistry().require(42)

    def test_contains(self):
        registry = CategoryRegistry()
        assert 1 in registry
        assert 0 not in registry

    def test_categories_are_immutable(self):
        """Les categories sont des dataclass gelees."""
        category = CategoryRegistry().require(1)
        with pytest.raises(AttributeError):
            category.name = "Autre"
