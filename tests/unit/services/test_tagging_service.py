"""
Tests unitaires pour TaggingService et capture().

Chaque operation retourne un Result : les erreurs du domaine deviennent
des echecs types, les autres exceptions sont propagees.
"""

from unittest.mock import MagicMock

import pytest

from cinetag.adapters.identity import StaticIdentityProvider
from cinetag.core.entities import TagDraft
from cinetag.core.errors import ErrorKind, NotFoundError
from cinetag.core.value_objects import ContentKey, ContentType, EpisodeScope
from cinetag.services.tagging import TaggingService, capture


class TestCapture:
    """Tests pour capture."""

    def test_success(self):
        result = capture(lambda a, b: a + b, 1, b=2)
        assert result.ok
        assert result.value == 3

    def test_domain_error_captured(self):
        def failing():
            raise NotFoundError("Tag", 7)

        result = capture(failing)
        assert not result.ok
        assert result.kind == ErrorKind.NOT_FOUND
        assert result.error.message == "Tag introuvable : 7"

    def test_other_errors_propagate(self):
        def broken():
            raise RuntimeError("base indisponible")

        with pytest.raises(RuntimeError):
            capture(broken)


class TestTaggingService:
    """Parcours complet via la facade."""

    def test_categories(self, tagging_service):
        result = tagging_service.categories()
        assert result.ok
        assert [category.id for category in result.value] == list(range(1, 10))

    def test_end_to_end(self, tagging_service):
        tag = tagging_service.create_tag(6, 164, "Mind-Bending").unwrap()
        association = tagging_service.add_tag(
            tag.id, 1396, ContentType.TV, EpisodeScope(1, 3)
        ).unwrap()

        tags = tagging_service.tags_for_content(1396, ContentType.TV, EpisodeScope(1, 3)).value
        assert [t.usage_count for t in tags] == [1]
        assert tagging_service.has_tag(tag.id, 1396, ContentType.TV).value is False

        updated = tagging_service.update_metadata(association.id, notes="cold open").unwrap()
        assert updated.metadata.notes == "cold open"
        assert tagging_service.get_assigned(association.id).value.metadata.notes == "cold open"

        assert tagging_service.usage_stats(tag.id).value.tv_episodes == 1
        assert tagging_service.delete_tag(tag.id).value == 1

    def test_failure_kinds(self, tagging_service):
        tagging_service.create_tag(6, 164, "Dark").unwrap()

        assert tagging_service.create_tag(6, 164, "dark").kind == ErrorKind.DUPLICATE_NAME
        assert tagging_service.create_tag(6, 1, "X").kind == ErrorKind.VALIDATION
        assert tagging_service.get_tag(999).kind == ErrorKind.NOT_FOUND
        assert tagging_service.create_subcategory(6, "Tone").kind == ErrorKind.DUPLICATE_NAME

    def test_duplicate_association_kind(self, tagging_service):
        tag = tagging_service.create_tag(6, 164, "Dark").unwrap()
        tagging_service.add_tag(tag.id, 550, ContentType.MOVIE).unwrap()
        result = tagging_service.add_tag(tag.id, 550, ContentType.MOVIE)
        assert result.kind == ErrorKind.DUPLICATE_ASSOCIATION

    def test_referential_integrity_kind(self, tagging_service):
        custom = tagging_service.create_subcategory(6, "Cerebral").unwrap()
        tagging_service.create_tag(6, custom.id, "Puzzle").unwrap()

        result = tagging_service.delete_subcategory(custom.id)
        assert result.kind == ErrorKind.REFERENTIAL_INTEGRITY
        assert result.error.usage_count == 1

    def test_unauthenticated(self, tagging_service, identity):
        identity.switch(None)
        for result in (
            tagging_service.list_tags(),
            tagging_service.list_subcategories(6),
            tagging_service.search_tags("x"),
            tagging_service.library_stats(),
        ):
            assert result.kind == ErrorKind.AUTHENTICATION_REQUIRED

    def test_list_tags_filters(self, tagging_service):
        tagging_service.create_tags(
            [TagDraft(6, 164, "Dark"), TagDraft(6, 163, "Bleak"), TagDraft(1, 1, "Auteur")]
        ).unwrap()

        assert len(tagging_service.list_tags().value) == 3
        assert [t.name for t in tagging_service.list_tags(category_id=6).value] == ["Bleak", "Dark"]
        assert [t.name for t in tagging_service.list_tags(subcategory_id=163).value] == ["Bleak"]

    def test_find_content_and_copy(self, tagging_service):
        dark = tagging_service.create_tag(6, 164, "Dark").unwrap()
        eerie = tagging_service.create_tag(6, 164, "Eerie").unwrap()
        tagging_service.add_tags(550, ContentType.MOVIE, [dark.id, eerie.id]).unwrap()

        copied = tagging_service.copy_tags(
            ContentKey(550, ContentType.MOVIE), ContentKey(77, ContentType.MOVIE)
        ).unwrap()
        assert len(copied) == 2

        keys = tagging_service.find_content([dark.id, eerie.id]).value
        assert {key.content_id for key in keys} == {550, 77}
        assert tagging_service.find_content([dark.id], match_all=False).ok

    def test_find_content_with_content_type_string(self, tagging_service):
        dark = tagging_service.create_tag(6, 164, "Dark").unwrap()
        tagging_service.add_tag(dark.id, 550, ContentType.MOVIE).unwrap()

        found = tagging_service.find_content([dark.id], content_type="movie")
        assert found.value == [ContentKey(550, ContentType.MOVIE)]

        invalid = tagging_service.find_content([dark.id], content_type="anime")
        assert invalid.kind == ErrorKind.VALIDATION

    def test_set_and_remove(self, tagging_service):
        dark = tagging_service.create_tag(6, 164, "Dark").unwrap()
        eerie = tagging_service.create_tag(6, 164, "Eerie").unwrap()
        tagging_service.set_tags(550, ContentType.MOVIE, [dark.id, eerie.id]).unwrap()

        assert tagging_service.remove_tag(dark.id, 550, ContentType.MOVIE).value is True
        assert tagging_service.remove_all_tags(550, ContentType.MOVIE).value == 1

    def test_library_stats(self, tagging_service):
        tagging_service.create_tag(6, 164, "Dark").unwrap()
        stats = tagging_service.library_stats().unwrap()
        assert stats.total_tags == 1
        assert stats.tags_by_category == {6: 1}

    def test_non_domain_error_propagates(self, registry, identity):
        """Une panne de stockage n'est pas convertie en Result."""
        tag_store = MagicMock()
        tag_store.search.side_effect = RuntimeError("database is locked")
        service = TaggingService(
            registry, MagicMock(), tag_store, MagicMock(), MagicMock(), identity
        )
        with pytest.raises(RuntimeError):
            service.search_tags("dark")

    def test_owner_switch(self, tagging_service, identity):
        tagging_service.create_tag(6, 164, "Dark").unwrap()
        identity.switch("bob")
        assert tagging_service.list_tags().value == []
        assert isinstance(identity, StaticIdentityProvider)
