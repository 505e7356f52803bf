"""
Tests pour UsageCounter : compteurs recalcules depuis le stockage.
"""

from cinetag.core.value_objects import ContentType, EpisodeScope


class TestUsageCounter:
    """Tests pour UsageCounter."""

    def test_tag_usage_follows_associations(self, usage_counter, tag_store, association_store):
        tag = tag_store.create(6, 164, "Dark")
        assert usage_counter.tag_usage(tag.id) == 0

        association_store.add(tag.id, 550, ContentType.MOVIE)
        association_store.add(tag.id, 1396, ContentType.TV, EpisodeScope(1, 1))
        assert usage_counter.tag_usage(tag.id) == 2

        association_store.remove(tag.id, 550, ContentType.MOVIE)
        assert usage_counter.tag_usage(tag.id) == 1

    def test_usage_is_global(self, usage_counter, tag_store, association_store, identity):
        """L'usage d'un tag public compte les associations de tous les utilisateurs."""
        tag = tag_store.create(6, 164, "Dark", is_public=True)
        association_store.add(tag.id, 550, ContentType.MOVIE)
        identity.switch("bob")
        association_store.add(tag.id, 550, ContentType.MOVIE)

        assert usage_counter.tag_usage(tag.id) == 2

    def test_annotate_returns_copies(self, usage_counter, tag_store, association_store):
        tag = tag_store.create(6, 164, "Dark")
        association_store.add(tag.id, 550, ContentType.MOVIE)

        [annotated] = usage_counter.annotate_tags([tag])
        assert annotated.usage_count == 1
        assert tag.usage_count == 0

    def test_subcategory_usage(self, usage_counter, tag_store, subcategory_store):
        custom = subcategory_store.create_custom(6, "Cerebral")
        tag_store.create(6, custom.id, "Puzzle")
        tag_store.create(6, custom.id, "Maze")

        assert usage_counter.subcategory_usage(custom.id) == 2
        assert usage_counter.subcategory_usage(176) == 0

    def test_library_stats(self, usage_counter, tag_store, association_store):
        dark = tag_store.create(6, 164, "Dark")
        tag_store.create(6, 163, "Bleak")
        tag_store.create(1, 1, "Auteur")
        association_store.add(dark.id, 550, ContentType.MOVIE)
        association_store.add(dark.id, 77, ContentType.MOVIE)

        stats = usage_counter.library_stats("alice")
        assert stats.total_tags == 3
        assert stats.total_usage == 2
        assert stats.tags_by_category == {1: 1, 6: 2}
        assert list(stats.tags_by_category) == [1, 6]

    def test_library_stats_empty(self, usage_counter):
        stats = usage_counter.library_stats("nobody")
        assert stats.total_tags == 0
        assert stats.tags_by_category == {}
