"""
Tests unitaires pour TagMergeCoordinator.

Scenario de reference : "Mind-Bending" est fusionne dans "Thought-Provoking".
"""

from unittest.mock import MagicMock

import pytest

from cinetag.core.entities import ContentAssociation
from cinetag.core.errors import DuplicateAssociationError, NotFoundError, ValidationError
from cinetag.core.ports.repositories import IContentTagRepository
from cinetag.core.value_objects import ContentType, EpisodeScope
from cinetag.services.tag_merge import MergeReport, TagMergeCoordinator


@pytest.fixture
def mind_bending(tag_store):
    return tag_store.create(6, 164, "Mind-Bending", is_public=True)


@pytest.fixture
def thought_provoking(tag_store):
    return tag_store.create(6, 164, "Thought-Provoking")


class TestMerge:
    """Fusion sur une vraie base."""

    def test_merge_with_overlap(
        self, merge_coordinator, association_store, tag_store, mind_bending, thought_provoking
    ):
        association_store.add(mind_bending.id, 550, ContentType.MOVIE)
        association_store.add(mind_bending.id, 77, ContentType.MOVIE)
        association_store.add(thought_provoking.id, 77, ContentType.MOVIE)
        association_store.add(thought_provoking.id, 680, ContentType.MOVIE)

        report = merge_coordinator.merge(mind_bending.id, thought_provoking.id)

        assert report == MergeReport(mind_bending.id, thought_provoking.id, moved=1, dropped=1)
        assert report.total == 2
        # 2 + 2 - 1 contenu commun
        assert tag_store.get(thought_provoking.id).usage_count == 3
        with pytest.raises(NotFoundError):
            tag_store.get(mind_bending.id)
        found = association_store.query_by_tags_any([thought_provoking.id])
        assert {key.content_id for key in found} == {550, 77, 680}

    def test_merge_keeps_scopes_apart(
        self, merge_coordinator, association_store, mind_bending, thought_provoking
    ):
        """Le niveau serie de la cible ne masque pas l'episode du source."""
        association_store.add(thought_provoking.id, 1396, ContentType.TV)
        association_store.add(mind_bending.id, 1396, ContentType.TV, EpisodeScope(2, 1))

        report = merge_coordinator.merge(mind_bending.id, thought_provoking.id)

        assert report.moved == 1
        assert association_store.has_tag(
            thought_provoking.id, 1396, ContentType.TV, EpisodeScope(2, 1)
        )

    def test_merge_covers_other_owners(
        self, merge_coordinator, association_store, identity, mind_bending, thought_provoking
    ):
        """Les associations de bob sur le tag public sont re-pointees."""
        identity.switch("bob")
        association_store.add(mind_bending.id, 550, ContentType.MOVIE)
        identity.switch("alice")

        report = merge_coordinator.merge(mind_bending.id, thought_provoking.id)

        assert report.moved == 1
        identity.switch("bob")
        rows = association_store.content_by_tag(thought_provoking.id)
        assert [(row.owner, row.content_id) for row in rows] == [("bob", 550)]

    def test_merge_without_associations(self, merge_coordinator, tag_store, mind_bending, thought_provoking):
        report = merge_coordinator.merge(mind_bending.id, thought_provoking.id)
        assert report.total == 0
        assert [tag.name for tag in tag_store.list_all()] == ["Thought-Provoking"]

    def test_same_tag_rejected(self, merge_coordinator, mind_bending):
        with pytest.raises(ValidationError):
            merge_coordinator.merge(mind_bending.id, mind_bending.id)

    def test_other_owner_tags_rejected(self, merge_coordinator, identity, mind_bending, thought_provoking):
        identity.switch("bob")
        with pytest.raises(NotFoundError):
            merge_coordinator.merge(mind_bending.id, thought_provoking.id)

    def test_merge_through_tag_store(self, tag_store, mind_bending, thought_provoking):
        report = tag_store.merge(mind_bending.id, thought_provoking.id)
        assert report.target_id == thought_provoking.id


class TestMergeFailures:
    """Comportement en cas d'echec, avec un repository d'associations simule."""

    @pytest.fixture
    def repo(self):
        return MagicMock(spec=IContentTagRepository)

    @pytest.fixture
    def coordinator(self, tag_repo, repo, identity):
        return TagMergeCoordinator(tag_repo, repo, identity)

    def _row(self, association_id: int, tag_id: int) -> ContentAssociation:
        return ContentAssociation(
            id=association_id,
            tag_id=tag_id,
            content_id=550,
            content_type=ContentType.MOVIE,
            owner="alice",
        )

    def test_failure_keeps_source(self, coordinator, repo, tag_repo, mind_bending, thought_provoking):
        repo.list_by_tag.return_value = [self._row(1, mind_bending.id)]
        repo.find.return_value = None
        repo.update.side_effect = RuntimeError("disque plein")

        with pytest.raises(RuntimeError):
            coordinator.merge(mind_bending.id, thought_provoking.id)
        assert tag_repo.get_by_id(mind_bending.id) is not None

    def test_conflict_on_update_drops_row(
        self, coordinator, repo, tag_repo, mind_bending, thought_provoking
    ):
        """La cible posee entre lecture et ecriture : la ligne du source est supprimee."""
        repo.list_by_tag.return_value = [self._row(1, mind_bending.id)]
        repo.find.return_value = None
        repo.update.side_effect = DuplicateAssociationError("deja presente")

        report = coordinator.merge(mind_bending.id, thought_provoking.id)

        assert (report.moved, report.dropped) == (0, 1)
        repo.delete.assert_called_once_with(1)
        assert tag_repo.get_by_id(mind_bending.id) is None
