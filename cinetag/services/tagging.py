"""
Surface applicative du systeme de tagging.

TaggingService regroupe les stores derriere un contrat unique : chaque
operation retourne un Result. Les erreurs du domaine (TaggingError) sont
capturees dans le Result ; les autres exceptions (base indisponible,
bug) sont propagees.

Utilisation :
    service = container.tagging_service()
    result = service.create_tag(6, 164, "Mind-Bending")
    if not result.ok:
        print(result.kind, result.error.message)
"""

from typing import Callable, Optional, TypeVar, Union

from loguru import logger

from cinetag.core.categories import CategoryRegistry
from cinetag.core.entities import (
    AssignedTag,
    Category,
    ContentAssociation,
    LibraryStats,
    Subcategory,
    Tag,
    TagDraft,
    TagUsageStats,
)
from cinetag.core.errors import TaggingError
from cinetag.core.ports.identity import IIdentityProvider
from cinetag.core.result import Result
from cinetag.core.value_objects import (
    AssociationMetadata,
    ContentKey,
    ContentScope,
    ContentType,
    EpisodeScope,
    SubcategoryFilter,
)
from cinetag.services.content_association_store import UNSET, ContentAssociationStore
from cinetag.services.subcategory_store import SubcategoryStore
from cinetag.services.tag_merge import MergeReport
from cinetag.services.tag_store import TagStore
from cinetag.services.usage_counter import UsageCounter

T = TypeVar("T")


def capture(operation: Callable[..., T], *args, **kwargs) -> Result[T]:
    """
    Execute une operation et convertit son issue en Result.

    Seules les TaggingError sont converties en echec.
    """
    try:
        return Result.success(operation(*args, **kwargs))
    except TaggingError as exc:
        name = getattr(operation, "__name__", "operation")
        logger.debug("{} en echec ({}) : {}", name, exc.kind.value, exc.message)
        return Result.failure(exc)


class TaggingService:
    """Facade des operations de tagging, retournant toujours un Result."""

    def __init__(
        self,
        registry: CategoryRegistry,
        subcategory_store: SubcategoryStore,
        tag_store: TagStore,
        association_store: ContentAssociationStore,
        usage_counter: UsageCounter,
        identity: IIdentityProvider,
    ) -> None:
        self._registry = registry
        self._subcategories = subcategory_store
        self._tags = tag_store
        self._associations = association_store
        self._usage = usage_counter
        self._identity = identity

    # Categories

    def categories(self) -> Result[list[Category]]:
        return Result.success(self._registry.all())

    # Sous-categories

    def list_subcategories(
        self, category_id: int, filter: SubcategoryFilter = SubcategoryFilter.ALL
    ) -> Result[list[Subcategory]]:
        return capture(self._subcategories.list_by_category, category_id, filter)

    def list_all_subcategories(self) -> Result[list[Subcategory]]:
        return capture(self._subcategories.list_all)

    def get_subcategory(self, subcategory_id: int) -> Result[Subcategory]:
        return capture(self._subcategories.get, subcategory_id)

    def create_subcategory(
        self,
        category_id: int,
        name: str,
        content_scope: ContentScope = ContentScope.BOTH,
        genre_specific: Optional[str] = None,
    ) -> Result[Subcategory]:
        return capture(
            self._subcategories.create_custom, category_id, name, content_scope, genre_specific
        )

    def promote_subcategory(self, subcategory_id: int) -> Result[Subcategory]:
        return capture(self._subcategories.promote_suggested, subcategory_id)

    def update_subcategory(
        self,
        subcategory_id: int,
        name: Optional[str] = None,
        content_scope: Optional[ContentScope] = None,
    ) -> Result[Subcategory]:
        return capture(self._subcategories.update, subcategory_id, name, content_scope)

    def move_subcategory(self, subcategory_id: int, new_category_id: int) -> Result[Subcategory]:
        return capture(self._subcategories.move, subcategory_id, new_category_id)

    def delete_subcategory(self, subcategory_id: int) -> Result[None]:
        return capture(self._subcategories.delete, subcategory_id)

    # Tags

    def create_tag(
        self,
        category_id: int,
        subcategory_id: int,
        name: str,
        description: Optional[str] = None,
        color: Optional[str] = None,
        is_public: bool = False,
    ) -> Result[Tag]:
        return capture(
            self._tags.create, category_id, subcategory_id, name, description, color, is_public
        )

    def create_tags(self, drafts: list[TagDraft]) -> Result[list[Tag]]:
        return capture(self._tags.create_many, drafts)

    def update_tag(
        self,
        tag_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> Result[Tag]:
        return capture(self._tags.update, tag_id, name, description, color, is_public)

    def delete_tag(self, tag_id: int) -> Result[int]:
        return capture(self._tags.delete, tag_id)

    def merge_tags(self, source_id: int, target_id: int) -> Result[MergeReport]:
        return capture(self._tags.merge, source_id, target_id)

    def duplicate_tag(self, tag_id: int, new_name: str) -> Result[Tag]:
        return capture(self._tags.duplicate, tag_id, new_name)

    def get_tag(self, tag_id: int) -> Result[Tag]:
        return capture(self._tags.get, tag_id)

    def search_tags(self, query: str) -> Result[list[Tag]]:
        return capture(self._tags.search, query)

    def list_tags(
        self, category_id: Optional[int] = None, subcategory_id: Optional[int] = None
    ) -> Result[list[Tag]]:
        """Liste les tags, filtres par sous-categorie ou par categorie."""
        if subcategory_id is not None:
            return capture(self._tags.list_by_subcategory, subcategory_id)
        if category_id is not None:
            return capture(self._tags.list_by_category, category_id)
        return capture(self._tags.list_all)

    def most_used_tags(self, limit: Optional[int] = None) -> Result[list[Tag]]:
        return capture(self._tags.most_used, limit)

    # Associations

    def add_tag(
        self,
        tag_id: int,
        content_id: int,
        content_type: ContentType,
        episode_scope: Optional[EpisodeScope] = None,
        metadata: Optional[AssociationMetadata] = None,
    ) -> Result[ContentAssociation]:
        return capture(
            self._associations.add, tag_id, content_id, content_type, episode_scope, metadata
        )

    def add_tags(
        self,
        content_id: int,
        content_type: ContentType,
        tag_ids: list[int],
        episode_scope: Optional[EpisodeScope] = None,
    ) -> Result[list[ContentAssociation]]:
        return capture(
            self._associations.add_many, content_id, content_type, tag_ids, episode_scope
        )

    def remove_tag(
        self,
        tag_id: int,
        content_id: int,
        content_type: ContentType,
        episode_scope: Optional[EpisodeScope] = None,
    ) -> Result[bool]:
        return capture(self._associations.remove, tag_id, content_id, content_type, episode_scope)

    def remove_association(self, association_id: int) -> Result[None]:
        return capture(self._associations.remove_by_id, association_id)

    def remove_all_tags(self, content_id: int, content_type: ContentType) -> Result[int]:
        return capture(self._associations.remove_all, content_id, content_type)

    def set_tags(
        self,
        content_id: int,
        content_type: ContentType,
        tag_ids: list[int],
        episode_scope: Optional[EpisodeScope] = None,
    ) -> Result[list[ContentAssociation]]:
        return capture(
            self._associations.set_for_content, content_id, content_type, tag_ids, episode_scope
        )

    def update_metadata(
        self, association_id: int, start_time=UNSET, end_time=UNSET, notes=UNSET
    ) -> Result[ContentAssociation]:
        """Mise a jour partielle : seuls les champs passes sont modifies."""
        return capture(
            self._associations.update_metadata,
            association_id,
            start_time=start_time,
            end_time=end_time,
            notes=notes,
        )

    def copy_tags(self, source: ContentKey, target: ContentKey) -> Result[list[ContentAssociation]]:
        return capture(self._associations.copy_tags, source, target)

    def tags_for_content(
        self,
        content_id: int,
        content_type: ContentType,
        episode_scope: Optional[EpisodeScope] = None,
    ) -> Result[list[Tag]]:
        return capture(
            self._associations.query_by_content, content_id, content_type, episode_scope
        )

    def assigned_tags(
        self,
        content_id: int,
        content_type: ContentType,
        episode_scope: Optional[EpisodeScope] = None,
    ) -> Result[list[AssignedTag]]:
        return capture(
            self._associations.assigned_tags, content_id, content_type, episode_scope
        )

    def get_assigned(self, association_id: int) -> Result[AssignedTag]:
        return capture(self._associations.get_assigned, association_id)

    def has_tag(
        self,
        tag_id: int,
        content_id: int,
        content_type: ContentType,
        episode_scope: Optional[EpisodeScope] = None,
    ) -> Result[bool]:
        return capture(self._associations.has_tag, tag_id, content_id, content_type, episode_scope)

    def content_by_tag(self, tag_id: int) -> Result[list[ContentAssociation]]:
        return capture(self._associations.content_by_tag, tag_id)

    def find_content(
        self,
        tag_ids: list[int],
        match_all: bool = True,
        content_type: Optional[Union[ContentType, str]] = None,
    ) -> Result[list[ContentKey]]:
        """Contenus portant tous les tags (match_all) ou au moins un."""
        if match_all:
            return capture(self._associations.query_by_tags_all, tag_ids, content_type)
        return capture(self._associations.query_by_tags_any, tag_ids, content_type)

    # Usage

    def usage_stats(self, tag_id: int) -> Result[TagUsageStats]:
        return capture(self._associations.usage_stats, tag_id)

    def library_stats(self) -> Result[LibraryStats]:
        return capture(lambda: self._usage.library_stats(self._identity.require_owner()))
