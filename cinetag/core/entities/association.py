"""
Entites des associations entre tags et contenus.

Une ContentAssociation relie un tag a un film, une serie entiere ou un
episode precis. La cle composite (owner, tag_id, content_id, content_type,
episode_scope) est unique : une portee nulle (niveau serie ou film) est
distincte de toute portee d'episode sur la meme serie.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from cinetag.core.entities.taxonomy import Tag
from cinetag.core.value_objects import (
    AssociationMetadata,
    ContentKey,
    ContentType,
    EpisodeScope,
)


@dataclass
class ContentAssociation:
    """
    Association d'un tag a un contenu.

    Attributes:
        id: Identifiant en base
        tag_id: Tag associe
        content_id: Identifiant opaque du contenu
        content_type: movie ou tv
        episode_scope: Episode vise, None pour le niveau film/serie
        metadata: Passage concerne et notes
        owner: Utilisateur ayant pose l'association
        created_at: Date de creation
        updated_at: Date de derniere modification
    """

    id: Optional[int] = None
    tag_id: int = 0
    content_id: int = 0
    content_type: ContentType = ContentType.MOVIE
    episode_scope: Optional[EpisodeScope] = None
    metadata: AssociationMetadata = field(default_factory=AssociationMetadata)
    owner: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def content_key(self) -> ContentKey:
        """Cle du contenu vise par l'association."""
        return ContentKey(self.content_id, self.content_type, self.episode_scope)


@dataclass
class AssignedTag:
    """
    Tag tel qu'applique a un contenu, avec l'annotation de l'association.

    Attributes:
        tag: Le tag (avec son usage global)
        association_id: Identifiant de la ligne content_tags
        metadata: Passage concerne et notes de cette association
        content_key: Contenu vise
    """

    tag: Tag
    association_id: int
    metadata: AssociationMetadata
    content_key: ContentKey


@dataclass(frozen=True)
class TagUsageStats:
    """Repartition des usages d'un tag par type de contenu."""

    total: int = 0
    movies: int = 0
    tv_series: int = 0
    tv_episodes: int = 0


@dataclass
class LibraryStats:
    """
    Statistiques globales de la taxonomie d'un utilisateur.

    Attributes:
        total_tags: Nombre de tags possedes
        total_usage: Nombre d'associations posees
        tags_by_category: Nombre de tags par categorie
    """

    total_tags: int = 0
    total_usage: int = 0
    tags_by_category: dict[int, int] = field(default_factory=dict)
