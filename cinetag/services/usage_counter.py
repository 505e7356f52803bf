"""
Compteur d'usage des tags et sous-categories.

Les compteurs sont toujours recalcules depuis le stockage : aucun compteur
n'est incremente ou decremente en memoire, ce qui les garde exacts apres
une fusion ou une suppression en cascade.

- usage d'un tag : nombre d'associations qui le referencent
- usage d'une sous-categorie : nombre de tags qui la referencent
"""

from collections import Counter
from dataclasses import replace

from cinetag.core.entities import LibraryStats, Subcategory, Tag, TagUsageStats
from cinetag.core.ports.repositories import IContentTagRepository, ITagRepository


class UsageCounter:
    """Calcule les compteurs d'usage derives."""

    def __init__(
        self,
        tag_repo: ITagRepository,
        content_tag_repo: IContentTagRepository,
    ) -> None:
        self._tag_repo = tag_repo
        self._content_tag_repo = content_tag_repo

    def tag_usage(self, tag_id: int) -> int:
        """Nombre d'associations du tag, tous utilisateurs confondus."""
        return self._content_tag_repo.count_by_tags([tag_id]).get(tag_id, 0)

    def tag_usages(self, tag_ids: list[int]) -> dict[int, int]:
        """Compteurs de plusieurs tags en une requete."""
        return self._content_tag_repo.count_by_tags(tag_ids)

    def subcategory_usage(self, subcategory_id: int) -> int:
        """Nombre de tags referencant la sous-categorie."""
        return self._tag_repo.count_by_subcategories([subcategory_id]).get(subcategory_id, 0)

    def usage_stats(self, tag_id: int) -> TagUsageStats:
        """Repartition des usages du tag (films, series, episodes)."""
        return self._content_tag_repo.usage_breakdown(tag_id)

    def annotate_tags(self, tags: list[Tag]) -> list[Tag]:
        """Retourne des copies des tags avec leur usage_count a jour."""
        counts = self.tag_usages([tag.id for tag in tags if tag.id is not None])
        return [replace(tag, usage_count=counts.get(tag.id, 0)) for tag in tags]

    def annotate_tag(self, tag: Tag) -> Tag:
        """Retourne une copie du tag avec son usage_count a jour."""
        return self.annotate_tags([tag])[0]

    def annotate_subcategories(self, subcategories: list[Subcategory]) -> list[Subcategory]:
        """Retourne des copies des sous-categories avec leur usage_count a jour."""
        counts = self._tag_repo.count_by_subcategories(
            [subcategory.id for subcategory in subcategories if subcategory.id is not None]
        )
        return [
            replace(subcategory, usage_count=counts.get(subcategory.id, 0))
            for subcategory in subcategories
        ]

    def library_stats(self, owner: str) -> LibraryStats:
        """
        Statistiques globales de la taxonomie d'un utilisateur.

        Args :
            owner : Utilisateur concerne

        Retourne :
            LibraryStats avec le nombre de tags, d'associations et la
            repartition des tags par categorie
        """
        tags = self._tag_repo.list_by_owner(owner)
        by_category = Counter(tag.category_id for tag in tags)
        return LibraryStats(
            total_tags=len(tags),
            total_usage=self._content_tag_repo.count_by_owner(owner),
            tags_by_category=dict(sorted(by_category.items())),
        )
