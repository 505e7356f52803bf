"""
Associations entre tags et contenus.

Une association relie un tag a un film, a une serie entiere ou a un
episode precis (portee d'episode). Toutes les operations comparent la
portee de maniere exacte : l'association d'un tag a une serie et celle
du meme tag a l'un de ses episodes sont deux lignes distinctes.

Regles d'eligibilite d'un tag :
- le tag appartient a l'utilisateur ou est public
- la portee de contenu de sa sous-categorie accepte le type de contenu
"""

from typing import Iterable, Optional, Union

from loguru import logger

from cinetag.core.entities import AssignedTag, ContentAssociation, Tag, TagUsageStats
from cinetag.core.errors import (
    DuplicateAssociationError,
    NotFoundError,
    ValidationError,
)
from cinetag.core.ports.identity import IIdentityProvider
from cinetag.core.ports.repositories import (
    IContentTagRepository,
    ISubcategoryRepository,
    ITagRepository,
)
from cinetag.core.value_objects import (
    AssociationMetadata,
    ContentKey,
    ContentType,
    EpisodeScope,
)
from cinetag.services.usage_counter import UsageCounter

# Distingue "champ omis" de "champ explicitement efface" (None)
UNSET = object()


def _content_type(content_type: Union[ContentType, str]) -> ContentType:
    try:
        return ContentType(content_type)
    except ValueError as exc:
        raise ValidationError(f"Type de contenu invalide : {content_type!r}") from exc


def _content_key(
    content_id: int,
    content_type: Union[ContentType, str],
    episode_scope: Optional[EpisodeScope] = None,
) -> ContentKey:
    if content_id is None or content_id <= 0:
        raise ValidationError(f"Identifiant de contenu invalide : {content_id}")
    return ContentKey(content_id, _content_type(content_type), episode_scope)


def _unique(tag_ids: Iterable[int]) -> list[int]:
    """Dedoublonne en conservant l'ordre."""
    return list(dict.fromkeys(tag_ids))


class ContentAssociationStore:
    """
    Pose, retrait et interrogation des associations de l'utilisateur courant.
    """

    def __init__(
        self,
        content_tag_repo: IContentTagRepository,
        tag_repo: ITagRepository,
        subcategory_repo: ISubcategoryRepository,
        identity: IIdentityProvider,
        usage_counter: UsageCounter,
    ) -> None:
        self._repo = content_tag_repo
        self._tag_repo = tag_repo
        self._subcategory_repo = subcategory_repo
        self._identity = identity
        self._usage = usage_counter

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _eligible_tag(self, tag_id: int, owner: str, content_type: ContentType) -> Tag:
        tag = self._tag_repo.get_by_id(tag_id)
        if tag is None or (tag.owner != owner and not tag.is_public):
            raise NotFoundError("Tag", tag_id)
        subcategory = self._subcategory_repo.get_by_id(tag.subcategory_id)
        if subcategory is not None and not subcategory.content_scope.accepts(content_type):
            raise ValidationError(
                f"Le tag '{tag.name}' ({subcategory.content_scope.value}) "
                f"ne s'applique pas a un contenu {content_type.value}"
            )
        return tag

    def _owned_association(self, association_id: int, owner: str) -> ContentAssociation:
        association = self._repo.get_by_id(association_id)
        if association is None or association.owner != owner:
            raise NotFoundError("Association", association_id)
        return association

    def _new_rows(
        self, owner: str, key: ContentKey, tag_ids: list[int]
    ) -> list[ContentAssociation]:
        return [
            ContentAssociation(
                tag_id=tag_id,
                content_id=key.content_id,
                content_type=key.content_type,
                episode_scope=key.episode_scope,
                owner=owner,
            )
            for tag_id in tag_ids
        ]

    # ------------------------------------------------------------------
    # Ecritures
    # ------------------------------------------------------------------

    def add(
        self,
        tag_id: int,
        content_id: int,
        content_type: Union[ContentType, str],
        episode_scope: Optional[EpisodeScope] = None,
        metadata: Optional[AssociationMetadata] = None,
    ) -> ContentAssociation:
        """
        Applique un tag a un contenu.

        Raises :
            NotFoundError : tag inconnu ou prive d'un autre utilisateur
            ValidationError : contenu invalide ou portee incompatible
            DuplicateAssociationError : association deja presente a cette portee
        """
        owner = self._identity.require_owner()
        key = _content_key(content_id, content_type, episode_scope)
        tag = self._eligible_tag(tag_id, owner, key.content_type)
        if self._repo.find(owner, tag_id, key) is not None:
            raise DuplicateAssociationError(
                f"Le tag '{tag.name}' est deja applique a {key.label}"
            )
        association = self._repo.add(
            ContentAssociation(
                tag_id=tag_id,
                content_id=key.content_id,
                content_type=key.content_type,
                episode_scope=key.episode_scope,
                metadata=metadata or AssociationMetadata(),
                owner=owner,
            )
        )
        logger.info("Tag '{}' applique a {}", tag.name, key.label)
        return association

    def add_many(
        self,
        content_id: int,
        content_type: Union[ContentType, str],
        tag_ids: list[int],
        episode_scope: Optional[EpisodeScope] = None,
    ) -> list[ContentAssociation]:
        """
        Applique plusieurs tags a un contenu en une seule insertion.

        En cas de conflit d'unicite, les tags deja appliques sont retires du
        lot et l'insertion est retentee une seule fois. Un second conflit
        est propage tel quel.

        Retourne :
            Les associations effectivement creees

        Raises :
            DuplicateAssociationError : tous les tags sont deja appliques
        """
        owner = self._identity.require_owner()
        key = _content_key(content_id, content_type, episode_scope)
        ids = _unique(tag_ids)
        if not ids:
            return []
        for tag_id in ids:
            self._eligible_tag(tag_id, owner, key.content_type)

        try:
            created = self._repo.add_many(self._new_rows(owner, key, ids))
        except DuplicateAssociationError:
            existing = {row.tag_id for row in self._repo.list_by_content(owner, key)}
            remaining = [tag_id for tag_id in ids if tag_id not in existing]
            if not remaining:
                raise DuplicateAssociationError(
                    f"Tous les tags sont deja appliques a {key.label} (all tags already applied)"
                )
            logger.warning(
                "Conflit sur {} : nouvel essai avec {} tag(s) sur {}",
                key.label,
                len(remaining),
                len(ids),
            )
            created = self._repo.add_many(self._new_rows(owner, key, remaining))

        logger.info("{} tag(s) appliques a {}", len(created), key.label)
        return created

    def remove(
        self,
        tag_id: int,
        content_id: int,
        content_type: Union[ContentType, str],
        episode_scope: Optional[EpisodeScope] = None,
    ) -> bool:
        """
        Retire un tag d'un contenu, a la portee exacte indiquee.

        Retourne :
            True si une association a ete supprimee, False si elle n'existait pas
        """
        owner = self._identity.require_owner()
        key = _content_key(content_id, content_type, episode_scope)
        association = self._repo.find(owner, tag_id, key)
        if association is None:
            logger.debug("Aucune association du tag {} sur {}", tag_id, key.label)
            return False
        self._repo.delete(association.id)
        logger.info("Tag {} retire de {}", tag_id, key.label)
        return True

    def remove_by_id(self, association_id: int) -> None:
        """Supprime une association de l'utilisateur par son identifiant."""
        owner = self._identity.require_owner()
        association = self._owned_association(association_id, owner)
        self._repo.delete(association_id)
        logger.info("Association {} supprimee ({})", association_id, association.content_key.label)

    def remove_all(self, content_id: int, content_type: Union[ContentType, str]) -> int:
        """Retire tous les tags d'un contenu, toutes portees confondues."""
        owner = self._identity.require_owner()
        key = _content_key(content_id, content_type)
        removed = self._repo.delete_by_item(owner, key.content_id, key.content_type)
        logger.info("{} association(s) retiree(s) de {} (toutes portees)", removed, key.label)
        return removed

    def set_for_content(
        self,
        content_id: int,
        content_type: Union[ContentType, str],
        tag_ids: list[int],
        episode_scope: Optional[EpisodeScope] = None,
    ) -> list[ContentAssociation]:
        """
        Remplace les tags d'un contenu a la portee exacte indiquee.

        Une liste vide retire tous les tags de cette portee. Les autres
        portees du meme contenu ne sont pas touchees.
        """
        owner = self._identity.require_owner()
        key = _content_key(content_id, content_type, episode_scope)
        ids = _unique(tag_ids)
        for tag_id in ids:
            self._eligible_tag(tag_id, owner, key.content_type)

        removed = self._repo.delete_by_content(owner, key)
        created = self._repo.add_many(self._new_rows(owner, key, ids)) if ids else []
        logger.info(
            "Tags de {} remplaces : {} retire(s), {} pose(s)", key.label, removed, len(created)
        )
        return created

    def update_metadata(
        self,
        association_id: int,
        start_time=UNSET,
        end_time=UNSET,
        notes=UNSET,
    ) -> ContentAssociation:
        """
        Met a jour partiellement les metadonnees d'une association.

        Un champ omis est conserve, un champ passe a None est efface.

        Raises :
            NotFoundError : association inconnue ou d'un autre utilisateur
            ValidationError : format d'heure invalide ou debut apres fin
        """
        owner = self._identity.require_owner()
        association = self._owned_association(association_id, owner)
        current = association.metadata
        association.metadata = AssociationMetadata(
            start_time=current.start_time if start_time is UNSET else start_time,
            end_time=current.end_time if end_time is UNSET else end_time,
            notes=current.notes if notes is UNSET else notes,
        )
        updated = self._repo.update(association)
        logger.info("Metadonnees de l'association {} mises a jour", association_id)
        return updated

    def copy_tags(self, source: ContentKey, target: ContentKey) -> list[ContentAssociation]:
        """
        Copie les tags poses sur source vers target.

        Les tags deja presents sur target, ou dont la portee n'accepte pas
        le type de target, sont ignores.

        Retourne :
            Les associations creees sur target
        """
        owner = self._identity.require_owner()
        target = _content_key(target.content_id, target.content_type, target.episode_scope)
        present = {row.tag_id for row in self._repo.list_by_content(owner, target)}
        candidates = []
        for row in self._repo.list_by_content(owner, source):
            if row.tag_id in present:
                continue
            try:
                self._eligible_tag(row.tag_id, owner, target.content_type)
            except ValidationError:
                logger.debug("Tag {} ignore : portee incompatible avec {}", row.tag_id, target.label)
                continue
            candidates.append(row.tag_id)
        if not candidates:
            return []
        created = self._repo.add_many(self._new_rows(owner, target, candidates))
        logger.info("{} tag(s) copies de {} vers {}", len(created), source.label, target.label)
        return created

    # ------------------------------------------------------------------
    # Lectures
    # ------------------------------------------------------------------

    def query_by_content(
        self,
        content_id: int,
        content_type: Union[ContentType, str],
        episode_scope: Optional[EpisodeScope] = None,
    ) -> list[Tag]:
        """Tags poses a cette portee exacte, annotes avec leur usage global."""
        assigned = self.assigned_tags(content_id, content_type, episode_scope)
        return [item.tag for item in assigned]

    def assigned_tags(
        self,
        content_id: int,
        content_type: Union[ContentType, str],
        episode_scope: Optional[EpisodeScope] = None,
    ) -> list[AssignedTag]:
        """Tags poses a cette portee avec l'identifiant et les metadonnees de l'association."""
        owner = self._identity.require_owner()
        key = _content_key(content_id, content_type, episode_scope)
        rows = self._repo.list_by_content(owner, key)
        tags = self._load_tags([row.tag_id for row in rows])
        assigned = [
            AssignedTag(
                tag=tags[row.tag_id],
                association_id=row.id,
                metadata=row.metadata,
                content_key=key,
            )
            for row in rows
            if row.tag_id in tags
        ]
        logger.debug("{} tag(s) sur {}", len(assigned), key.label)
        return assigned

    def get_assigned(self, association_id: int) -> AssignedTag:
        """Retourne une association de l'utilisateur avec son tag."""
        owner = self._identity.require_owner()
        association = self._owned_association(association_id, owner)
        tags = self._load_tags([association.tag_id])
        if association.tag_id not in tags:
            raise NotFoundError("Tag", association.tag_id)
        return AssignedTag(
            tag=tags[association.tag_id],
            association_id=association.id,
            metadata=association.metadata,
            content_key=association.content_key,
        )

    def has_tag(
        self,
        tag_id: int,
        content_id: int,
        content_type: Union[ContentType, str],
        episode_scope: Optional[EpisodeScope] = None,
    ) -> bool:
        """Indique si le tag est pose sur le contenu a cette portee."""
        owner = self._identity.require_owner()
        key = _content_key(content_id, content_type, episode_scope)
        return self._repo.find(owner, tag_id, key) is not None

    def content_by_tag(self, tag_id: int) -> list[ContentAssociation]:
        """Associations de l'utilisateur pour un tag, les plus recentes d'abord."""
        owner = self._identity.require_owner()
        return self._repo.list_by_tag(tag_id, owner=owner)

    def query_by_tags_all(
        self,
        tag_ids: list[int],
        content_type: Optional[Union[ContentType, str]] = None,
    ) -> list[ContentKey]:
        """Contenus portant tous les tags demandes (ET)."""
        owner = self._identity.require_owner()
        if content_type is not None:
            content_type = _content_type(content_type)
        ids = _unique(tag_ids)
        if not ids:
            return []
        tags_by_key: dict[ContentKey, set[int]] = {}
        for row in self._repo.list_by_tags(owner, ids, content_type):
            tags_by_key.setdefault(row.content_key, set()).add(row.tag_id)
        wanted = set(ids)
        return [key for key, found in tags_by_key.items() if wanted <= found]

    def query_by_tags_any(
        self,
        tag_ids: list[int],
        content_type: Optional[Union[ContentType, str]] = None,
    ) -> list[ContentKey]:
        """Contenus portant au moins un des tags demandes (OU), sans doublon."""
        owner = self._identity.require_owner()
        if content_type is not None:
            content_type = _content_type(content_type)
        ids = _unique(tag_ids)
        if not ids:
            return []
        rows = self._repo.list_by_tags(owner, ids, content_type)
        return list(dict.fromkeys(row.content_key for row in rows))

    def usage_stats(self, tag_id: int) -> TagUsageStats:
        """Repartition des usages d'un tag entre films, series et episodes."""
        owner = self._identity.require_owner()
        tag = self._tag_repo.get_by_id(tag_id)
        if tag is None or (tag.owner != owner and not tag.is_public):
            raise NotFoundError("Tag", tag_id)
        return self._usage.usage_stats(tag_id)

    def _load_tags(self, tag_ids: list[int]) -> dict[int, Tag]:
        tags = [tag for tag in map(self._tag_repo.get_by_id, _unique(tag_ids)) if tag is not None]
        return {tag.id: tag for tag in self._usage.annotate_tags(tags)}
