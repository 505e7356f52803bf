"""
Gestion des tags de l'utilisateur courant.

Un tag est rattache a exactement une sous-categorie, elle-meme rattachee
a une categorie : la categorie du tag doit etre celle de sa sous-categorie.
Le nom est unique, sans tenir compte de la casse, pour le triplet
(owner, category_id, subcategory_id).

Les listings et la recherche retournent des tags annotes avec leur usage,
recalcule depuis les associations a chaque appel.
"""

from typing import TYPE_CHECKING, Optional

from loguru import logger

from cinetag.core.categories import CategoryRegistry
from cinetag.core.entities import Subcategory, Tag, TagDraft
from cinetag.core.errors import DuplicateNameError, NotFoundError, ValidationError
from cinetag.core.ports.identity import IIdentityProvider
from cinetag.core.ports.repositories import (
    IContentTagRepository,
    ISubcategoryRepository,
    ITagRepository,
)
from cinetag.core.value_objects import normalize_color
from cinetag.services.usage_counter import UsageCounter

if TYPE_CHECKING:
    from cinetag.services.tag_merge import MergeReport, TagMergeCoordinator


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Le nom du tag est obligatoire")
    return cleaned


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    return description.strip() or None


def _by_usage(tags: list[Tag]) -> list[Tag]:
    """Tri stable : les plus utilises d'abord, l'ordre par nom est conserve."""
    return sorted(tags, key=lambda tag: tag.usage_count, reverse=True)


class TagStore:
    """
    CRUD, recherche et listings des tags.

    Utilisation :
        store = container.tag_store()
        tag = store.create(6, 164, "Mind-Bending")
        store.search("mind")
    """

    def __init__(
        self,
        tag_repo: ITagRepository,
        subcategory_repo: ISubcategoryRepository,
        content_tag_repo: IContentTagRepository,
        identity: IIdentityProvider,
        registry: CategoryRegistry,
        usage_counter: UsageCounter,
        merge_coordinator: "TagMergeCoordinator",
        search_limit: int = 20,
        most_used_limit: int = 10,
    ) -> None:
        self._repo = tag_repo
        self._subcategory_repo = subcategory_repo
        self._content_tag_repo = content_tag_repo
        self._identity = identity
        self._registry = registry
        self._usage = usage_counter
        self._merge = merge_coordinator
        self._search_limit = search_limit
        self._most_used_limit = most_used_limit

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _require_subcategory(self, category_id: int, subcategory_id: int, owner: str) -> Subcategory:
        self._registry.require(category_id)
        if subcategory_id is None:
            raise ValidationError("Sous-categorie manquante")
        subcategory = self._subcategory_repo.get_by_id(subcategory_id)
        if subcategory is None or (
            subcategory.owner is not None and subcategory.owner != owner
        ):
            raise ValidationError(f"Sous-categorie inconnue : {subcategory_id}")
        if subcategory.category_id != category_id:
            raise ValidationError(
                f"La sous-categorie '{subcategory.name}' n'appartient pas "
                f"a la categorie {category_id}"
            )
        return subcategory

    def _owned(self, tag_id: int, owner: str) -> Tag:
        tag = self._repo.get_by_id(tag_id)
        if tag is None or tag.owner != owner:
            raise NotFoundError("Tag", tag_id)
        return tag

    def _ensure_name_free(
        self, owner: str, category_id: int, subcategory_id: int, name: str,
        current_id: Optional[int] = None,
    ) -> None:
        existing = self._repo.find_by_name(owner, category_id, subcategory_id, name)
        if existing is not None and existing.id != current_id:
            raise DuplicateNameError(f"Un tag nomme '{existing.name}' existe deja ici")

    # ------------------------------------------------------------------
    # Ecritures
    # ------------------------------------------------------------------

    def create(
        self,
        category_id: int,
        subcategory_id: int,
        name: str,
        description: Optional[str] = None,
        color: Optional[str] = None,
        is_public: bool = False,
    ) -> Tag:
        """
        Cree un tag.

        Args :
            category_id : Categorie du tag
            subcategory_id : Sous-categorie (de la meme categorie)
            name : Nom du tag
            description : Description optionnelle
            color : Couleur #RRGGBB, tiree de la palette si absente
            is_public : Tag utilisable par les autres utilisateurs

        Retourne :
            Le tag cree, usage 0

        Raises :
            ValidationError : categorie, sous-categorie, nom ou couleur invalide
            DuplicateNameError : nom deja utilise dans la sous-categorie
        """
        owner = self._identity.require_owner()
        self._require_subcategory(category_id, subcategory_id, owner)
        cleaned = _clean_name(name)
        normalized_color = normalize_color(color)
        self._ensure_name_free(owner, category_id, subcategory_id, cleaned)

        tag = self._repo.save(
            Tag(
                category_id=category_id,
                subcategory_id=subcategory_id,
                name=cleaned,
                description=_clean_description(description),
                color=normalized_color,
                is_public=is_public,
                owner=owner,
            )
        )
        logger.info("Tag cree : {} (id {}, sous-categorie {})", tag.name, tag.id, subcategory_id)
        return tag

    def create_many(self, drafts: list[TagDraft]) -> list[Tag]:
        """
        Cree plusieurs tags.

        Tous les brouillons sont valides avant la premiere ecriture. Un nom
        deja present (en base ou plus tot dans le lot) n'est pas une erreur :
        le tag existant est retourne a sa place.

        Retourne :
            Un tag par brouillon, dans l'ordre des brouillons
        """
        owner = self._identity.require_owner()
        prepared = []
        for draft in drafts:
            self._require_subcategory(draft.category_id, draft.subcategory_id, owner)
            prepared.append(
                (draft, _clean_name(draft.name), normalize_color(draft.color))
            )

        results: list[Tag] = []
        created = 0
        for draft, name, color in prepared:
            existing = self._repo.find_by_name(
                owner, draft.category_id, draft.subcategory_id, name
            )
            if existing is not None:
                results.append(existing)
                continue
            results.append(
                self._repo.save(
                    Tag(
                        category_id=draft.category_id,
                        subcategory_id=draft.subcategory_id,
                        name=name,
                        description=_clean_description(draft.description),
                        color=color,
                        is_public=draft.is_public,
                        owner=owner,
                    )
                )
            )
            created += 1
        logger.info("{} tag(s) crees sur {} demandes", created, len(drafts))
        return self._usage.annotate_tags(results)

    def update(
        self,
        tag_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> Tag:
        """
        Modifie un tag de l'utilisateur.

        Les champs a None sont conserves ; une description vide l'efface.

        Raises :
            NotFoundError : tag inconnu ou d'un autre utilisateur
            ValidationError : nom vide ou couleur invalide
            DuplicateNameError : nouveau nom deja utilise
        """
        owner = self._identity.require_owner()
        tag = self._owned(tag_id, owner)
        if name is not None:
            cleaned = _clean_name(name)
            self._ensure_name_free(owner, tag.category_id, tag.subcategory_id, cleaned, tag.id)
            tag.name = cleaned
        if description is not None:
            tag.description = _clean_description(description)
        if color is not None:
            tag.color = normalize_color(color)
        if is_public is not None:
            tag.is_public = is_public

        updated = self._repo.save(tag)
        logger.info("Tag modifie : {} (id {})", updated.name, updated.id)
        return self._usage.annotate_tag(updated)

    def delete(self, tag_id: int) -> int:
        """
        Supprime un tag et toutes ses associations.

        Retourne :
            Nombre d'associations supprimees avec le tag

        Raises :
            NotFoundError : tag inconnu ou d'un autre utilisateur
        """
        owner = self._identity.require_owner()
        tag = self._owned(tag_id, owner)
        removed = self._content_tag_repo.delete_by_tag(tag_id)
        self._repo.delete(tag_id)
        logger.info("Tag supprime : {} (id {}, {} association(s))", tag.name, tag_id, removed)
        return removed

    def merge(self, source_id: int, target_id: int) -> "MergeReport":
        """Fusionne source dans target (voir TagMergeCoordinator)."""
        return self._merge.merge(source_id, target_id)

    def duplicate(self, tag_id: int, new_name: str) -> Tag:
        """
        Copie la definition d'un tag sous un nouveau nom.

        Les associations du tag d'origine ne sont pas copiees.
        """
        owner = self._identity.require_owner()
        source = self._owned(tag_id, owner)
        copy = self.create(
            source.category_id,
            source.subcategory_id,
            new_name,
            description=source.description,
            color=source.color,
            is_public=source.is_public,
        )
        logger.debug("Tag {} duplique en {}", tag_id, copy.id)
        return copy

    # ------------------------------------------------------------------
    # Lectures
    # ------------------------------------------------------------------

    def get(self, tag_id: int) -> Tag:
        """Retourne un tag de l'utilisateur, ou un tag public, avec son usage."""
        owner = self._identity.require_owner()
        tag = self._repo.get_by_id(tag_id)
        if tag is None or (tag.owner != owner and not tag.is_public):
            raise NotFoundError("Tag", tag_id)
        return self._usage.annotate_tag(tag)

    def search(self, query: str) -> list[Tag]:
        """
        Recherche les tags dont le nom ou la description contient query.

        La recherche ignore la casse et retourne au plus search_limit
        tags, les plus utilises en premier.
        """
        owner = self._identity.require_owner()
        if not (query or "").strip():
            return []
        tags = self._repo.search(owner, query, self._search_limit)
        logger.debug("Recherche '{}' : {} tag(s)", query, len(tags))
        return _by_usage(self._usage.annotate_tags(tags))

    def list_all(self) -> list[Tag]:
        """Liste tous les tags de l'utilisateur, par nom."""
        owner = self._identity.require_owner()
        return self._usage.annotate_tags(self._repo.list_by_owner(owner))

    def list_by_category(self, category_id: int) -> list[Tag]:
        """Liste les tags d'une categorie."""
        owner = self._identity.require_owner()
        self._registry.require(category_id)
        return self._usage.annotate_tags(self._repo.list_by_owner(owner, category_id=category_id))

    def list_by_subcategory(self, subcategory_id: int) -> list[Tag]:
        """Liste les tags d'une sous-categorie."""
        owner = self._identity.require_owner()
        return self._usage.annotate_tags(
            self._repo.list_by_owner(owner, subcategory_id=subcategory_id)
        )

    def most_used(self, limit: Optional[int] = None) -> list[Tag]:
        """Retourne les tags utilises au moins une fois, les plus utilises d'abord."""
        owner = self._identity.require_owner()
        tags = self._usage.annotate_tags(self._repo.list_by_owner(owner))
        used = [tag for tag in _by_usage(tags) if tag.usage_count > 0]
        return used[: limit or self._most_used_limit]
