"""
Cycle de vie des sous-categories.

Les sous-categories predefinies (owner None) sont partagees par tous les
utilisateurs et passent de "suggested" a "visible" par promotion. Les
sous-categories personnalisees sont toujours "custom" et n'appartiennent
qu'a leur createur.

Regles :
- nom unique (sans casse) dans une categorie, parmi les predefinies et
  les personnalisees de l'utilisateur
- seule une sous-categorie personnalisee, possedee et inutilisee peut
  etre supprimee
"""

from dataclasses import replace
from typing import Optional

from loguru import logger

from cinetag.core.categories import CategoryRegistry
from cinetag.core.entities import Subcategory
from cinetag.core.errors import (
    DuplicateNameError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from cinetag.core.ports.identity import IIdentityProvider
from cinetag.core.ports.repositories import ISubcategoryRepository
from cinetag.core.value_objects import ContentScope, SubcategoryFilter, Visibility
from cinetag.services.usage_counter import UsageCounter


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Le nom de la sous-categorie est obligatoire")
    return cleaned


class SubcategoryStore:
    """
    Gestion des sous-categories pour l'utilisateur courant.

    Chaque operation commence par resoudre l'utilisateur via le port
    d'identite et echoue avec AuthenticationRequired s'il est absent.
    """

    def __init__(
        self,
        subcategory_repo: ISubcategoryRepository,
        identity: IIdentityProvider,
        registry: CategoryRegistry,
        usage_counter: UsageCounter,
    ) -> None:
        self._repo = subcategory_repo
        self._identity = identity
        self._registry = registry
        self._usage = usage_counter

    def _visible(self, subcategory_id: int, owner: str) -> Subcategory:
        subcategory = self._repo.get_by_id(subcategory_id)
        if subcategory is None or (
            subcategory.owner is not None and subcategory.owner != owner
        ):
            raise NotFoundError("Sous-categorie", subcategory_id)
        return subcategory

    def _owned_custom(self, subcategory_id: int, owner: str) -> Subcategory:
        subcategory = self._repo.get_by_id(subcategory_id)
        if subcategory is None or not subcategory.is_custom or subcategory.owner != owner:
            raise NotFoundError("Sous-categorie personnalisee", subcategory_id)
        return subcategory

    def _ensure_name_free(
        self, category_id: int, name: str, owner: str, current_id: Optional[int] = None
    ) -> None:
        existing = self._repo.find_by_name(category_id, name, owner)
        if existing is not None and existing.id != current_id:
            raise DuplicateNameError(
                f"La sous-categorie '{existing.name}' existe deja dans la categorie {category_id}"
            )

    def create_custom(
        self,
        category_id: int,
        name: str,
        content_scope: ContentScope = ContentScope.BOTH,
        genre_specific: Optional[str] = None,
    ) -> Subcategory:
        """
        Cree une sous-categorie personnalisee.

        Args :
            category_id : Categorie parente
            name : Nom de la sous-categorie
            content_scope : Types de contenu acceptes
            genre_specific : Genre auquel la sous-categorie est dediee

        Retourne :
            La sous-categorie creee (custom, usage 0)

        Raises :
            ValidationError : categorie inconnue ou nom vide
            DuplicateNameError : nom deja utilise dans la categorie
        """
        owner = self._identity.require_owner()
        self._registry.require(category_id)
        cleaned = _clean_name(name)
        self._ensure_name_free(category_id, cleaned, owner)

        created = self._repo.save(
            Subcategory(
                category_id=category_id,
                name=cleaned,
                visibility=Visibility.CUSTOM,
                content_scope=ContentScope(content_scope),
                owner=owner,
                genre_specific=genre_specific,
            )
        )
        logger.info(
            "Sous-categorie personnalisee creee : {} (categorie {}, id {})",
            created.name,
            category_id,
            created.id,
        )
        return replace(created, usage_count=0)

    def promote_suggested(self, subcategory_id: int) -> Subcategory:
        """
        Rend visible une sous-categorie suggeree.

        Sans effet sur une sous-categorie deja visible. La promotion modifie
        la ligne predefinie partagee : elle vaut pour tous les utilisateurs.

        Raises :
            NotFoundError : sous-categorie inconnue ou d'un autre utilisateur
            ValidationError : sous-categorie personnalisee
        """
        owner = self._identity.require_owner()
        subcategory = self._visible(subcategory_id, owner)
        if subcategory.is_custom:
            raise ValidationError(
                f"La sous-categorie personnalisee '{subcategory.name}' ne peut pas etre promue"
            )
        if subcategory.visibility == Visibility.SUGGESTED:
            subcategory.visibility = Visibility.VISIBLE
            subcategory = self._repo.save(subcategory)
            logger.info("Sous-categorie promue : {} (id {})", subcategory.name, subcategory.id)
        return self._usage.annotate_subcategories([subcategory])[0]

    def delete(self, subcategory_id: int) -> None:
        """
        Supprime une sous-categorie personnalisee inutilisee.

        Raises :
            NotFoundError : sous-categorie inconnue, predefinie ou d'un autre utilisateur
            ReferentialIntegrityError : des tags referencent encore la sous-categorie
        """
        owner = self._identity.require_owner()
        subcategory = self._owned_custom(subcategory_id, owner)
        usage = self._usage.subcategory_usage(subcategory_id)
        if usage > 0:
            raise ReferentialIntegrityError(
                f"La sous-categorie '{subcategory.name}' est utilisee par {usage} tag(s)",
                usage_count=usage,
            )
        self._repo.delete(subcategory_id)
        logger.info("Sous-categorie supprimee : {} (id {})", subcategory.name, subcategory_id)

    def list_by_category(
        self, category_id: int, filter: SubcategoryFilter = SubcategoryFilter.ALL
    ) -> list[Subcategory]:
        """
        Liste les sous-categories d'une categorie avec leur usage.

        Args :
            category_id : Categorie a lister
            filter : visible, suggested, custom ou all

        Retourne :
            Les sous-categories predefinies et celles de l'utilisateur,
            triees par nom
        """
        owner = self._identity.require_owner()
        self._registry.require(category_id)
        rows = self._repo.list_for_owner(owner, category_id)
        wanted = SubcategoryFilter(filter)
        if wanted is not SubcategoryFilter.ALL:
            rows = [row for row in rows if row.visibility.value == wanted.value]
        logger.debug(
            "{} sous-categories ({}) dans la categorie {}", len(rows), wanted.value, category_id
        )
        return self._usage.annotate_subcategories(rows)

    def list_all(self) -> list[Subcategory]:
        """Liste toutes les sous-categories accessibles, par categorie puis nom."""
        owner = self._identity.require_owner()
        return self._usage.annotate_subcategories(self._repo.list_for_owner(owner))

    def get(self, subcategory_id: int) -> Subcategory:
        """Retourne une sous-categorie accessible, avec son usage."""
        owner = self._identity.require_owner()
        subcategory = self._visible(subcategory_id, owner)
        return self._usage.annotate_subcategories([subcategory])[0]

    def update(
        self,
        subcategory_id: int,
        name: Optional[str] = None,
        content_scope: Optional[ContentScope] = None,
    ) -> Subcategory:
        """
        Renomme une sous-categorie personnalisee ou change sa portee.

        Raises :
            NotFoundError : sous-categorie non personnalisee ou d'un autre utilisateur
            ValidationError : nom vide
            DuplicateNameError : nouveau nom deja utilise dans la categorie
        """
        owner = self._identity.require_owner()
        subcategory = self._owned_custom(subcategory_id, owner)
        if name is not None:
            cleaned = _clean_name(name)
            self._ensure_name_free(subcategory.category_id, cleaned, owner, subcategory.id)
            subcategory.name = cleaned
        if content_scope is not None:
            subcategory.content_scope = ContentScope(content_scope)
        updated = self._repo.save(subcategory)
        logger.info("Sous-categorie modifiee : {} (id {})", updated.name, updated.id)
        return self._usage.annotate_subcategories([updated])[0]

    def move(self, subcategory_id: int, new_category_id: int) -> Subcategory:
        """
        Deplace une sous-categorie personnalisee vers une autre categorie.

        Refuse tant que des tags la referencent, puisque leur categorie
        ne correspondrait plus a celle de leur sous-categorie.

        Raises :
            NotFoundError : sous-categorie non personnalisee ou d'un autre utilisateur
            ValidationError : categorie cible inconnue
            ReferentialIntegrityError : des tags referencent la sous-categorie
            DuplicateNameError : nom deja utilise dans la categorie cible
        """
        owner = self._identity.require_owner()
        subcategory = self._owned_custom(subcategory_id, owner)
        self._registry.require(new_category_id)
        if subcategory.category_id == new_category_id:
            return self._usage.annotate_subcategories([subcategory])[0]

        usage = self._usage.subcategory_usage(subcategory_id)
        if usage > 0:
            raise ReferentialIntegrityError(
                f"Impossible de deplacer '{subcategory.name}' : {usage} tag(s) la referencent",
                usage_count=usage,
            )
        self._ensure_name_free(new_category_id, subcategory.name, owner, subcategory.id)

        previous = subcategory.category_id
        subcategory.category_id = new_category_id
        moved = self._repo.save(subcategory)
        logger.info(
            "Sous-categorie {} deplacee de la categorie {} vers {}",
            moved.id,
            previous,
            new_category_id,
        )
        return replace(moved, usage_count=0)
