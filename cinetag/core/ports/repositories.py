"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) definissant les contrats pour la persistance
de la taxonomie. Les implementations (adaptateurs) fournissent le stockage
concret (SQLite via SQLModel, mocks pour les tests).

Les repositories ne portent aucune regle metier : les controles d'unicite
applicatifs, de propriete et de coherence vivent dans les stores. Ils
traduisent en revanche les violations de contraintes du stockage en
erreurs typees du domaine.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from cinetag.core.entities import ContentAssociation, Subcategory, Tag, TagUsageStats
from cinetag.core.value_objects import ContentKey, ContentType


class ISubcategoryRepository(ABC):
    """
    Interface de stockage des sous-categories.

    Les sous-categories predefinies (owner None) sont visibles de tous ;
    les sous-categories personnalisees seulement de leur proprietaire.
    """

    @abstractmethod
    def get_by_id(self, subcategory_id: int) -> Optional[Subcategory]:
        """Recupere une sous-categorie par son ID."""
        ...

    @abstractmethod
    def find_by_name(self, category_id: int, name: str, owner: str) -> Optional[Subcategory]:
        """
        Recherche une sous-categorie par nom, sans tenir compte de la casse.

        Seules les sous-categories predefinies et celles de owner sont considerees.
        """
        ...

    @abstractmethod
    def list_for_owner(self, owner: str, category_id: Optional[int] = None) -> list[Subcategory]:
        """Liste les sous-categories predefinies et celles de owner, triees par nom."""
        ...

    @abstractmethod
    def save(self, subcategory: Subcategory) -> Subcategory:
        """
        Sauvegarde une sous-categorie (insertion ou mise a jour).

        Raises :
            DuplicateNameError : si le stockage rejette un nom deja utilise
        """
        ...

    @abstractmethod
    def delete(self, subcategory_id: int) -> bool:
        """Supprime une sous-categorie. Retourne True si supprimee."""
        ...


class ITagRepository(ABC):
    """
    Interface de stockage des tags.

    Definit les operations pour persister et recuperer les entites Tag.
    """

    @abstractmethod
    def get_by_id(self, tag_id: int) -> Optional[Tag]:
        """Recupere un tag par son ID."""
        ...

    @abstractmethod
    def find_by_name(
        self, owner: str, category_id: int, subcategory_id: int, name: str
    ) -> Optional[Tag]:
        """Recherche un tag de owner par nom (sans casse) dans une sous-categorie."""
        ...

    @abstractmethod
    def list_by_owner(
        self,
        owner: str,
        category_id: Optional[int] = None,
        subcategory_id: Optional[int] = None,
    ) -> list[Tag]:
        """Liste les tags de owner, avec filtrage optionnel, tries par nom."""
        ...

    @abstractmethod
    def search(self, owner: str, query: str, limit: int) -> list[Tag]:
        """
        Recherche sans casse sur le nom et la description.

        Les plus utilises d'abord ; limit s'applique apres ce tri.
        """
        ...

    @abstractmethod
    def count_by_subcategories(self, subcategory_ids: Iterable[int]) -> dict[int, int]:
        """Compte les tags referencant chaque sous-categorie."""
        ...

    @abstractmethod
    def save(self, tag: Tag) -> Tag:
        """
        Sauvegarde un tag (insertion ou mise a jour).

        Raises :
            DuplicateNameError : si le stockage rejette un nom deja utilise
        """
        ...

    @abstractmethod
    def delete(self, tag_id: int) -> bool:
        """Supprime un tag (sans ses associations). Retourne True si supprime."""
        ...


class IContentTagRepository(ABC):
    """
    Interface de stockage des associations tag/contenu.

    Toutes les recherches par ContentKey comparent la portee d'episode de
    maniere exacte : portee nulle et portee d'episode ne se confondent pas.
    """

    @abstractmethod
    def get_by_id(self, association_id: int) -> Optional[ContentAssociation]:
        """Recupere une association par son ID."""
        ...

    @abstractmethod
    def find(self, owner: str, tag_id: int, key: ContentKey) -> Optional[ContentAssociation]:
        """Recupere l'association correspondant exactement a la cle composite."""
        ...

    @abstractmethod
    def list_by_tag(self, tag_id: int, owner: Optional[str] = None) -> list[ContentAssociation]:
        """Liste les associations d'un tag, les plus recentes en premier."""
        ...

    @abstractmethod
    def list_by_content(self, owner: str, key: ContentKey) -> list[ContentAssociation]:
        """Liste les associations posees exactement a cette portee."""
        ...

    @abstractmethod
    def list_by_item(
        self, owner: str, content_id: int, content_type: ContentType
    ) -> list[ContentAssociation]:
        """Liste les associations d'un contenu, toutes portees confondues."""
        ...

    @abstractmethod
    def list_by_tags(
        self,
        owner: str,
        tag_ids: Iterable[int],
        content_type: Optional[ContentType] = None,
    ) -> list[ContentAssociation]:
        """Liste les associations de owner portant l'un des tags."""
        ...

    @abstractmethod
    def add(self, association: ContentAssociation) -> ContentAssociation:
        """
        Insere une association.

        Raises :
            DuplicateAssociationError : si la cle composite existe deja
        """
        ...

    @abstractmethod
    def add_many(self, associations: list[ContentAssociation]) -> list[ContentAssociation]:
        """
        Insere un lot d'associations en une seule transaction.

        Raises :
            DuplicateAssociationError : si une cle existe deja (rien n'est insere)
        """
        ...

    @abstractmethod
    def update(self, association: ContentAssociation) -> ContentAssociation:
        """
        Met a jour une association (tag et metadonnees).

        Raises :
            DuplicateAssociationError : si la nouvelle cle existe deja
            NotFoundError : si l'association n'existe plus
        """
        ...

    @abstractmethod
    def delete(self, association_id: int) -> bool:
        """Supprime une association. Retourne True si supprimee."""
        ...

    @abstractmethod
    def delete_by_content(self, owner: str, key: ContentKey) -> int:
        """Supprime les associations posees exactement a cette portee."""
        ...

    @abstractmethod
    def delete_by_item(self, owner: str, content_id: int, content_type: ContentType) -> int:
        """Supprime les associations d'un contenu, toutes portees confondues."""
        ...

    @abstractmethod
    def delete_by_tag(self, tag_id: int) -> int:
        """Supprime toutes les associations d'un tag, tous utilisateurs confondus."""
        ...

    @abstractmethod
    def count_by_tags(self, tag_ids: Iterable[int]) -> dict[int, int]:
        """Compte les associations de chaque tag."""
        ...

    @abstractmethod
    def count_by_owner(self, owner: str) -> int:
        """Compte les associations posees par owner."""
        ...

    @abstractmethod
    def usage_breakdown(self, tag_id: int) -> TagUsageStats:
        """Repartit les associations d'un tag entre films, series et episodes."""
        ...
