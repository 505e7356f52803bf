"""
Entites de la taxonomie de tags.

Trois niveaux : Category (fixe, partagee), Subcategory (predefinie ou
creee par l'utilisateur) et Tag (feuille, creee par l'utilisateur).
Les compteurs d'usage sont des valeurs derivees, recalculees a chaque
lecture depuis les associations : ils ne sont jamais persistes.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from cinetag.core.value_objects import ContentScope, Visibility


@dataclass(frozen=True)
class Category:
    """
    Categorie de premier niveau, fixe et commune a tous les utilisateurs.

    Attributes:
        id: Identifiant (1 a 9)
        name: Nom affiche
        icon: Emoji representant la categorie
        description: Resume du perimetre de la categorie
    """

    id: int
    name: str
    icon: str
    description: str = ""


@dataclass
class Subcategory:
    """
    Sous-categorie rattachee a une categorie.

    Les sous-categories predefinies n'ont pas de proprietaire et sont
    partagees ; celles creees par un utilisateur sont toujours CUSTOM.

    Attributes:
        id: Identifiant en base
        category_id: Categorie parente
        name: Nom affiche
        visibility: visible, suggested ou custom
        content_scope: Types de contenu acceptes (movie, tv, both)
        owner: Proprietaire, None pour une sous-categorie predefinie
        genre_specific: Genre auquel la sous-categorie est dediee, le cas echeant
        usage_count: Nombre de tags qui la referencent (derive)
        created_at: Date de creation
    """

    id: Optional[int] = None
    category_id: int = 0
    name: str = ""
    visibility: Visibility = Visibility.CUSTOM
    content_scope: ContentScope = ContentScope.BOTH
    owner: Optional[str] = None
    genre_specific: Optional[str] = None
    usage_count: int = 0
    created_at: Optional[datetime] = None

    @property
    def is_predefined(self) -> bool:
        """Indique si la sous-categorie fait partie du catalogue predefini."""
        return self.owner is None

    @property
    def is_custom(self) -> bool:
        """Indique si la sous-categorie a ete creee par un utilisateur."""
        return self.visibility == Visibility.CUSTOM


@dataclass
class Tag:
    """
    Tag utilisateur, lie a exactement un couple (categorie, sous-categorie).

    Attributes:
        id: Identifiant en base
        category_id: Categorie du tag (egale a celle de sa sous-categorie)
        subcategory_id: Sous-categorie du tag
        name: Nom, unique sans casse pour (owner, category_id, subcategory_id)
        description: Description optionnelle
        color: Couleur #RRGGBB
        is_public: Tag utilisable par les autres utilisateurs
        owner: Proprietaire du tag
        usage_count: Nombre d'associations (derive)
        created_at: Date de creation
        updated_at: Date de derniere modification
    """

    id: Optional[int] = None
    category_id: int = 0
    subcategory_id: int = 0
    name: str = ""
    description: Optional[str] = None
    color: str = "#3B82F6"
    is_public: bool = False
    owner: Optional[str] = None
    usage_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class TagDraft:
    """Definition d'un tag a creer, utilisee pour les creations en lot."""

    category_id: int
    subcategory_id: int
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    is_public: bool = False
