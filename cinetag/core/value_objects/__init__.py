"""
Objets valeur immutables representant des concepts du domaine sans identite.

Les objets valeur sont definis par leurs attributs plutot que par une identite.
Ils sont immutables et peuvent etre librement partages et compares par valeur.

Exports :
- ContentType : Type de contenu (movie, tv)
- ContentScope : Portee d'une sous-categorie (movie, tv, both)
- Visibility : Etat d'une sous-categorie (visible, suggested, custom)
- SubcategoryFilter : Filtre de listing des sous-categories
- EpisodeScope : Saison + episode restreignant une association
- AssociationMetadata : Debut, fin et notes d'une association
- ContentKey : Cle (contenu, type, portee) d'un contenu tagge
- TAG_COLORS, normalize_color : Palette et validation des couleurs
"""

from cinetag.core.value_objects.tagging import (
    AssociationMetadata,
    ContentKey,
    ContentScope,
    ContentType,
    EpisodeScope,
    SubcategoryFilter,
    Visibility,
    scope_key,
)
from cinetag.core.value_objects.tag_color import (
    TAG_COLORS,
    normalize_color,
    random_color,
)

__all__ = [
    "AssociationMetadata",
    "ContentKey",
    "ContentScope",
    "ContentType",
    "EpisodeScope",
    "SubcategoryFilter",
    "Visibility",
    "scope_key",
    "TAG_COLORS",
    "normalize_color",
    "random_color",
]
