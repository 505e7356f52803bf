"""
Entites metier representant les concepts du domaine de tagging.

Exports:
- Category: Categorie fixe de premier niveau
- Subcategory: Sous-categorie predefinie ou personnalisee
- Tag: Tag utilisateur (feuille de la taxonomie)
- TagDraft: Definition d'un tag a creer en lot
- ContentAssociation: Lien entre un tag et un contenu
- AssignedTag: Tag applique a un contenu avec ses metadonnees
- TagUsageStats: Repartition des usages d'un tag
- LibraryStats: Statistiques globales d'un utilisateur
"""

from cinetag.core.entities.taxonomy import Category, Subcategory, Tag, TagDraft
from cinetag.core.entities.association import (
    AssignedTag,
    ContentAssociation,
    LibraryStats,
    TagUsageStats,
)

__all__ = [
    "Category",
    "Subcategory",
    "Tag",
    "TagDraft",
    "ContentAssociation",
    "AssignedTag",
    "TagUsageStats",
    "LibraryStats",
]
