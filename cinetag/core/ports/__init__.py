"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le domaine a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

Ports repository : Contrats de persistance des donnees
- ISubcategoryRepository : Stockage des sous-categories
- ITagRepository : Stockage des tags
- IContentTagRepository : Stockage des associations tag/contenu

Port identite : Contrat avec le collaborateur d'authentification
- IIdentityProvider : Utilisateur courant
"""

from cinetag.core.ports.identity import IIdentityProvider
from cinetag.core.ports.repositories import (
    IContentTagRepository,
    ISubcategoryRepository,
    ITagRepository,
)

__all__ = [
    # Repositories
    "ISubcategoryRepository",
    "ITagRepository",
    "IContentTagRepository",
    # Identite
    "IIdentityProvider",
]
