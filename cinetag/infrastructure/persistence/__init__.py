"""
Module de persistance SQLite pour CineTag.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Engines SQLite, session factory, initialisation
- models.py : Modeles SQLModel representant les tables
- seed.py : Chargement du catalogue de sous-categories predefinies
- repositories/ : Implementations des ports de persistance

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    from cinetag.infrastructure.persistence import init_db, get_session

    init_db()  # Cree les tables et le catalogue si necessaire
    session = next(get_session())
"""

from cinetag.infrastructure.persistence.database import (
    get_engine,
    get_session,
    init_db,
    open_session,
)
from cinetag.infrastructure.persistence.models import (
    ContentTagModel,
    SubcategoryModel,
    TagModel,
)

__all__ = [
    "get_engine",
    "get_session",
    "init_db",
    "open_session",
    "SubcategoryModel",
    "TagModel",
    "ContentTagModel",
]
