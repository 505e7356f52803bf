"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans cinetag/core/ports/repositories.py, utilisant SQLModel pour
la persistance SQLite.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from cinetag.infrastructure.persistence.repositories.subcategory_repository import (
    SQLModelSubcategoryRepository,
)
from cinetag.infrastructure.persistence.repositories.tag_repository import (
    SQLModelTagRepository,
)
from cinetag.infrastructure.persistence.repositories.content_tag_repository import (
    SQLModelContentTagRepository,
)

__all__ = [
    "SQLModelSubcategoryRepository",
    "SQLModelTagRepository",
    "SQLModelContentTagRepository",
]
