"""
Chargement du catalogue de sous-categories predefinies.

Le catalogue (cinetag/data/predefined_subcategories.json) decrit pour chaque
sous-categorie sa categorie, son nom, sa visibilite initiale (visible ou
suggested), sa portee de contenu et un eventuel genre dedie.
"""

import json
from pathlib import Path
from typing import Any

from sqlmodel import Session, select

from cinetag.infrastructure.persistence.models import SubcategoryModel, name_key

PREDEFINED_SUBCATEGORIES_FILE = (
    Path(__file__).parent.parent.parent / "data" / "predefined_subcategories.json"
)


def load_predefined_subcategories(path: Path = PREDEFINED_SUBCATEGORIES_FILE) -> list[dict[str, Any]]:
    """Lit le catalogue predefini depuis le fichier JSON."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def seed_predefined_subcategories(
    session: Session, path: Path = PREDEFINED_SUBCATEGORIES_FILE
) -> int:
    """
    Insere les sous-categories predefinies absentes de la base.

    Les lignes deja presentes ne sont pas modifiees : une sous-categorie
    promue (suggested -> visible) garde sa visibilite.

    Args :
        session : Session SQLModel active
        path : Fichier du catalogue

    Retourne :
        Le nombre de lignes inserees
    """
    existing = set(
        session.exec(
            select(SubcategoryModel.id).where(SubcategoryModel.owner.is_(None))
        ).all()
    )

    inserted = 0
    for row in load_predefined_subcategories(path):
        if row["id"] in existing:
            continue
        session.add(
            SubcategoryModel(
                id=row["id"],
                category_id=row["category_id"],
                name=row["name"],
                name_key=name_key(row["name"]),
                visibility=row["visibility"],
                content_scope=row["content_scope"],
                genre_specific=row.get("genre_specific"),
                owner=None,
            )
        )
        inserted += 1

    if inserted:
        session.commit()
    return inserted
