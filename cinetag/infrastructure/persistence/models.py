"""
Modeles SQLModel pour la base de donnees CineTag.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- subcategories: Sous-categories predefinies (owner NULL) et personnalisees
- tags: Tags utilisateur
- content_tags: Associations tag/contenu, eventuellement limitees a un episode

Colonnes derivees, toujours calculees en Python a l'ecriture :
- name_key : nom normalise par name_key(), porte les contraintes d'unicite
  sans casse. SQLite lower() ne replie que l'ASCII ("Éclairage" et
  "éclairage" resteraient distincts).
- description_key : description normalisee, pour la recherche sans casse
- scope_key : "" ou "S01E03" ; season_number/episode_number NULL ne
  pourraient pas participer a une contrainte UNIQUE (NULL distincts en SQL)
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Index, SQLModel


def name_key(name: str) -> str:
    """Cle de comparaison sans casse, Unicode compris."""
    return name.strip().lower()


def text_key(text: str | None) -> str | None:
    if text is None:
        return None
    return text.lower()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SubcategoryModel(SQLModel, table=True):
    """
    Modele representant une sous-categorie.

    Les lignes predefinies conservent les identifiants du catalogue
    (1 a 286) ; les lignes personnalisees sont numerotees a la suite.
    La contrainte ne couvre que les lignes d'un meme owner : un doublon
    entre ligne personnalisee et ligne predefinie (owner NULL) est refuse
    par le store.
    """

    __tablename__ = "subcategories"
    __table_args__ = (
        Index("ix_subcategories_category_owner", "category_id", "owner"),
        UniqueConstraint(
            "category_id", "owner", "name_key",
            name="uq_subcategories_owner_name",
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    category_id: int = Field(index=True)
    name: str
    name_key: str  # name_key(name)
    visibility: str = Field(default="custom", index=True)  # visible | suggested | custom
    content_scope: str = Field(default="both")  # movie | tv | both
    genre_specific: str | None = None
    owner: str | None = Field(default=None, index=True)  # NULL = predefinie
    created_at: datetime | None = Field(default_factory=utc_now)


class TagModel(SQLModel, table=True):
    """
    Modele representant un tag utilisateur.

    Unicite sans casse du nom par (owner, category_id, subcategory_id).
    """

    __tablename__ = "tags"
    __table_args__ = (
        UniqueConstraint(
            "owner", "category_id", "subcategory_id", "name_key",
            name="uq_tags_owner_scope_name",
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    category_id: int = Field(index=True)
    subcategory_id: int = Field(foreign_key="subcategories.id", index=True)
    name: str
    name_key: str  # name_key(name)
    description: str | None = None
    description_key: str | None = None  # text_key(description)
    color: str = Field(default="#3B82F6")
    is_public: bool = Field(default=False)
    owner: str = Field(index=True)
    created_at: datetime | None = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default_factory=utc_now)


class ContentTagModel(SQLModel, table=True):
    """
    Modele representant l'association d'un tag a un contenu.

    Lie a un tag via tag_id. content_id est une cle etrangere opaque vers
    le catalogue de contenus, qui n'est pas gere ici.
    """

    __tablename__ = "content_tags"
    __table_args__ = (
        UniqueConstraint(
            "owner", "tag_id", "content_id", "content_type", "scope_key",
            name="uq_content_tags_scope",
        ),
        Index("ix_content_tags_content", "content_id", "content_type"),
    )

    id: int | None = Field(default=None, primary_key=True)
    tag_id: int = Field(foreign_key="tags.id", index=True)
    content_id: int
    content_type: str  # movie | tv
    season_number: int | None = None
    episode_number: int | None = None
    scope_key: str = Field(default="")  # "" = niveau film/serie, sinon S01E03
    start_time: str | None = None  # HH:MM:SS
    end_time: str | None = None  # HH:MM:SS
    notes: str | None = None
    owner: str = Field(index=True)
    created_at: datetime | None = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default_factory=utc_now)
