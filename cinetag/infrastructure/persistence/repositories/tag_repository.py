"""
Implementation SQLModel du repository Tag.

Implemente l'interface ITagRepository pour la persistance des tags
dans la base de donnees SQLite via SQLModel.
"""

from typing import Iterable, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from cinetag.core.entities import Tag
from cinetag.core.errors import DuplicateNameError
from cinetag.core.ports.repositories import ITagRepository
from cinetag.infrastructure.persistence.models import (
    ContentTagModel,
    TagModel,
    name_key,
    text_key,
    utc_now,
)


class SQLModelTagRepository(ITagRepository):
    """
    Repository SQLModel pour les tags.

    La contrainte uq_tags_owner_scope_name protege l'unicite sans casse
    des noms meme si deux ecritures concurrentes passent la verification
    applicative du store.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: TagModel) -> Tag:
        """Convertit un modele DB en entite domaine."""
        return Tag(
            id=model.id,
            category_id=model.category_id,
            subcategory_id=model.subcategory_id,
            name=model.name,
            description=model.description,
            color=model.color,
            is_public=model.is_public,
            owner=model.owner,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def get_by_id(self, tag_id: int) -> Optional[Tag]:
        """Recupere un tag par son ID."""
        model = self._session.get(TagModel, tag_id)
        if model:
            return self._to_entity(model)
        return None

    def find_by_name(
        self, owner: str, category_id: int, subcategory_id: int, name: str
    ) -> Optional[Tag]:
        """Recherche un tag de owner par nom (sans casse) dans une sous-categorie."""
        statement = (
            select(TagModel)
            .where(TagModel.owner == owner)
            .where(TagModel.category_id == category_id)
            .where(TagModel.subcategory_id == subcategory_id)
            .where(TagModel.name_key == name_key(name))
        )
        model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def list_by_owner(
        self,
        owner: str,
        category_id: Optional[int] = None,
        subcategory_id: Optional[int] = None,
    ) -> list[Tag]:
        """Liste les tags de owner, avec filtrage optionnel, tries par nom."""
        statement = select(TagModel).where(TagModel.owner == owner)
        if category_id is not None:
            statement = statement.where(TagModel.category_id == category_id)
        if subcategory_id is not None:
            statement = statement.where(TagModel.subcategory_id == subcategory_id)
        statement = statement.order_by(TagModel.name_key, TagModel.id)
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def search(self, owner: str, query: str, limit: int) -> list[Tag]:
        """
        Recherche par sous-chaine (sans casse) sur le nom et la description.

        Les tags les plus utilises passent en premier, puis l'ordre par nom ;
        la limite s'applique apres ce tri.
        """
        needle = name_key(query)
        usage = (
            select(
                ContentTagModel.tag_id,
                func.count(ContentTagModel.id).label("usage_count"),
            )
            .group_by(ContentTagModel.tag_id)
            .subquery()
        )
        statement = (
            select(TagModel)
            .outerjoin(usage, usage.c.tag_id == TagModel.id)
            .where(TagModel.owner == owner)
            .where(
                or_(
                    TagModel.name_key.contains(needle, autoescape=True),
                    TagModel.description_key.contains(needle, autoescape=True),
                )
            )
            .order_by(
                func.coalesce(usage.c.usage_count, 0).desc(),
                TagModel.name_key,
                TagModel.id,
            )
            .limit(limit)
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def count_by_subcategories(self, subcategory_ids: Iterable[int]) -> dict[int, int]:
        """Compte les tags referencant chaque sous-categorie."""
        ids = list(subcategory_ids)
        counts = {subcategory_id: 0 for subcategory_id in ids}
        if not ids:
            return counts
        statement = (
            select(TagModel.subcategory_id, func.count(TagModel.id))
            .where(TagModel.subcategory_id.in_(ids))
            .group_by(TagModel.subcategory_id)
        )
        for subcategory_id, count in self._session.exec(statement).all():
            counts[subcategory_id] = count
        return counts

    def save(self, tag: Tag) -> Tag:
        """Sauvegarde un tag (insertion ou mise a jour)."""
        existing = None
        if tag.id is not None:
            existing = self._session.get(TagModel, tag.id)

        if existing:
            existing.category_id = tag.category_id
            existing.subcategory_id = tag.subcategory_id
            existing.name = tag.name
            existing.name_key = name_key(tag.name)
            existing.description = tag.description
            existing.description_key = text_key(tag.description)
            existing.color = tag.color
            existing.is_public = tag.is_public
            existing.updated_at = utc_now()
            model = existing
        else:
            model = TagModel(
                category_id=tag.category_id,
                subcategory_id=tag.subcategory_id,
                name=tag.name,
                name_key=name_key(tag.name),
                description=tag.description,
                description_key=text_key(tag.description),
                color=tag.color,
                is_public=tag.is_public,
                owner=tag.owner,
            )

        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise DuplicateNameError(f"Un tag nomme '{tag.name}' existe deja ici") from exc
        self._session.refresh(model)
        return self._to_entity(model)

    def delete(self, tag_id: int) -> bool:
        """Supprime un tag (sans ses associations). Retourne True si supprime."""
        model = self._session.get(TagModel, tag_id)
        if model is None:
            return False
        self._session.delete(model)
        self._session.commit()
        return True
