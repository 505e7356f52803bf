"""
Implementation SQLModel du repository Subcategory.

Implemente l'interface ISubcategoryRepository pour la persistance des
sous-categories dans la base de donnees SQLite via SQLModel.
"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from cinetag.core.entities import Subcategory
from cinetag.core.errors import DuplicateNameError
from cinetag.core.ports.repositories import ISubcategoryRepository
from cinetag.core.value_objects import ContentScope, Visibility
from cinetag.infrastructure.persistence.models import SubcategoryModel, name_key


class SQLModelSubcategoryRepository(ISubcategoryRepository):
    """
    Repository SQLModel pour les sous-categories.

    Implemente ISubcategoryRepository avec conversion bidirectionnelle
    entre l'entite Subcategory (domaine) et SubcategoryModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: SubcategoryModel) -> Subcategory:
        """Convertit un modele DB en entite domaine."""
        return Subcategory(
            id=model.id,
            category_id=model.category_id,
            name=model.name,
            visibility=Visibility(model.visibility),
            content_scope=ContentScope(model.content_scope),
            owner=model.owner,
            genre_specific=model.genre_specific,
            created_at=model.created_at,
        )

    def _visible_to(self, owner: str):
        """Condition : sous-categorie predefinie ou appartenant a owner."""
        return or_(SubcategoryModel.owner.is_(None), SubcategoryModel.owner == owner)

    def get_by_id(self, subcategory_id: int) -> Optional[Subcategory]:
        """Recupere une sous-categorie par son ID."""
        model = self._session.get(SubcategoryModel, subcategory_id)
        if model:
            return self._to_entity(model)
        return None

    def find_by_name(self, category_id: int, name: str, owner: str) -> Optional[Subcategory]:
        """Recherche une sous-categorie par nom, sans tenir compte de la casse."""
        statement = (
            select(SubcategoryModel)
            .where(SubcategoryModel.category_id == category_id)
            .where(SubcategoryModel.name_key == name_key(name))
            .where(self._visible_to(owner))
        )
        model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def list_for_owner(self, owner: str, category_id: Optional[int] = None) -> list[Subcategory]:
        """Liste les sous-categories predefinies et celles de owner, triees par nom."""
        statement = select(SubcategoryModel).where(self._visible_to(owner))
        if category_id is not None:
            statement = statement.where(SubcategoryModel.category_id == category_id)
        statement = statement.order_by(SubcategoryModel.category_id, SubcategoryModel.name)
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def save(self, subcategory: Subcategory) -> Subcategory:
        """Sauvegarde une sous-categorie (insertion ou mise a jour)."""
        existing = None
        if subcategory.id is not None:
            existing = self._session.get(SubcategoryModel, subcategory.id)

        if existing:
            # Mise a jour
            existing.category_id = subcategory.category_id
            existing.name = subcategory.name
            existing.name_key = name_key(subcategory.name)
            existing.visibility = subcategory.visibility.value
            existing.content_scope = subcategory.content_scope.value
            existing.genre_specific = subcategory.genre_specific
            model = existing
        else:
            # Insertion
            model = SubcategoryModel(
                category_id=subcategory.category_id,
                name=subcategory.name,
                name_key=name_key(subcategory.name),
                visibility=subcategory.visibility.value,
                content_scope=subcategory.content_scope.value,
                genre_specific=subcategory.genre_specific,
                owner=subcategory.owner,
            )
        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise DuplicateNameError(
                f"Une sous-categorie nommee '{subcategory.name}' existe deja ici"
            ) from exc
        self._session.refresh(model)
        return self._to_entity(model)

    def delete(self, subcategory_id: int) -> bool:
        """Supprime une sous-categorie. Retourne True si supprimee."""
        model = self._session.get(SubcategoryModel, subcategory_id)
        if model is None:
            return False
        self._session.delete(model)
        self._session.commit()
        return True
