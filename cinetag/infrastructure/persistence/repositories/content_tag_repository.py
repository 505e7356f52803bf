"""
Implementation SQLModel du repository des associations tag/contenu.

Implemente l'interface IContentTagRepository. La portee d'episode est
comparee via la colonne scope_key, ce qui rend la correspondance exacte :
"" (niveau film/serie) ne correspond jamais a "S01E03" et inversement.

Les violations de la contrainte uq_content_tags_scope sont traduites en
DuplicateAssociationError apres rollback de la session.
"""

from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from cinetag.core.entities import ContentAssociation, TagUsageStats
from cinetag.core.errors import DuplicateAssociationError, NotFoundError
from cinetag.core.ports.repositories import IContentTagRepository
from cinetag.core.value_objects import (
    AssociationMetadata,
    ContentKey,
    ContentType,
    EpisodeScope,
    scope_key,
)
from cinetag.infrastructure.persistence.models import ContentTagModel, utc_now


class SQLModelContentTagRepository(IContentTagRepository):
    """
    Repository SQLModel pour les associations tag/contenu.

    Implemente IContentTagRepository avec conversion bidirectionnelle
    entre ContentAssociation (domaine) et ContentTagModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: ContentTagModel) -> ContentAssociation:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele ContentTagModel depuis la DB

        Retourne :
            L'entite ContentAssociation correspondante
        """
        episode_scope = None
        if model.season_number is not None and model.episode_number is not None:
            episode_scope = EpisodeScope(model.season_number, model.episode_number)
        return ContentAssociation(
            id=model.id,
            tag_id=model.tag_id,
            content_id=model.content_id,
            content_type=ContentType(model.content_type),
            episode_scope=episode_scope,
            metadata=AssociationMetadata(
                start_time=model.start_time,
                end_time=model.end_time,
                notes=model.notes,
            ),
            owner=model.owner,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: ContentAssociation) -> ContentTagModel:
        """
        Convertit une entite domaine en modele DB.

        Args :
            entity : L'entite ContentAssociation du domaine

        Retourne :
            Le modele ContentTagModel pour la persistance
        """
        scope = entity.episode_scope
        return ContentTagModel(
            tag_id=entity.tag_id,
            content_id=entity.content_id,
            content_type=entity.content_type.value,
            season_number=scope.season if scope else None,
            episode_number=scope.episode if scope else None,
            scope_key=scope_key(scope),
            start_time=entity.metadata.start_time,
            end_time=entity.metadata.end_time,
            notes=entity.metadata.notes,
            owner=entity.owner,
        )

    @staticmethod
    def _key_filter(statement, key: ContentKey):
        return (
            statement.where(ContentTagModel.content_id == key.content_id)
            .where(ContentTagModel.content_type == key.content_type.value)
            .where(ContentTagModel.scope_key == scope_key(key.episode_scope))
        )

    def _commit_or_duplicate(self, message: str) -> None:
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise DuplicateAssociationError(message) from exc

    def get_by_id(self, association_id: int) -> Optional[ContentAssociation]:
        """Recupere une association par son ID."""
        model = self._session.get(ContentTagModel, association_id)
        if model:
            return self._to_entity(model)
        return None

    def find(self, owner: str, tag_id: int, key: ContentKey) -> Optional[ContentAssociation]:
        """Recupere l'association correspondant exactement a la cle composite."""
        statement = select(ContentTagModel).where(ContentTagModel.owner == owner)
        statement = self._key_filter(statement.where(ContentTagModel.tag_id == tag_id), key)
        model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def list_by_tag(self, tag_id: int, owner: Optional[str] = None) -> list[ContentAssociation]:
        """Liste les associations d'un tag, les plus recentes en premier."""
        statement = select(ContentTagModel).where(ContentTagModel.tag_id == tag_id)
        if owner is not None:
            statement = statement.where(ContentTagModel.owner == owner)
        statement = statement.order_by(
            ContentTagModel.created_at.desc(), ContentTagModel.id.desc()
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def list_by_content(self, owner: str, key: ContentKey) -> list[ContentAssociation]:
        """Liste les associations posees exactement a cette portee."""
        statement = self._key_filter(
            select(ContentTagModel).where(ContentTagModel.owner == owner), key
        ).order_by(ContentTagModel.id)
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def list_by_item(
        self, owner: str, content_id: int, content_type: ContentType
    ) -> list[ContentAssociation]:
        """Liste les associations d'un contenu, toutes portees confondues."""
        statement = (
            select(ContentTagModel)
            .where(ContentTagModel.owner == owner)
            .where(ContentTagModel.content_id == content_id)
            .where(ContentTagModel.content_type == content_type.value)
            .order_by(ContentTagModel.scope_key, ContentTagModel.id)
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def list_by_tags(
        self,
        owner: str,
        tag_ids: Iterable[int],
        content_type: Optional[ContentType] = None,
    ) -> list[ContentAssociation]:
        """Liste les associations de owner portant l'un des tags."""
        ids = list(tag_ids)
        if not ids:
            return []
        statement = (
            select(ContentTagModel)
            .where(ContentTagModel.owner == owner)
            .where(ContentTagModel.tag_id.in_(ids))
        )
        if content_type is not None:
            statement = statement.where(ContentTagModel.content_type == content_type.value)
        statement = statement.order_by(ContentTagModel.id)
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def add(self, association: ContentAssociation) -> ContentAssociation:
        """Insere une association."""
        model = self._to_model(association)
        self._session.add(model)
        self._commit_or_duplicate(
            f"Le tag {association.tag_id} est deja applique a {association.content_key.label}"
        )
        self._session.refresh(model)
        return self._to_entity(model)

    def add_many(self, associations: list[ContentAssociation]) -> list[ContentAssociation]:
        """Insere un lot d'associations en une seule transaction."""
        models = [self._to_model(association) for association in associations]
        self._session.add_all(models)
        self._commit_or_duplicate("Au moins un tag du lot est deja applique a ce contenu")
        for model in models:
            self._session.refresh(model)
        return [self._to_entity(model) for model in models]

    def update(self, association: ContentAssociation) -> ContentAssociation:
        """Met a jour le tag et les metadonnees d'une association."""
        model = self._session.get(ContentTagModel, association.id)
        if model is None:
            raise NotFoundError("Association", association.id)
        model.tag_id = association.tag_id
        model.start_time = association.metadata.start_time
        model.end_time = association.metadata.end_time
        model.notes = association.metadata.notes
        model.updated_at = utc_now()
        self._session.add(model)
        self._commit_or_duplicate(
            f"Le tag {association.tag_id} est deja applique a {association.content_key.label}"
        )
        self._session.refresh(model)
        return self._to_entity(model)

    def _delete_models(self, models: list[ContentTagModel]) -> int:
        for model in models:
            self._session.delete(model)
        if models:
            self._session.commit()
        return len(models)

    def delete(self, association_id: int) -> bool:
        """Supprime une association. Retourne True si supprimee."""
        model = self._session.get(ContentTagModel, association_id)
        if model is None:
            return False
        return self._delete_models([model]) == 1

    def delete_by_content(self, owner: str, key: ContentKey) -> int:
        """Supprime les associations posees exactement a cette portee."""
        statement = self._key_filter(
            select(ContentTagModel).where(ContentTagModel.owner == owner), key
        )
        return self._delete_models(list(self._session.exec(statement).all()))

    def delete_by_item(self, owner: str, content_id: int, content_type: ContentType) -> int:
        """Supprime les associations d'un contenu, toutes portees confondues."""
        statement = (
            select(ContentTagModel)
            .where(ContentTagModel.owner == owner)
            .where(ContentTagModel.content_id == content_id)
            .where(ContentTagModel.content_type == content_type.value)
        )
        return self._delete_models(list(self._session.exec(statement).all()))

    def delete_by_tag(self, tag_id: int) -> int:
        """Supprime toutes les associations d'un tag, tous utilisateurs confondus."""
        statement = select(ContentTagModel).where(ContentTagModel.tag_id == tag_id)
        return self._delete_models(list(self._session.exec(statement).all()))

    def count_by_tags(self, tag_ids: Iterable[int]) -> dict[int, int]:
        """Compte les associations de chaque tag."""
        ids = list(tag_ids)
        counts = {tag_id: 0 for tag_id in ids}
        if not ids:
            return counts
        statement = (
            select(ContentTagModel.tag_id, func.count(ContentTagModel.id))
            .where(ContentTagModel.tag_id.in_(ids))
            .group_by(ContentTagModel.tag_id)
        )
        for tag_id, count in self._session.exec(statement).all():
            counts[tag_id] = count
        return counts

    def count_by_owner(self, owner: str) -> int:
        """Compte les associations posees par owner."""
        statement = select(func.count(ContentTagModel.id)).where(ContentTagModel.owner == owner)
        return self._session.exec(statement).one()

    def usage_breakdown(self, tag_id: int) -> TagUsageStats:
        """Repartit les associations d'un tag entre films, series et episodes."""
        statement = (
            select(
                ContentTagModel.content_type,
                ContentTagModel.scope_key,
                func.count(ContentTagModel.id),
            )
            .where(ContentTagModel.tag_id == tag_id)
            .group_by(ContentTagModel.content_type, ContentTagModel.scope_key)
        )
        movies = tv_series = tv_episodes = 0
        for content_type, key, count in self._session.exec(statement).all():
            if content_type == ContentType.MOVIE.value:
                movies += count
            elif key == "":
                tv_series += count
            else:
                tv_episodes += count
        return TagUsageStats(
            total=movies + tv_series + tv_episodes,
            movies=movies,
            tv_series=tv_series,
            tv_episodes=tv_episodes,
        )
