"""
Fusion d'un tag dans un autre.

Chaque association du tag source est soit re-pointee vers le tag cible,
soit supprimee si la cible est deja posee sur le meme contenu (meme
utilisateur, meme portee). Le tag source n'est supprime qu'une fois toutes
ses associations traitees : une fusion interrompue laisse le source en
place et peut etre relancee sans risque.

Apres fusion : usage(cible) = usage(cible) + usage(source) - recouvrement.
"""

from dataclasses import dataclass

from loguru import logger

from cinetag.core.entities import ContentAssociation, Tag
from cinetag.core.errors import DuplicateAssociationError, NotFoundError, ValidationError
from cinetag.core.ports.identity import IIdentityProvider
from cinetag.core.ports.repositories import IContentTagRepository, ITagRepository


@dataclass(frozen=True)
class MergeReport:
    """Bilan d'une fusion.

    Attributes:
        source_id: Tag fusionne (supprime)
        target_id: Tag conserve
        moved: Associations re-pointees vers la cible
        dropped: Associations supprimees car deja presentes sur la cible
    """

    source_id: int
    target_id: int
    moved: int = 0
    dropped: int = 0

    @property
    def total(self) -> int:
        """Nombre d'associations du source traitees."""
        return self.moved + self.dropped


class TagMergeCoordinator:
    """Coordonne la fusion de deux tags de l'utilisateur courant."""

    def __init__(
        self,
        tag_repo: ITagRepository,
        content_tag_repo: IContentTagRepository,
        identity: IIdentityProvider,
    ) -> None:
        self._tag_repo = tag_repo
        self._content_tag_repo = content_tag_repo
        self._identity = identity

    def _owned(self, tag_id: int, owner: str) -> Tag:
        tag = self._tag_repo.get_by_id(tag_id)
        if tag is None or tag.owner != owner:
            raise NotFoundError("Tag", tag_id)
        return tag

    def _resolve(self, association: ContentAssociation, target_id: int) -> bool:
        """
        Traite une association du source.

        Retourne True si elle a ete re-pointee, False si elle a ete supprimee.
        """
        existing = self._content_tag_repo.find(
            association.owner, target_id, association.content_key
        )
        if existing is None:
            association.tag_id = target_id
            try:
                self._content_tag_repo.update(association)
                return True
            except DuplicateAssociationError:
                # La cible a ete posee entre la lecture et l'ecriture
                logger.debug(
                    "Cible deja presente sur {}, association {} supprimee",
                    association.content_key.label,
                    association.id,
                )
        self._content_tag_repo.delete(association.id)
        return False

    def merge(self, source_id: int, target_id: int) -> MergeReport:
        """
        Fusionne le tag source dans le tag cible.

        Args :
            source_id : Tag a absorber puis supprimer
            target_id : Tag conserve

        Retourne :
            MergeReport avec le nombre d'associations deplacees et supprimees

        Raises :
            ValidationError : source et cible identiques
            NotFoundError : un des tags est inconnu ou d'un autre utilisateur
        """
        owner = self._identity.require_owner()
        if source_id == target_id:
            raise ValidationError("Impossible de fusionner un tag avec lui-meme")
        source = self._owned(source_id, owner)
        target = self._owned(target_id, owner)

        associations = self._content_tag_repo.list_by_tag(source_id)
        logger.info(
            "Fusion de '{}' ({}) dans '{}' ({}) : {} association(s)",
            source.name,
            source_id,
            target.name,
            target_id,
            len(associations),
        )

        moved = dropped = 0
        for association in associations:
            try:
                if self._resolve(association, target_id):
                    moved += 1
                else:
                    dropped += 1
            except Exception:
                logger.warning(
                    "Fusion {} -> {} interrompue apres {} association(s), tag source conserve",
                    source_id,
                    target_id,
                    moved + dropped,
                )
                raise

        self._tag_repo.delete(source_id)
        report = MergeReport(source_id=source_id, target_id=target_id, moved=moved, dropped=dropped)
        logger.info(
            "Fusion terminee : {} deplacee(s), {} supprimee(s)", report.moved, report.dropped
        )
        return report
