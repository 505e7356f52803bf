"""
Erreurs typees du domaine de tagging.

Chaque erreur porte un ErrorKind, ce qui permet aux appelants de traiter
tous les echecs par un seul chemin (voir core/result.py) tout en gardant
des exceptions distinctes pour le code interne.

Taxonomie :
- AuthenticationRequired : aucun proprietaire courant fourni par l'identite
- ValidationError : nom vide, categorie ou sous-categorie manquante, etc.
- DuplicateNameError : nom de sous-categorie ou de tag deja utilise
- DuplicateAssociationError : association (tag, contenu, portee) deja presente
- ReferentialIntegrityError : suppression d'une ligne encore referencee
- NotFoundError : ligne inexistante ou appartenant a un autre utilisateur
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Nature d'une erreur de tagging."""

    AUTHENTICATION_REQUIRED = "authentication_required"
    VALIDATION = "validation"
    DUPLICATE_NAME = "duplicate_name"
    DUPLICATE_ASSOCIATION = "duplicate_association"
    REFERENTIAL_INTEGRITY = "referential_integrity"
    NOT_FOUND = "not_found"


class TaggingError(Exception):
    """
    Erreur de base du domaine de tagging.

    Attributes:
        kind: Nature de l'erreur, fixee par chaque sous-classe
        message: Message lisible destine a l'utilisateur
    """

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationRequired(TaggingError):
    """Levee quand aucun utilisateur courant n'est disponible."""

    kind = ErrorKind.AUTHENTICATION_REQUIRED

    def __init__(self, message: str = "Authentification requise") -> None:
        super().__init__(message)


class ValidationError(TaggingError):
    """Donnees invalides, detectees avant toute ecriture."""

    kind = ErrorKind.VALIDATION


class DuplicateNameError(TaggingError):
    """Nom deja utilise dans la meme portee."""

    kind = ErrorKind.DUPLICATE_NAME


class DuplicateAssociationError(TaggingError):
    """Association deja presente pour la meme cle composite."""

    kind = ErrorKind.DUPLICATE_ASSOCIATION


class ReferentialIntegrityError(TaggingError):
    """
    Suppression ou deplacement refuse car la ligne est encore referencee.

    Attributes:
        usage_count: Nombre de references bloquantes
    """

    kind = ErrorKind.REFERENTIAL_INTEGRITY

    def __init__(self, message: str, usage_count: int = 0) -> None:
        self.usage_count = usage_count
        super().__init__(message)


class NotFoundError(TaggingError):
    """Ligne inexistante ou non accessible pour l'utilisateur courant."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id: Optional[object] = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            message = f"{entity} introuvable"
        else:
            message = f"{entity} introuvable : {entity_id}"
        super().__init__(message)
