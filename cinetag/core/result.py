"""
Contrat Result unique pour les operations exposees aux appelants.

Les stores levent des TaggingError ; la surface applicative (TaggingService)
convertit chaque appel en Result, de sorte que les appelants n'aient qu'un
seul chemin de gestion des echecs.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from cinetag.core.errors import ErrorKind, TaggingError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Resultat d'une operation : une valeur ou une erreur typee.

    Attributes:
        value: Valeur produite si l'operation a reussi
        error: Erreur du domaine si l'operation a echoue
    """

    value: Optional[T] = None
    error: Optional[TaggingError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        """Construit un resultat reussi."""
        return cls(value=value)

    @classmethod
    def failure(cls, error: TaggingError) -> "Result[T]":
        """Construit un resultat en echec."""
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Indique si l'operation a reussi."""
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Nature de l'erreur, None en cas de succes."""
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Retourne la valeur ou releve l'erreur portee."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
