"""
Port d'identite.

L'utilisateur courant est fourni par un collaborateur d'authentification
externe ; toutes les operations des stores sont implicitement limitees a
cet utilisateur.
"""

from abc import ABC, abstractmethod
from typing import Optional

from cinetag.core.errors import AuthenticationRequired


class IIdentityProvider(ABC):
    """Fournit l'identifiant du proprietaire courant."""

    @abstractmethod
    def current_owner(self) -> Optional[str]:
        """Retourne l'identifiant de l'utilisateur courant, ou None."""
        ...

    def require_owner(self) -> str:
        """
        Retourne l'utilisateur courant ou echoue.

        Raises :
            AuthenticationRequired : si aucun utilisateur n'est disponible
        """
        owner = self.current_owner()
        if not owner:
            raise AuthenticationRequired()
        return owner
