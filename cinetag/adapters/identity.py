"""
Fournisseurs d'identite.

L'authentification est geree par un collaborateur externe ; ces adaptateurs
se contentent de transmettre l'identifiant qu'il fournit.
"""

from typing import Optional

from cinetag.core.ports.identity import IIdentityProvider


class StaticIdentityProvider(IIdentityProvider):
    """
    Identite fixe, fournie a la construction.

    Utilisee par la CLI (Settings.owner_id) et par les tests. Un owner_id
    None ou vide represente un appelant non authentifie.
    """

    def __init__(self, owner_id: Optional[str] = None) -> None:
        self._owner_id = owner_id

    def current_owner(self) -> Optional[str]:
        return self._owner_id

    def switch(self, owner_id: Optional[str]) -> None:
        """Change l'utilisateur courant (sessions multi-utilisateurs, tests)."""
        self._owner_id = owner_id
