"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CINETAG_,
et peut optionnellement être fournie via un fichier .env.

L'identifiant du propriétaire (owner_id) est optionnel : sans lui, toutes les
opérations de tagging échouent avec AuthenticationRequired.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de cinetag/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de CineTag (base, utilisateur courant, recherche, journal).

    Chaque champ se surcharge par une variable CINETAG_<CHAMP>, par exemple
    CINETAG_OWNER_ID=alice ou CINETAG_SEARCH_LIMIT=50. Le chemin du journal
    accepte ~.
    """

    model_config = SettingsConfigDict(
        env_prefix="CINETAG_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///cinetag.db")

    # Identité de l'utilisateur courant (fournie par le collaborateur d'authentification)
    owner_id: Optional[str] = Field(default=None)

    # Recherche et listings
    search_limit: int = Field(default=20, ge=1)
    most_used_limit: int = Field(default=10, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cinetag.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v: str) -> str:
        """Normalise le niveau de log en majuscules."""
        return str(v).upper()

    @property
    def authenticated(self) -> bool:
        """Vérifie si un propriétaire est configuré."""
        return bool(self.owner_id)
