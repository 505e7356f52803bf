"""
Objets valeur du systeme de tagging.

Enumerations de la taxonomie (visibilite, portee de contenu, type de contenu)
et objets immutables identifiant une cible de tag : portee d'episode,
metadonnees d'association et cle de contenu.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cinetag.core.errors import ValidationError

# Formats acceptes : S01E03, s1e3, 1x03
_EPISODE_PATTERN = re.compile(r"^\s*(?:[sS](\d{1,3})[eE](\d{1,4})|(\d{1,3})[xX](\d{1,4}))\s*$")
_TIME_PATTERN = re.compile(r"^(\d{2}):([0-5]\d):([0-5]\d)$")


class ContentType(str, Enum):
    """Type d'un contenu tagge."""

    MOVIE = "movie"
    TV = "tv"


class ContentScope(str, Enum):
    """Types de contenu auxquels une sous-categorie s'applique."""

    MOVIE = "movie"
    TV = "tv"
    BOTH = "both"

    def accepts(self, content_type: ContentType) -> bool:
        """Indique si un contenu de ce type peut recevoir un tag de cette portee."""
        if self is ContentScope.BOTH:
            return True
        return self.value == content_type.value


class Visibility(str, Enum):
    """Etat d'une sous-categorie dans son cycle de vie."""

    VISIBLE = "visible"  # Predefinie, affichee par defaut
    SUGGESTED = "suggested"  # Predefinie, proposee mais masquee
    CUSTOM = "custom"  # Creee par l'utilisateur


class SubcategoryFilter(str, Enum):
    """Filtre de listing des sous-categories."""

    VISIBLE = "visible"
    SUGGESTED = "suggested"
    CUSTOM = "custom"
    ALL = "all"


@dataclass(frozen=True, order=True)
class EpisodeScope:
    """
    Portee restreignant une association a un seul episode.

    Attributs :
        season : Numero de saison (0 pour les episodes speciaux)
        episode : Numero d'episode dans la saison (a partir de 1)
    """

    season: int
    episode: int

    def __post_init__(self) -> None:
        if self.season < 0:
            raise ValidationError(f"Numero de saison invalide : {self.season}")
        if self.episode < 1:
            raise ValidationError(f"Numero d'episode invalide : {self.episode}")

    @property
    def key(self) -> str:
        """Libelle canonique, ex: S01E03."""
        return f"S{self.season:02d}E{self.episode:02d}"

    @classmethod
    def parse(cls, text: str) -> "EpisodeScope":
        """
        Construit une portee depuis sa forme textuelle.

        Args :
            text : Chaine au format S01E03, s1e3 ou 1x03

        Retourne :
            L'EpisodeScope correspondant

        Raises :
            ValidationError : si le format n'est pas reconnu
        """
        match = _EPISODE_PATTERN.match(text or "")
        if not match:
            raise ValidationError(f"Portee d'episode invalide : {text!r} (attendu S01E03)")
        season = match.group(1) or match.group(3)
        episode = match.group(2) or match.group(4)
        return cls(season=int(season), episode=int(episode))

    def __str__(self) -> str:
        return self.key


def scope_key(episode_scope: Optional[EpisodeScope]) -> str:
    """Cle de portee persistee : chaine vide pour le niveau film/serie."""
    return episode_scope.key if episode_scope is not None else ""


def _validate_time(value: Optional[str], field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not _TIME_PATTERN.match(value):
        raise ValidationError(f"{field_name} invalide : {value!r} (attendu HH:MM:SS)")
    return value


@dataclass(frozen=True)
class AssociationMetadata:
    """
    Annotation optionnelle d'une association (passage precis, notes).

    Attributs :
        start_time : Debut du passage concerne (HH:MM:SS)
        end_time : Fin du passage concerne (HH:MM:SS)
        notes : Notes libres
    """

    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        _validate_time(self.start_time, "start_time")
        _validate_time(self.end_time, "end_time")
        # HH:MM:SS sur deux chiffres : l'ordre lexical est l'ordre temporel
        if self.start_time and self.end_time and self.start_time > self.end_time:
            raise ValidationError(
                f"start_time ({self.start_time}) posterieur a end_time ({self.end_time})"
            )

    @property
    def is_empty(self) -> bool:
        """Indique si aucune metadonnee n'est renseignee."""
        return not (self.start_time or self.end_time or self.notes)


@dataclass(frozen=True)
class ContentKey:
    """
    Identifie un contenu tagge : film, serie entiere ou episode.

    Attributs :
        content_id : Identifiant opaque du contenu (ex: ID TMDB)
        content_type : Type du contenu (movie, tv)
        episode_scope : Episode vise, None pour le film ou la serie entiere
    """

    content_id: int
    content_type: ContentType
    episode_scope: Optional[EpisodeScope] = None

    def __post_init__(self) -> None:
        if self.episode_scope is not None and self.content_type is not ContentType.TV:
            raise ValidationError("Une portee d'episode n'est valable que pour une serie (tv)")

    @property
    def label(self) -> str:
        """Libelle lisible, ex: tv:1396 S01E03."""
        base = f"{self.content_type.value}:{self.content_id}"
        if self.episode_scope is not None:
            return f"{base} {self.episode_scope.key}"
        return base
