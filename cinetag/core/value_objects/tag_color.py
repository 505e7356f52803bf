"""
Couleurs des tags.

Les couleurs sont des codes hexadecimaux #RRGGBB normalises en majuscules.
Une palette predefinie sert de source quand l'utilisateur n'en choisit pas.
"""

import random
import re
from typing import Optional

from cinetag.core.errors import ValidationError

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")

TAG_COLORS: tuple[str, ...] = (
    "#EF4444",  # Rouge
    "#F97316",  # Orange
    "#F59E0B",  # Ambre
    "#84CC16",  # Citron vert
    "#10B981",  # Emeraude
    "#14B8A6",  # Sarcelle
    "#06B6D4",  # Cyan
    "#3B82F6",  # Bleu
    "#6366F1",  # Indigo
    "#8B5CF6",  # Violet
    "#A855F7",  # Pourpre
    "#D946EF",  # Fuchsia
    "#EC4899",  # Rose
    "#F43F5E",  # Rose vif
)


def normalize_color(value: Optional[str]) -> str:
    """
    Valide et normalise une couleur de tag.

    Args :
        value : Code #RRGGBB, ou None pour tirer une couleur de la palette

    Retourne :
        Le code couleur en majuscules

    Raises :
        ValidationError : si le format est invalide
    """
    if value is None:
        return random_color()
    value = value.strip()
    if not HEX_COLOR_PATTERN.match(value):
        raise ValidationError(f"Couleur invalide : {value!r} (attendu #RRGGBB)")
    return value.upper()


def random_color() -> str:
    """Tire une couleur au hasard dans la palette."""
    return random.choice(TAG_COLORS)
