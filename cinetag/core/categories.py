"""
Registre des categories de tags.

Les neuf categories sont fixes, immutables et partagees par tous les
utilisateurs : elles ne sont pas persistees.
"""

from typing import Optional

from cinetag.core.entities import Category
from cinetag.core.errors import ValidationError

CATEGORIES: tuple[Category, ...] = (
    Category(1, "Production & Crew", "\U0001f3ac", "Directors, producers, crew roles"),
    Category(2, "Narrative & Writing", "✍️", "Story, plot, dialogue, structure"),
    Category(3, "Performance & Acting", "\U0001f3ad", "Acting performances and character work"),
    Category(4, "Visual & Cinematography", "\U0001f4f7", "Cinematography, visual style, design"),
    Category(5, "Audio & Music", "\U0001f3b5", "Music, sound design, audio production"),
    Category(6, "Genre & Style", "\U0001f3a8", "Genre elements and stylistic choices"),
    Category(7, "Analysis & Themes", "\U0001f9e0", "Themes, symbolism, deeper meaning"),
    Category(8, "Technical Quality", "⚙️", "Technical execution and quality"),
    Category(9, "Audience & Reception", "\U0001f465", "Impact, reception, accessibility"),
)


class CategoryRegistry:
    """
    Acces en lecture seule aux categories fixes.

    Utilisation :
        registry = CategoryRegistry()
        category = registry.require(6)  # Genre & Style
    """

    def __init__(self, categories: tuple[Category, ...] = CATEGORIES) -> None:
        self._by_id = {category.id: category for category in categories}

    def all(self) -> list[Category]:
        """Retourne les categories triees par identifiant."""
        return [self._by_id[key] for key in sorted(self._by_id)]

    def get(self, category_id: int) -> Optional[Category]:
        """Retourne la categorie ou None si l'identifiant est inconnu."""
        return self._by_id.get(category_id)

    def get_by_name(self, name: str) -> Optional[Category]:
        """Recherche une categorie par nom (sans tenir compte de la casse)."""
        wanted = name.strip().lower()
        for category in self._by_id.values():
            if category.name.lower() == wanted:
                return category
        return None

    def require(self, category_id: Optional[int]) -> Category:
        """
        Retourne la categorie ou leve une erreur de validation.

        Raises :
            ValidationError : si la categorie est absente ou inconnue
        """
        if category_id is None:
            raise ValidationError("Categorie manquante")
        category = self._by_id.get(category_id)
        if category is None:
            raise ValidationError(f"Categorie inconnue : {category_id}")
        return category

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)
