"""
Vue instantanee de la bibliotheque de tags de l'utilisateur.

Les stores lisent toujours le stockage. Un appelant qui interroge souvent
les tags (filtrage a la frappe, menus) peut en garder une copie locale via
TagLibraryView ; la copie n'est jamais rafraichie implicitement : apres une
ecriture, l'appelant appelle refresh() ou invalidate().
"""

from datetime import datetime
from typing import Optional

from loguru import logger

from cinetag.core.entities import Tag
from cinetag.services.tag_store import TagStore


class TagLibraryView:
    """
    Copie locale des tags (avec usage) et requetes en memoire.

    Utilisation :
        view = TagLibraryView(tag_store)
        view.filter("mind")
        tag_store.create(...)
        view.refresh()
    """

    def __init__(self, tag_store: TagStore, most_used_limit: int = 10) -> None:
        self._store = tag_store
        self._most_used_limit = most_used_limit
        self._tags: Optional[list[Tag]] = None
        self.loaded_at: Optional[datetime] = None

    @property
    def is_loaded(self) -> bool:
        """Indique si une copie est disponible."""
        return self._tags is not None

    def refresh(self) -> list[Tag]:
        """Recharge la copie depuis le store."""
        self._tags = self._store.list_all()
        self.loaded_at = datetime.now()
        logger.debug("Bibliotheque de tags rechargee : {} tag(s)", len(self._tags))
        return list(self._tags)

    def invalidate(self) -> None:
        """Oublie la copie ; la prochaine lecture la recharge."""
        self._tags = None
        self.loaded_at = None

    @property
    def tags(self) -> list[Tag]:
        """Tags de la copie, charges au premier acces."""
        if self._tags is None:
            self.refresh()
        return list(self._tags)

    def get(self, tag_id: int) -> Optional[Tag]:
        return next((tag for tag in self.tags if tag.id == tag_id), None)

    def filter(self, query: str) -> list[Tag]:
        """Filtre sans casse sur le nom et la description."""
        needle = (query or "").strip().lower()
        if not needle:
            return self.tags
        return [
            tag
            for tag in self.tags
            if needle in tag.name.lower() or needle in (tag.description or "").lower()
        ]

    def by_category(self, category_id: int) -> list[Tag]:
        return [tag for tag in self.tags if tag.category_id == category_id]

    def by_subcategory(self, subcategory_id: int) -> list[Tag]:
        return [tag for tag in self.tags if tag.subcategory_id == subcategory_id]

    def most_used(self, limit: Optional[int] = None) -> list[Tag]:
        """Tags les plus utilises d'apres la copie."""
        ranked = sorted(self.tags, key=lambda tag: tag.usage_count, reverse=True)
        return ranked[: limit or self._most_used_limit]

    def __len__(self) -> int:
        return len(self.tags)
