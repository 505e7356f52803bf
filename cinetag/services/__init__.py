"""
Services metier du systeme de tagging.

- usage_counter : compteurs d'usage derives
- subcategory_store : cycle de vie des sous-categories
- tag_store : CRUD, recherche et listings des tags
- content_association_store : associations tag/contenu
- tag_merge : fusion de deux tags
- tagging : facade retournant des Result
- tag_library : copie locale des tags avec rafraichissement explicite
"""

from cinetag.services.content_association_store import ContentAssociationStore
from cinetag.services.subcategory_store import SubcategoryStore
from cinetag.services.tag_library import TagLibraryView
from cinetag.services.tag_merge import MergeReport, TagMergeCoordinator
from cinetag.services.tag_store import TagStore
from cinetag.services.tagging import TaggingService, capture
from cinetag.services.usage_counter import UsageCounter

__all__ = [
    "ContentAssociationStore",
    "MergeReport",
    "SubcategoryStore",
    "TagLibraryView",
    "TagMergeCoordinator",
    "TagStore",
    "TaggingService",
    "UsageCounter",
    "capture",
]
