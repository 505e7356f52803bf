"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : configuration,
session SQLModel, repositories, identite et stores de tagging.
"""

from dependency_injector import containers, providers

from .adapters.identity import StaticIdentityProvider
from .config import Settings
from .core.categories import CategoryRegistry
from .infrastructure.persistence.database import init_db, open_session
from .infrastructure.persistence.repositories import (
    SQLModelContentTagRepository,
    SQLModelSubcategoryRepository,
    SQLModelTagRepository,
)
from .services.content_association_store import ContentAssociationStore
from .services.subcategory_store import SubcategoryStore
from .services.tag_library import TagLibraryView
from .services.tag_merge import TagMergeCoordinator
from .services.tag_store import TagStore
from .services.tagging import TaggingService
from .services.usage_counter import UsageCounter


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables et le catalogue une fois
        service = container.tagging_service()
        result = service.search_tags("mind")
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, database_url=config.provided.database_url)

    # Session unique par container : les repositories d'une commande partagent
    # la meme unite de travail
    session = providers.Singleton(open_session, database_url=config.provided.database_url)

    # Repositories
    subcategory_repository = providers.Factory(SQLModelSubcategoryRepository, session=session)
    tag_repository = providers.Factory(SQLModelTagRepository, session=session)
    content_tag_repository = providers.Factory(SQLModelContentTagRepository, session=session)

    # Identite fournie par la configuration (CINETAG_OWNER_ID)
    identity = providers.Singleton(StaticIdentityProvider, owner_id=config.provided.owner_id)

    # Categories fixes (stateless - Singleton)
    category_registry = providers.Singleton(CategoryRegistry)

    # Services
    usage_counter = providers.Factory(
        UsageCounter,
        tag_repo=tag_repository,
        content_tag_repo=content_tag_repository,
    )

    subcategory_store = providers.Factory(
        SubcategoryStore,
        subcategory_repo=subcategory_repository,
        identity=identity,
        registry=category_registry,
        usage_counter=usage_counter,
    )

    tag_merge_coordinator = providers.Factory(
        TagMergeCoordinator,
        tag_repo=tag_repository,
        content_tag_repo=content_tag_repository,
        identity=identity,
    )

    tag_store = providers.Factory(
        TagStore,
        tag_repo=tag_repository,
        subcategory_repo=subcategory_repository,
        content_tag_repo=content_tag_repository,
        identity=identity,
        registry=category_registry,
        usage_counter=usage_counter,
        merge_coordinator=tag_merge_coordinator,
        search_limit=config.provided.search_limit,
        most_used_limit=config.provided.most_used_limit,
    )

    content_association_store = providers.Factory(
        ContentAssociationStore,
        content_tag_repo=content_tag_repository,
        tag_repo=tag_repository,
        subcategory_repo=subcategory_repository,
        identity=identity,
        usage_counter=usage_counter,
    )

    tagging_service = providers.Factory(
        TaggingService,
        registry=category_registry,
        subcategory_store=subcategory_store,
        tag_store=tag_store,
        association_store=content_association_store,
        usage_counter=usage_counter,
        identity=identity,
    )

    tag_library = providers.Factory(
        TagLibraryView,
        tag_store=tag_store,
        most_used_limit=config.provided.most_used_limit,
    )
