"""
Fixtures pytest partagees pour les tests CineTag.

Ce module contient les fixtures communes utilisees dans les tests:
- Base SQLite en memoire, tables creees et catalogue predefini charge
- Repositories SQLModel sur une session unique
- Identite de test (alice) et stores assembles comme dans le container
"""

from typing import Iterator

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from cinetag.adapters.identity import StaticIdentityProvider
from cinetag.core.categories import CategoryRegistry
from cinetag.infrastructure.persistence import models  # noqa: F401
from cinetag.infrastructure.persistence.repositories import (
    SQLModelContentTagRepository,
    SQLModelSubcategoryRepository,
    SQLModelTagRepository,
)
from cinetag.infrastructure.persistence.seed import seed_predefined_subcategories
from cinetag.services.content_association_store import ContentAssociationStore
from cinetag.services.subcategory_store import SubcategoryStore
from cinetag.services.tag_merge import TagMergeCoordinator
from cinetag.services.tag_store import TagStore
from cinetag.services.tagging import TaggingService
from cinetag.services.usage_counter import UsageCounter


@pytest.fixture
def engine():
    """Engine SQLite en memoire avec les tables creees."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    """Session avec le catalogue predefini charge."""
    with Session(engine) as session:
        seed_predefined_subcategories(session)
        yield session


@pytest.fixture
def identity() -> StaticIdentityProvider:
    """Utilisateur courant : alice."""
    return StaticIdentityProvider("alice")


@pytest.fixture
def registry() -> CategoryRegistry:
    return CategoryRegistry()


@pytest.fixture
def subcategory_repo(session) -> SQLModelSubcategoryRepository:
    return SQLModelSubcategoryRepository(session)


@pytest.fixture
def tag_repo(session) -> SQLModelTagRepository:
    return SQLModelTagRepository(session)


@pytest.fixture
def content_tag_repo(session) -> SQLModelContentTagRepository:
    return SQLModelContentTagRepository(session)


@pytest.fixture
def usage_counter(tag_repo, content_tag_repo) -> UsageCounter:
    return UsageCounter(tag_repo, content_tag_repo)


@pytest.fixture
def subcategory_store(subcategory_repo, identity, registry, usage_counter) -> SubcategoryStore:
    return SubcategoryStore(subcategory_repo, identity, registry, usage_counter)


@pytest.fixture
def merge_coordinator(tag_repo, content_tag_repo, identity) -> TagMergeCoordinator:
    return TagMergeCoordinator(tag_repo, content_tag_repo, identity)


@pytest.fixture
def tag_store(
    tag_repo, subcategory_repo, content_tag_repo, identity, registry, usage_counter,
    merge_coordinator,
) -> TagStore:
    return TagStore(
        tag_repo,
        subcategory_repo,
        content_tag_repo,
        identity,
        registry,
        usage_counter,
        merge_coordinator,
        search_limit=20,
        most_used_limit=10,
    )


@pytest.fixture
def association_store(
    content_tag_repo, tag_repo, subcategory_repo, identity, usage_counter
) -> ContentAssociationStore:
    return ContentAssociationStore(
        content_tag_repo, tag_repo, subcategory_repo, identity, usage_counter
    )


@pytest.fixture
def tagging_service(
    registry, subcategory_store, tag_store, association_store, usage_counter, identity
) -> TaggingService:
    return TaggingService(
        registry, subcategory_store, tag_store, association_store, usage_counter, identity
    )
