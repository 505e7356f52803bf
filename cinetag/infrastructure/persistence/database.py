"""
Configuration de la base de donnees SQLite pour CineTag.

Ce module fournit :
- Engines SQLite mis en cache par URL, configures pour le multi-thread
- Session factory avec context manager
- Fonction d'initialisation des tables et du catalogue predefini

La base de donnees est configuree via CINETAG_DATABASE_URL (defaut: sqlite:///cinetag.db).
"""

from collections.abc import Generator
from pathlib import Path
from typing import Optional

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Engines par URL - crees lors du premier appel a get_engine()
_engines: dict[str, Engine] = {}


def _resolve_url(database_url: Optional[str]) -> str:
    if database_url is not None:
        return database_url
    from cinetag.config import Settings

    return Settings().database_url


def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Retourne l'engine associe a l'URL, en le creant si necessaire.

    Sans URL explicite, utilise la configuration de l'application.
    Une base en memoire partage une connexion unique (StaticPool) pour que
    toutes les sessions voient les memes tables.
    """
    url = _resolve_url(database_url)
    engine = _engines.get(url)
    if engine is not None:
        return engine

    kwargs: dict = {"echo": False, "connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    elif url.startswith("sqlite:///"):
        # Creer le repertoire parent du fichier SQLite
        Path(url.replace("sqlite:///", "")).parent.mkdir(exist_ok=True, parents=True)

    engine = create_engine(url, **kwargs)
    _engines[url] = engine
    return engine


def open_session(database_url: Optional[str] = None) -> Session:
    """
    Ouvre une session partagee par les repositories d'une meme commande.

    L'appelant est responsable de sa fermeture.
    """
    return Session(get_engine(database_url))


def get_session(database_url: Optional[str] = None) -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation avec next() :
        session = next(get_session())

    Ou avec context manager :
        with Session(get_engine()) as session:
            # operations

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(get_engine(database_url)) as session:
        yield session


def init_db(database_url: Optional[str] = None) -> None:
    """
    Initialise la base de donnees : tables et catalogue predefini.

    Les modeles sont importes ici pour enregistrer leurs metadonnees dans
    SQLModel.metadata sans import circulaire. Le seed est idempotent :
    appeler init_db() a chaque demarrage est sans effet de bord.
    """
    from cinetag.infrastructure.persistence import models  # noqa: F401
    from cinetag.infrastructure.persistence.seed import seed_predefined_subcategories

    engine = get_engine(database_url)
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        inserted = seed_predefined_subcategories(session)
    if inserted:
        logger.info("{} sous-categories predefinies ajoutees", inserted)
