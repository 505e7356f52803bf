"""
Utilitaires partages pour les commandes CLI de CineTag.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- unwrap : extraction de la valeur d'un Result, sortie en code 1 sinon
- parse_scope : conversion d'une option --episode en EpisodeScope
"""

from contextlib import contextmanager
from functools import wraps
from typing import Optional, TypeVar

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from cinetag.container import Container
from cinetag.core.errors import ValidationError
from cinetag.core.result import Result
from cinetag.core.value_objects import EpisodeScope

T = TypeVar("T")

# Console globale pour tous les affichages
console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("cinetag")
    try:
        yield
    finally:
        loguru_logger.enable("cinetag")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        def _my_command(container, ...):
            service = container.tagging_service()
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            try:
                return func(container, *args, **kwargs)
            finally:
                if requires_db:
                    container.session().close()
        return wrapper
    return decorator


def unwrap(result: Result[T]) -> T:
    """
    Retourne la valeur d'un Result ou termine la commande en erreur.

    Raises:
        typer.Exit: code 1 si le Result est en echec
    """
    if not result.ok:
        console.print(f"[red]Erreur ({result.kind.value}) :[/red] {result.error.message}")
        raise typer.Exit(code=1)
    return result.value


def parse_scope(episode: Optional[str]) -> Optional[EpisodeScope]:
    """
    Convertit l'option --episode (S01E03, 1x03) en EpisodeScope.

    Raises:
        typer.BadParameter: si le format n'est pas reconnu
    """
    if not episode:
        return None
    try:
        return EpisodeScope.parse(episode)
    except ValidationError as exc:
        raise typer.BadParameter(exc.message) from exc
