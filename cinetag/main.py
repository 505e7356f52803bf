"""
Point d'entrée CLI de CineTag.

Configure le logging, monte les sous-commandes et fournit les commandes
générales (info, version, categories).
"""

from typing import Annotated

import typer
from loguru import logger
from rich.table import Table

from . import __version__
from .adapters.cli.commands import content_app, subcategory_app, tag_app
from .adapters.cli.helpers import console
from .config import Settings
from .container import Container
from .logging_config import configure_logging, console_level

app = typer.Typer(
    name="cinetag",
    help="Taxonomie de tags pour films, séries et épisodes",
)
container = Container()


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """CineTag - Tags personnels pour une videotheque."""
    settings = Settings()
    configure_logging(
        log_level=console_level("WARNING", verbose, quiet),
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


# Sous-commandes
app.add_typer(subcategory_app, name="subcategory")
app.add_typer(tag_app, name="tag")
app.add_typer(content_app, name="content")


def get_config() -> Settings:
    """Settings partages par le container du module."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration CineTag")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Utilisateur : {config.owner_id or 'non authentifié'}")
    typer.echo(f"Limite de recherche : {config.search_limit}")
    typer.echo(f"Niveau de log : {config.log_level}")
    typer.echo(f"Fichier de log : {config.log_file}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CineTag v{__version__}")


@app.command()
def categories() -> None:
    """Liste les neuf catégories fixes."""
    table = Table(title="Catégories", show_header=True)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("")
    table.add_column("Nom", style="bold")
    table.add_column("Description", style="dim")
    for category in container.category_registry().all():
        table.add_row(str(category.id), category.icon, category.name, category.description)
    console.print(table)


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
