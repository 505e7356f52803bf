"""
Commandes CLI de gestion des sous-categories (list, create, promote, rename, move, delete).
"""

from typing import Annotated, Optional

import typer
from rich.table import Table

from cinetag.adapters.cli.helpers import console, unwrap, with_container
from cinetag.core.entities import Subcategory
from cinetag.core.value_objects import ContentScope, SubcategoryFilter

# Application Typer pour les sous-categories
subcategory_app = typer.Typer(
    name="subcategory",
    help="Gestion des sous-categories de tags",
    rich_markup_mode="rich",
)

_VISIBILITY_STYLES = {"visible": "green", "suggested": "yellow", "custom": "cyan"}


def _display_subcategories(title: str, subcategories: list[Subcategory]) -> None:
    table = Table(title=title, show_header=True)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Nom", style="bold")
    table.add_column("Etat")
    table.add_column("Contenus")
    table.add_column("Tags", justify="right")

    for subcategory in subcategories:
        style = _VISIBILITY_STYLES[subcategory.visibility.value]
        table.add_row(
            str(subcategory.id),
            subcategory.name,
            f"[{style}]{subcategory.visibility.value}[/{style}]",
            subcategory.content_scope.value,
            str(subcategory.usage_count),
        )
    console.print(table)


@subcategory_app.command("list")
def subcategory_list(
    category_id: Annotated[int, typer.Argument(help="Categorie (1 a 9)")],
    filter: Annotated[
        SubcategoryFilter,
        typer.Option("--filter", "-f", help="visible, suggested, custom ou all"),
    ] = SubcategoryFilter.ALL,
) -> None:
    """Liste les sous-categories d'une categorie."""
    _subcategory_list(category_id, filter)


@with_container()
def _subcategory_list(container, category_id: int, filter: SubcategoryFilter) -> None:
    service = container.tagging_service()
    category = container.category_registry().get(category_id)
    subcategories = unwrap(service.list_subcategories(category_id, filter))
    title = f"{category.icon} {category.name}" if category else f"Categorie {category_id}"
    _display_subcategories(title, subcategories)


@subcategory_app.command("create")
def subcategory_create(
    category_id: Annotated[int, typer.Argument(help="Categorie parente (1 a 9)")],
    name: Annotated[str, typer.Argument(help="Nom de la sous-categorie")],
    scope: Annotated[
        ContentScope,
        typer.Option("--scope", "-s", help="Contenus acceptes : movie, tv ou both"),
    ] = ContentScope.BOTH,
    genre: Annotated[
        Optional[str],
        typer.Option("--genre", "-g", help="Genre auquel la sous-categorie est dediee"),
    ] = None,
) -> None:
    """Cree une sous-categorie personnalisee."""
    _subcategory_create(category_id, name, scope, genre)


@with_container()
def _subcategory_create(
    container, category_id: int, name: str, scope: ContentScope, genre: Optional[str]
) -> None:
    service = container.tagging_service()
    subcategory = unwrap(service.create_subcategory(category_id, name, scope, genre))
    console.print(
        f"[green]Sous-categorie creee :[/green] {subcategory.name} (id {subcategory.id})"
    )


@subcategory_app.command("promote")
def subcategory_promote(
    subcategory_id: Annotated[int, typer.Argument(help="Sous-categorie suggeree")],
) -> None:
    """Rend visible une sous-categorie suggeree."""
    _subcategory_promote(subcategory_id)


@with_container()
def _subcategory_promote(container, subcategory_id: int) -> None:
    service = container.tagging_service()
    subcategory = unwrap(service.promote_subcategory(subcategory_id))
    console.print(f"[green]{subcategory.name}[/green] est maintenant visible")


@subcategory_app.command("rename")
def subcategory_rename(
    subcategory_id: Annotated[int, typer.Argument(help="Sous-categorie personnalisee")],
    name: Annotated[str, typer.Argument(help="Nouveau nom")],
) -> None:
    """Renomme une sous-categorie personnalisee."""
    _subcategory_rename(subcategory_id, name)


@with_container()
def _subcategory_rename(container, subcategory_id: int, name: str) -> None:
    service = container.tagging_service()
    subcategory = unwrap(service.update_subcategory(subcategory_id, name=name))
    console.print(f"[green]Sous-categorie renommee :[/green] {subcategory.name}")


@subcategory_app.command("move")
def subcategory_move(
    subcategory_id: Annotated[int, typer.Argument(help="Sous-categorie personnalisee")],
    category_id: Annotated[int, typer.Argument(help="Nouvelle categorie (1 a 9)")],
) -> None:
    """Deplace une sous-categorie personnalisee vers une autre categorie."""
    _subcategory_move(subcategory_id, category_id)


@with_container()
def _subcategory_move(container, subcategory_id: int, category_id: int) -> None:
    service = container.tagging_service()
    subcategory = unwrap(service.move_subcategory(subcategory_id, category_id))
    console.print(
        f"[green]{subcategory.name}[/green] deplacee vers la categorie {subcategory.category_id}"
    )


@subcategory_app.command("delete")
def subcategory_delete(
    subcategory_id: Annotated[int, typer.Argument(help="Sous-categorie personnalisee")],
) -> None:
    """Supprime une sous-categorie personnalisee inutilisee."""
    _subcategory_delete(subcategory_id)


@with_container()
def _subcategory_delete(container, subcategory_id: int) -> None:
    service = container.tagging_service()
    unwrap(service.delete_subcategory(subcategory_id))
    console.print(f"[green]Sous-categorie {subcategory_id} supprimee[/green]")
