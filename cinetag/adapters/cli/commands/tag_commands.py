"""
Commandes CLI de gestion des tags.

create, list, search, update, delete, merge, duplicate, usage, stats.
"""

from typing import Annotated, Optional

import typer
from rich.table import Table
from rich.text import Text

from cinetag.adapters.cli.helpers import console, unwrap, with_container
from cinetag.core.entities import Tag

# Application Typer pour les tags
tag_app = typer.Typer(
    name="tag",
    help="Gestion des tags",
    rich_markup_mode="rich",
)


def _display_tags(title: str, tags: list[Tag]) -> None:
    """Affiche une liste de tags dans un tableau Rich."""
    if not tags:
        console.print("[yellow]Aucun tag.[/yellow]")
        return
    table = Table(title=title, show_header=True)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Nom")
    table.add_column("Categorie", justify="right")
    table.add_column("Sous-categorie", justify="right")
    table.add_column("Usage", justify="right")
    table.add_column("Public")

    for tag in tags:
        table.add_row(
            str(tag.id),
            Text(tag.name, style=tag.color),
            str(tag.category_id),
            str(tag.subcategory_id),
            str(tag.usage_count),
            "oui" if tag.is_public else "",
        )
    console.print(table)


@tag_app.command("create")
def tag_create(
    category_id: Annotated[int, typer.Argument(help="Categorie (1 a 9)")],
    subcategory_id: Annotated[int, typer.Argument(help="Sous-categorie de la categorie")],
    name: Annotated[str, typer.Argument(help="Nom du tag")],
    description: Annotated[
        Optional[str], typer.Option("--description", "-d", help="Description")
    ] = None,
    color: Annotated[
        Optional[str], typer.Option("--color", "-c", help="Couleur #RRGGBB")
    ] = None,
    public: Annotated[
        bool, typer.Option("--public", help="Rendre le tag utilisable par tous")
    ] = False,
) -> None:
    """Cree un tag."""
    _tag_create(category_id, subcategory_id, name, description, color, public)


@with_container()
def _tag_create(
    container,
    category_id: int,
    subcategory_id: int,
    name: str,
    description: Optional[str],
    color: Optional[str],
    public: bool,
) -> None:
    service = container.tagging_service()
    tag = unwrap(
        service.create_tag(category_id, subcategory_id, name, description, color, public)
    )
    console.print(f"[green]Tag cree :[/green] {tag.name} (id {tag.id}, {tag.color})")


@tag_app.command("list")
def tag_list(
    category_id: Annotated[
        Optional[int], typer.Option("--category", "-c", help="Filtrer par categorie")
    ] = None,
    subcategory_id: Annotated[
        Optional[int], typer.Option("--subcategory", "-s", help="Filtrer par sous-categorie")
    ] = None,
) -> None:
    """Liste les tags avec leur usage."""
    _tag_list(category_id, subcategory_id)


@with_container()
def _tag_list(container, category_id: Optional[int], subcategory_id: Optional[int]) -> None:
    service = container.tagging_service()
    tags = unwrap(service.list_tags(category_id=category_id, subcategory_id=subcategory_id))
    _display_tags("Tags", tags)


@tag_app.command("search")
def tag_search(
    query: Annotated[str, typer.Argument(help="Texte recherche dans le nom ou la description")],
) -> None:
    """Recherche des tags, les plus utilises d'abord."""
    _tag_search(query)


@with_container()
def _tag_search(container, query: str) -> None:
    service = container.tagging_service()
    tags = unwrap(service.search_tags(query))
    _display_tags(f"Recherche : {query}", tags)


@tag_app.command("update")
def tag_update(
    tag_id: Annotated[int, typer.Argument(help="Tag a modifier")],
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Nouveau nom")] = None,
    description: Annotated[
        Optional[str],
        typer.Option("--description", "-d", help="Nouvelle description (vide pour effacer)"),
    ] = None,
    color: Annotated[
        Optional[str], typer.Option("--color", "-c", help="Nouvelle couleur #RRGGBB")
    ] = None,
    public: Annotated[
        Optional[bool], typer.Option("--public/--private", help="Visibilite du tag")
    ] = None,
) -> None:
    """Modifie un tag."""
    _tag_update(tag_id, name, description, color, public)


@with_container()
def _tag_update(
    container,
    tag_id: int,
    name: Optional[str],
    description: Optional[str],
    color: Optional[str],
    public: Optional[bool],
) -> None:
    service = container.tagging_service()
    tag = unwrap(service.update_tag(tag_id, name, description, color, public))
    console.print(f"[green]Tag modifie :[/green] {tag.name} (id {tag.id})")


@tag_app.command("delete")
def tag_delete(
    tag_id: Annotated[int, typer.Argument(help="Tag a supprimer")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Ne pas demander de confirmation")
    ] = False,
) -> None:
    """Supprime un tag et toutes ses associations."""
    if not yes:
        typer.confirm(f"Supprimer le tag {tag_id} et ses associations ?", abort=True)
    _tag_delete(tag_id)


@with_container()
def _tag_delete(container, tag_id: int) -> None:
    service = container.tagging_service()
    removed = unwrap(service.delete_tag(tag_id))
    console.print(f"[green]Tag {tag_id} supprime[/green] ({removed} association(s))")


@tag_app.command("merge")
def tag_merge(
    source_id: Annotated[int, typer.Argument(help="Tag a absorber (sera supprime)")],
    target_id: Annotated[int, typer.Argument(help="Tag conserve")],
) -> None:
    """Fusionne un tag dans un autre."""
    _tag_merge(source_id, target_id)


@with_container()
def _tag_merge(container, source_id: int, target_id: int) -> None:
    service = container.tagging_service()
    report = unwrap(service.merge_tags(source_id, target_id))
    target = unwrap(service.get_tag(target_id))
    console.print(f"[green]Fusion terminee[/green] dans {target.name}")
    console.print(f"  {report.moved} association(s) deplacee(s)")
    console.print(f"  {report.dropped} doublon(s) supprime(s)")
    console.print(f"  Usage de la cible : {target.usage_count}")


@tag_app.command("duplicate")
def tag_duplicate(
    tag_id: Annotated[int, typer.Argument(help="Tag a copier")],
    name: Annotated[str, typer.Argument(help="Nom de la copie")],
) -> None:
    """Copie la definition d'un tag sous un nouveau nom."""
    _tag_duplicate(tag_id, name)


@with_container()
def _tag_duplicate(container, tag_id: int, name: str) -> None:
    service = container.tagging_service()
    tag = unwrap(service.duplicate_tag(tag_id, name))
    console.print(f"[green]Tag duplique :[/green] {tag.name} (id {tag.id})")


@tag_app.command("usage")
def tag_usage(
    tag_id: Annotated[int, typer.Argument(help="Tag")],
) -> None:
    """Affiche la repartition des usages d'un tag."""
    _tag_usage(tag_id)


@with_container()
def _tag_usage(container, tag_id: int) -> None:
    service = container.tagging_service()
    stats = unwrap(service.usage_stats(tag_id))

    table = Table(title=f"Usage du tag {tag_id}", show_header=True)
    table.add_column("Type", style="cyan")
    table.add_column("Nombre", justify="right")
    table.add_row("Films", str(stats.movies))
    table.add_row("Series", str(stats.tv_series))
    table.add_row("Episodes", str(stats.tv_episodes))
    table.add_row("[bold]Total[/bold]", f"[bold]{stats.total}[/bold]")
    console.print(table)


@tag_app.command("stats")
def tag_stats(
    limit: Annotated[
        Optional[int], typer.Option("--limit", "-l", help="Nombre de tags les plus utilises")
    ] = None,
) -> None:
    """Affiche les statistiques de la bibliotheque de tags."""
    _tag_stats(limit)


@with_container()
def _tag_stats(container, limit: Optional[int]) -> None:
    service = container.tagging_service()
    registry = container.category_registry()
    stats = unwrap(service.library_stats())

    console.print(f"[bold]Tags :[/bold] {stats.total_tags}")
    console.print(f"[bold]Associations :[/bold] {stats.total_usage}")
    for category_id, count in stats.tags_by_category.items():
        category = registry.get(category_id)
        label = f"{category.icon} {category.name}" if category else str(category_id)
        console.print(f"  {label} : {count}")

    _display_tags("Les plus utilises", unwrap(service.most_used_tags(limit)))
