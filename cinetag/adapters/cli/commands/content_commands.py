"""
Commandes CLI de gestion des tags poses sur les contenus.

add, add-many, remove, set, show, meta, find, copy.
Les contenus sont designes par leur identifiant (ex: ID TMDB) et leur type
(movie ou tv) ; l'option --episode (S01E03) restreint a un episode.
"""

from typing import Annotated, Optional

import typer
from rich.table import Table
from rich.text import Text

from cinetag.adapters.cli.helpers import console, parse_scope, unwrap, with_container
from cinetag.core.errors import ValidationError
from cinetag.core.value_objects import AssociationMetadata, ContentKey, ContentType

# Application Typer pour les associations
content_app = typer.Typer(
    name="content",
    help="Tags poses sur les films, series et episodes",
    rich_markup_mode="rich",
)

EpisodeOption = Annotated[
    Optional[str],
    typer.Option("--episode", "-e", help="Episode vise (S01E03), series uniquement"),
]


@content_app.command("add")
def content_add(
    tag_id: Annotated[int, typer.Argument(help="Tag a poser")],
    content_id: Annotated[int, typer.Argument(help="Identifiant du contenu")],
    content_type: Annotated[ContentType, typer.Argument(help="movie ou tv")],
    episode: EpisodeOption = None,
    start: Annotated[
        Optional[str], typer.Option("--start", help="Debut du passage (HH:MM:SS)")
    ] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="Fin du passage (HH:MM:SS)")] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", help="Notes libres")] = None,
) -> None:
    """Pose un tag sur un contenu."""
    scope = parse_scope(episode)
    try:
        metadata = AssociationMetadata(start_time=start, end_time=end, notes=notes)
    except ValidationError as exc:
        raise typer.BadParameter(exc.message) from exc
    _content_add(tag_id, content_id, content_type, scope, metadata)


@with_container()
def _content_add(container, tag_id, content_id, content_type, scope, metadata) -> None:
    service = container.tagging_service()
    association = unwrap(service.add_tag(tag_id, content_id, content_type, scope, metadata))
    console.print(
        f"[green]Tag {tag_id} pose sur[/green] {association.content_key.label} "
        f"(association {association.id})"
    )


@content_app.command("add-many")
def content_add_many(
    content_id: Annotated[int, typer.Argument(help="Identifiant du contenu")],
    content_type: Annotated[ContentType, typer.Argument(help="movie ou tv")],
    tag_ids: Annotated[list[int], typer.Argument(help="Tags a poser")],
    episode: EpisodeOption = None,
) -> None:
    """Pose plusieurs tags sur un contenu en une fois."""
    _content_add_many(content_id, content_type, tag_ids, parse_scope(episode))


@with_container()
def _content_add_many(container, content_id, content_type, tag_ids, scope) -> None:
    service = container.tagging_service()
    created = unwrap(service.add_tags(content_id, content_type, tag_ids, scope))
    label = ContentKey(content_id, content_type, scope).label
    console.print(f"[green]{len(created)} tag(s) pose(s)[/green] sur {label}")


@content_app.command("remove")
def content_remove(
    content_id: Annotated[int, typer.Argument(help="Identifiant du contenu")],
    content_type: Annotated[ContentType, typer.Argument(help="movie ou tv")],
    tag_id: Annotated[
        Optional[int], typer.Option("--tag", "-t", help="Tag a retirer")
    ] = None,
    episode: EpisodeOption = None,
    all_tags: Annotated[
        bool, typer.Option("--all", help="Retirer tous les tags, toutes portees confondues")
    ] = False,
) -> None:
    """Retire un tag (ou tous les tags) d'un contenu."""
    if tag_id is None and not all_tags:
        raise typer.BadParameter("Indiquer --tag ou --all")
    _content_remove(content_id, content_type, tag_id, parse_scope(episode), all_tags)


@with_container()
def _content_remove(container, content_id, content_type, tag_id, scope, all_tags) -> None:
    service = container.tagging_service()
    if all_tags:
        removed = unwrap(service.remove_all_tags(content_id, content_type))
        console.print(f"[green]{removed} association(s) retiree(s)[/green]")
        return
    if unwrap(service.remove_tag(tag_id, content_id, content_type, scope)):
        console.print(f"[green]Tag {tag_id} retire[/green]")
    else:
        console.print(f"[yellow]Le tag {tag_id} n'etait pas pose a cette portee[/yellow]")


@content_app.command("set")
def content_set(
    content_id: Annotated[int, typer.Argument(help="Identifiant du contenu")],
    content_type: Annotated[ContentType, typer.Argument(help="movie ou tv")],
    tag_ids: Annotated[
        Optional[list[int]], typer.Argument(help="Tags a conserver (aucun pour tout retirer)")
    ] = None,
    episode: EpisodeOption = None,
) -> None:
    """Remplace les tags d'un contenu a la portee indiquee."""
    _content_set(content_id, content_type, tag_ids or [], parse_scope(episode))


@with_container()
def _content_set(container, content_id, content_type, tag_ids, scope) -> None:
    service = container.tagging_service()
    created = unwrap(service.set_tags(content_id, content_type, tag_ids, scope))
    console.print(f"[green]{len(created)} tag(s) pose(s)[/green] apres remplacement")


@content_app.command("show")
def content_show(
    content_id: Annotated[int, typer.Argument(help="Identifiant du contenu")],
    content_type: Annotated[ContentType, typer.Argument(help="movie ou tv")],
    episode: EpisodeOption = None,
) -> None:
    """Affiche les tags poses sur un contenu."""
    _content_show(content_id, content_type, parse_scope(episode))


@with_container()
def _content_show(container, content_id, content_type, scope) -> None:
    service = container.tagging_service()
    assigned = unwrap(service.assigned_tags(content_id, content_type, scope))
    label = ContentKey(content_id, content_type, scope).label
    if not assigned:
        console.print(f"[yellow]Aucun tag sur {label}[/yellow]")
        return

    table = Table(title=f"Tags de {label}", show_header=True)
    table.add_column("Assoc.", justify="right", style="dim")
    table.add_column("Tag")
    table.add_column("Passage")
    table.add_column("Notes", style="dim")
    table.add_column("Usage", justify="right")
    for item in assigned:
        passage = ""
        if item.metadata.start_time or item.metadata.end_time:
            passage = f"{item.metadata.start_time or '?'} - {item.metadata.end_time or '?'}"
        table.add_row(
            str(item.association_id),
            Text(item.tag.name, style=item.tag.color),
            passage,
            item.metadata.notes or "",
            str(item.tag.usage_count),
        )
    console.print(table)


@content_app.command("meta")
def content_meta(
    association_id: Annotated[int, typer.Argument(help="Association a annoter")],
    start: Annotated[
        Optional[str], typer.Option("--start", help="Debut (HH:MM:SS, vide pour effacer)")
    ] = None,
    end: Annotated[
        Optional[str], typer.Option("--end", help="Fin (HH:MM:SS, vide pour effacer)")
    ] = None,
    notes: Annotated[
        Optional[str], typer.Option("--notes", help="Notes (vide pour effacer)")
    ] = None,
) -> None:
    """Modifie le passage et les notes d'une association."""
    changes = {
        field: value or None
        for field, value in (("start_time", start), ("end_time", end), ("notes", notes))
        if value is not None
    }
    if not changes:
        raise typer.BadParameter("Indiquer au moins --start, --end ou --notes")
    _content_meta(association_id, changes)


@with_container()
def _content_meta(container, association_id: int, changes: dict) -> None:
    service = container.tagging_service()
    association = unwrap(service.update_metadata(association_id, **changes))
    metadata = association.metadata
    console.print(
        f"[green]Association {association.id} mise a jour[/green] "
        f"({metadata.start_time or '-'} / {metadata.end_time or '-'})"
    )


@content_app.command("find")
def content_find(
    tag_ids: Annotated[list[int], typer.Argument(help="Tags recherches")],
    any_tag: Annotated[
        bool, typer.Option("--any", help="Au moins un des tags (par defaut : tous)")
    ] = False,
    content_type: Annotated[
        Optional[ContentType], typer.Option("--type", help="movie ou tv")
    ] = None,
) -> None:
    """Trouve les contenus portant des tags."""
    _content_find(tag_ids, not any_tag, content_type)


@with_container()
def _content_find(container, tag_ids, match_all, content_type) -> None:
    service = container.tagging_service()
    keys = unwrap(service.find_content(tag_ids, match_all=match_all, content_type=content_type))
    if not keys:
        console.print("[yellow]Aucun contenu trouve.[/yellow]")
        return
    for key in keys:
        console.print(f"  {key.label}")
    console.print(f"\n[bold]{len(keys)}[/bold] contenu(s)")


@content_app.command("copy")
def content_copy(
    source_id: Annotated[int, typer.Argument(help="Contenu source")],
    target_id: Annotated[int, typer.Argument(help="Contenu cible")],
    content_type: Annotated[ContentType, typer.Argument(help="movie ou tv")],
    source_episode: Annotated[
        Optional[str], typer.Option("--from-episode", help="Episode source (S01E03)")
    ] = None,
    target_episode: Annotated[
        Optional[str], typer.Option("--to-episode", help="Episode cible (S01E04)")
    ] = None,
) -> None:
    """Copie les tags d'un contenu vers un autre du meme type."""
    try:
        source = ContentKey(source_id, content_type, parse_scope(source_episode))
        target = ContentKey(target_id, content_type, parse_scope(target_episode))
    except ValidationError as exc:
        raise typer.BadParameter(exc.message) from exc
    _content_copy(source, target)


@with_container()
def _content_copy(container, source: ContentKey, target: ContentKey) -> None:
    service = container.tagging_service()
    created = unwrap(service.copy_tags(source, target))
    console.print(
        f"[green]{len(created)} tag(s) copie(s)[/green] de {source.label} vers {target.label}"
    )
