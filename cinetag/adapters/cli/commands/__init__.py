"""Sous-package CLI commands - re-exporte les applications Typer."""

from cinetag.adapters.cli.commands.content_commands import content_app
from cinetag.adapters.cli.commands.subcategory_commands import subcategory_app
from cinetag.adapters.cli.commands.tag_commands import tag_app

__all__ = [
    "content_app",
    "subcategory_app",
    "tag_app",
]
