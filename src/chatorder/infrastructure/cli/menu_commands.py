"""CLI commands for the menu catalog."""

from __future__ import annotations

import click

from chatorder.application.browse_menu import BrowseMenuHandler
from chatorder.infrastructure.bootstrap import menu_repository


@click.command("list")
@click.pass_obj
def menu_list(settings) -> None:
    """List all menu items by code."""
    entries = BrowseMenuHandler(menu_repository(settings)).handle()

    if not entries:
        click.echo("No menu items found.")
        return

    click.echo(f"{'Code':<6} {'Name':<20} {'Price':>10}")
    click.echo("-" * 38)
    for e in entries:
        click.echo(f"{e.code:<6} {e.name:<20} {e.price:>10,}")
