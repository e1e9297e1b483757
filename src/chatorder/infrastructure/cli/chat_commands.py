"""CLI commands for the chat round-trip."""

from __future__ import annotations

import json

import click

from chatorder.application.dto import ChatReply, OrderDTO
from chatorder.application.resolve_session import ResolveSessionHandler
from chatorder.domain.exceptions import DomainException
from chatorder.infrastructure.bootstrap import chat_dispatcher, session_repository


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for a cart or a history entry."""
    header = f"Order #{dto.id}" if dto.id is not None else "Cart"
    click.echo(f"{header}  (status={dto.status})")
    if dto.reference:
        click.echo(f"Reference: {dto.reference}")
    if dto.is_empty:
        click.echo("  (no items)")
        return

    click.echo(f"  {'Item':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        click.echo(
            f"  {line.name:<20} {line.quantity:>5} {line.unit_price:>10,} {line.line_total:>10,}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20,}")


def _display_reply(reply: ChatReply) -> None:
    click.echo(f"[session {reply.session_key}]")
    click.echo(reply.message)

    if reply.menu is not None:
        for entry in reply.menu:
            click.echo(f"  {entry.code:>3}  {entry.name:<20} {entry.price:>8,}")
    if reply.current is not None:
        _display_order(reply.current)
    if reply.history:
        for dto in reply.history:
            _display_order(dto)
            click.echo()
    if reply.reference is not None:
        click.echo(f"Total: {reply.total:,}  Reference: {reply.reference}")
    if reply.options:
        for option in reply.options:
            click.echo(f"  {option}")


@click.command("send")
@click.argument("text")
@click.option("--session", "session_token", default=None, help="Session key from a previous reply.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw reply as JSON.")
@click.pass_obj
def chat_send(settings, text: str, session_token: str | None, as_json: bool) -> None:
    """Send one numeric command, e.g. 1, 10, 97, 99, 98 or 0."""
    dispatcher = chat_dispatcher(settings)

    try:
        reply = dispatcher.handle(session_token, text, user_agent="chatorder-cli")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(json.dumps(reply.to_dict(), indent=2))
        return
    _display_reply(reply)


@click.command("new")
@click.pass_obj
def session_new(settings) -> None:
    """Issue a fresh session key."""
    handler = ResolveSessionHandler(session_repository(settings))
    click.echo(handler.handle(user_agent="chatorder-cli"))
