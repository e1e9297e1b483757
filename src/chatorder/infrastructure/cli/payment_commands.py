"""CLI commands for payment initiation and verification."""

from __future__ import annotations

import click

from chatorder.domain.exceptions import DomainException
from chatorder.infrastructure.bootstrap import (
    initiate_payment_handler,
    verify_payment_handler,
)
from chatorder.infrastructure.config import ConfigurationError


@click.command("init")
@click.option("--session", "session_key", required=True, help="Session key that owns the order.")
@click.option("--reference", default=None, help="Reference of the order to pay (defaults to latest).")
@click.pass_obj
def pay_init(settings, session_key: str, reference: str | None) -> None:
    """Start a payment and print the authorization URL."""
    try:
        handler = initiate_payment_handler(settings)
        result = handler.handle(session_key, reference)
    except (DomainException, ConfigurationError) as exc:
        raise click.ClickException(str(exc))

    click.echo(result.message)
    click.echo(f"Reference: {result.reference}")
    click.echo(f"Pay at:    {result.authorization_url}")


@click.command("verify")
@click.option("--reference", required=True, help="Payment reference to verify.")
@click.pass_obj
def pay_verify(settings, reference: str) -> None:
    """Check a payment with the gateway and mark the order paid on success."""
    try:
        handler = verify_payment_handler(settings)
        result = handler.handle(reference)
    except (DomainException, ConfigurationError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{result.message} (status={result.status})")
