import click

from chatorder.infrastructure.cli.chat_commands import chat_send, session_new
from chatorder.infrastructure.cli.menu_commands import menu_list
from chatorder.infrastructure.cli.payment_commands import pay_init, pay_verify
from chatorder.infrastructure.config import load_settings
from chatorder.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """chatorder — numeric chat ordering assistant"""
    settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@cli.group()
def chat() -> None:
    """Talk to the ordering assistant."""


@cli.group()
def menu() -> None:
    """Inspect the menu."""


@cli.group()
def pay() -> None:
    """Pay for placed orders."""


@cli.group()
def session() -> None:
    """Manage visitor sessions."""


# Register subcommands
chat.add_command(chat_send)
menu.add_command(menu_list)
pay.add_command(pay_init)
pay.add_command(pay_verify)
session.add_command(session_new)
