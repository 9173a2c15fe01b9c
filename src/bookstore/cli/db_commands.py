"""Schema and seed data commands."""

import typer
from rich.console import Console

from src.bookstore.runtime.context import get_config
from src.bookstore.runtime.init_db import init_db

console = Console()


def init_db_command() -> None:
    """Create all tables and the configured roles."""
    try:
        created = init_db(seed_users=False)
    except Exception as e:
        console.print(f"[red]Failed to initialize database: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Database ready at[/green] {get_config().database.url}")
    if created["roles"]:
        console.print(f"[green]Created roles:[/green] {', '.join(created['roles'])}")


def seed_command() -> None:
    """Create the configured roles and seed accounts."""
    try:
        created = init_db(seed_users=True)
    except Exception as e:
        console.print(f"[red]Seeding failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Roles created:[/green] {len(created['roles'])}")
    console.print(f"[green]Users created:[/green] {', '.join(created['users']) or 'none'}")
