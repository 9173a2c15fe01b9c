"""Account management commands."""

import typer
from rich.console import Console
from rich.table import Table
from sqlmodel import select

from src.bookstore.core.services.database import DbManageService, DbSessionService
from src.bookstore.core.services.identity import IdentityService
from src.bookstore.entities.identity import UserTable
from src.bookstore.runtime.context import get_config

console = Console()


def create_user(
    email: str = typer.Argument(..., help="Email address, also used as the username"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password"
    ),
    admin: bool = typer.Option(False, "--admin", help="Grant the administrator role"),
) -> None:
    """Register an account, optionally as an administrator."""
    security = get_config().security
    roles = [security.default_role] if security.default_role else []
    if admin:
        roles.append(security.admin_role)

    db_service = DbSessionService()
    try:
        manage = DbManageService(db_service)
        manage.create_all()
        manage.seed_roles()
        with db_service.session_scope() as session:
            identity = IdentityService(session)
            result = identity.create_user(email, password, roles=roles)
    finally:
        db_service.dispose()

    if not result.succeeded:
        for error in result.errors:
            console.print(f"[red]{error.code}: {error.description}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]Created user {email}[/green] roles: {', '.join(roles) or '-'}")


def list_users() -> None:
    """List registered accounts with their roles."""
    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Email", style="green")
    table.add_column("Roles", style="yellow")

    db_service = DbSessionService()
    try:
        with db_service.session_scope() as session:
            rows = session.exec(select(UserTable).order_by(UserTable.email)).all()
            for row in rows:
                table.add_row(row.id, row.email, ", ".join(r.name for r in row.roles))
    finally:
        db_service.dispose()

    console.print(table)
    console.print(f"\n[green]Found {len(rows)} users[/green]")
