"""Main CLI application module."""

import typer
from dotenv.main import load_dotenv

from .db_commands import init_db_command, seed_command
from .server_commands import serve
from .user_commands import create_user, list_users

# Create the main CLI application
app = typer.Typer(
    help="BookStore API management tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="init-db")(init_db_command)
app.command(name="seed")(seed_command)
app.command(name="create-user")(create_user)
app.command(name="list-users")(list_users)
app.command(name="serve")(serve)


def main() -> None:
    """Main entry point for the CLI."""
    # Placeholders in config.yaml read os.environ, so .env must be loaded first
    load_dotenv()
    app()


if __name__ == "__main__":
    main()
