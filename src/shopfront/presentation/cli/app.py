"""Shopfront CLI application using Typer.

Command-line utilities for operating the backend: secret generation,
password policy checks, schema creation, admin promotion and serving
the API.
"""

import asyncio
import secrets

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from shopfront.infrastructure.persistence.sqlalchemy import Database
from shopfront.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from shopfront_auth import validate_password
from shopfront_config.settings import get_settings

app = typer.Typer(
    name="shopfront",
    help="Shopfront - e-commerce backend CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
password_app = typer.Typer(
    name="password",
    help="Password policy utilities",
    no_args_is_help=True,
)
db_app = typer.Typer(
    name="db",
    help="Database schema management",
    no_args_is_help=True,
)
users_app = typer.Typer(
    name="users",
    help="User administration",
    no_args_is_help=True,
)
app.add_typer(secrets_app)
app.add_typer(password_app)
app.add_typer(db_app)
app.add_typer(users_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Shopfront configuration.

    Generates two required secrets:
    - JWT_SECRET_KEY: Secret for signing JWT authentication tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Shopfront Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy for HS256
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@password_app.command("check")
def check_password(password: str = typer.Argument(..., help="Password to check")) -> None:
    """Check a password against the strength policy.

    Prints every rule the password violates; exits with status 1 if any.
    """
    result = validate_password(password)
    if result.is_valid:
        console.print("[bold green]Password meets all requirements[/bold green]")
        return

    table = Table(title="Password policy violations", show_header=False)
    table.add_column("Reason", style="red")
    for reason in result.reasons:
        table.add_row(reason)
    console.print(table)
    raise typer.Exit(code=1)


async def _create_tables() -> None:
    database = Database(get_settings().database_url)
    console.print(f"Database: [cyan]{database.display_url}[/cyan]")
    try:
        await database.create_tables()
    finally:
        await database.dispose()


@db_app.command("init")
def db_init() -> None:
    """Create all database tables (idempotent)."""
    asyncio.run(_create_tables())
    console.print("[bold green]Database schema is up to date[/bold green]")


async def _promote(email: str) -> bool:
    database = Database(get_settings().database_url)
    try:
        async with database.session() as session:
            repo = UserRepositorySQLAlchemy(session)
            user = await repo.find_by_email(email)
            if user is None:
                return False
            user.promote_to_admin()
            await repo.update(user)
            await session.commit()
            return True
    finally:
        await database.dispose()


@users_app.command("promote")
def promote_user(email: str = typer.Argument(..., help="Email of the user")) -> None:
    """Give an existing user the ADMIN role."""
    if not asyncio.run(_promote(email)):
        console.print(f"[red]No user with email {email}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[bold green]{email} is now an ADMIN[/bold green]")


@app.command("serve")
def serve(
    host: str = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "shopfront.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
