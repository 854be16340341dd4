"""CDCP CLI application using Typer.

Operational utilities: secret generation, database initialization,
confirmation code maintenance and development tokens.
"""

import asyncio
import secrets
from datetime import timedelta

import typer
from rich.console import Console
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from cdcp.application.services import ConfirmationCodeService
from cdcp.domain.user import ConfirmationCodeEngine
from cdcp.infrastructure.persistence.sqlalchemy.init_db import init_database
from cdcp.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from cdcp.infrastructure.security import JWTService
from cdcp_config.settings import Settings, get_settings

app = typer.Typer(
    name="cdcp",
    help="CDCP Notifications CLI",
    no_args_is_help=True,
)
console = Console()

secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
db_app = typer.Typer(name="db", help="Database management", no_args_is_help=True)
codes_app = typer.Typer(
    name="codes",
    help="Confirmation code maintenance",
    no_args_is_help=True,
)
tokens_app = typer.Typer(
    name="tokens",
    help="Bearer tokens for local development",
    no_args_is_help=True,
)
app.add_typer(secrets_app)
app.add_typer(db_app)
app.add_typer(codes_app)
app.add_typer(tokens_app)


def _create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(settings.database_url, echo=False, pool_pre_ping=True)


def _display_url(database_url: str) -> str:
    return database_url.split("@")[-1] if "@" in database_url else database_url


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for the configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]CDCP Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes for a strong HS256 signing key
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={secrets.token_urlsafe(64)}")
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={secrets.token_urlsafe(32)}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@db_app.command("init")
def db_init() -> None:
    """Create missing tables and seed reference data (idempotent)."""
    settings = get_settings()
    console.print(f"Database: [bold]{_display_url(settings.database_url)}[/bold]")

    async def _run() -> None:
        engine = _create_engine(settings)
        try:
            await init_database(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[green]Database initialized successfully.[/green]")


@codes_app.command("sweep")
def sweep_codes() -> None:
    """Delete every expired confirmation code now."""
    settings = get_settings()
    code_engine = ConfirmationCodeEngine(
        code_length=settings.confirmation_code_length,
        expiry=settings.confirmation_code_expiry,
    )

    async def _run() -> int:
        engine = _create_engine(settings)
        try:
            async with async_sessionmaker(engine, expire_on_commit=False)() as session:
                service = ConfirmationCodeService(
                    UserRepositorySQLAlchemy(session),
                    code_engine,
                )
                removed = await service.sweep_expired()
                await session.commit()
                return removed
        finally:
            await engine.dispose()

    removed = asyncio.run(_run())
    console.print(f"Removed [bold]{removed}[/bold] expired confirmation code(s).")


@tokens_app.command("create")
def create_token(
    subject: str = typer.Option("cdcp-cli", help="Token subject (audit actor)"),
    hours: int = typer.Option(1, min=1, help="Lifetime in hours"),
) -> None:
    """Sign a bearer token carrying the required role."""
    settings = get_settings()
    jwt_service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )
    token = jwt_service.create_access_token(
        subject,
        roles=[settings.jwt_required_role],
        expires_delta=timedelta(hours=hours),
    )
    console.print(token, soft_wrap=True)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
