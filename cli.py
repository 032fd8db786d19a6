"""
Bodegon CLI.

Command-line interface for database bootstrap and maintenance.

    bodegon init-db
    bodegon create-admin --username admin
    bodegon seed
    bodegon wipe --yes
    bodegon reset-db
"""

import typer
from rich.console import Console
from rich.table import Table

from bodegon_api.models import Base
from bodegon_api.seed import create_admin as create_admin_user
from bodegon_api.seed import reset, seed as seed_catalog, wipe as wipe_database
from shared.config.settings import settings
from shared.infrastructure.db import Database

app = typer.Typer(
    name="bodegon",
    help="Bodegon backoffice maintenance CLI",
    add_completion=False,
)
console = Console()


def _open_database() -> Database:
    return Database(settings.database_url, echo=settings.database_echo)


def _refuse_in_production(force: bool) -> None:
    if settings.environment == "production" and not force:
        console.print("[red]Refusing to run in production without --force[/red]")
        raise typer.Exit(1)


def _print_counts(title: str, counts: dict[str, int]) -> None:
    table = Table(title=title)
    table.add_column("Kind", style="cyan")
    table.add_column("Rows", justify="right")
    for kind, count in counts.items():
        table.add_row(kind, str(count))
    console.print(table)


# =============================================================================
# Database Commands
# =============================================================================


@app.command("init-db")
def init_db():
    """Create all tables."""
    database = _open_database()
    try:
        Base.metadata.create_all(bind=database.engine)
        console.print("[green]✓ Tables created[/green]")
    finally:
        database.close()


@app.command("create-admin")
def create_admin(
    username: str = typer.Option(None, help="Defaults to ADMIN_USERNAME"),
    password: str = typer.Option(None, help="Defaults to ADMIN_PASSWORD"),
    first_name: str = typer.Option("Usuario"),
    last_name: str = typer.Option("Administrador"),
):
    """Create the bootstrap admin user (idempotent)."""
    database = _open_database()
    try:
        Base.metadata.create_all(bind=database.engine)
        with database.session() as db:
            user, created = create_admin_user(
                db,
                username or settings.admin_username,
                password or settings.admin_password,
                first_name=first_name,
                last_name=last_name,
            )
        if created:
            console.print(f"[green]✓ Admin '{user.username}' created[/green]")
        else:
            console.print(f"[yellow]Admin '{user.username}' already exists[/yellow]")
    finally:
        database.close()


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow running in production"),
):
    """Seed sample allergens, ingredients, categories and dishes."""
    _refuse_in_production(force)
    database = _open_database()
    try:
        Base.metadata.create_all(bind=database.engine)
        with database.session() as db:
            admin, _ = create_admin_user(db, settings.admin_username, settings.admin_password)
            counts = seed_catalog(db, actor_id=admin.id)
        if counts:
            _print_counts("Seeded", counts)
        else:
            console.print("[yellow]Catalog already seeded, nothing to do[/yellow]")
    finally:
        database.close()


@app.command()
def wipe(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    force: bool = typer.Option(False, "--force", "-f", help="Allow running in production"),
):
    """Delete every row from every table."""
    _refuse_in_production(force)
    if not yes:
        typer.confirm("This deletes ALL data. Continue?", abort=True)

    database = _open_database()
    try:
        with database.session() as db:
            counts = wipe_database(db)
        _print_counts("Deleted", counts)
    finally:
        database.close()


@app.command("reset-db")
def reset_db(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    force: bool = typer.Option(False, "--force", "-f", help="Allow running in production"),
):
    """Drop and recreate all tables, then seed."""
    _refuse_in_production(force)
    if not yes:
        typer.confirm("This drops ALL tables. Continue?", abort=True)

    database = _open_database()
    try:
        with database.session() as db:
            reset(db)
        with database.session() as db:
            admin, _ = create_admin_user(db, settings.admin_username, settings.admin_password)
            counts = seed_catalog(db, actor_id=admin.id)
        _print_counts("Seeded", counts)
    finally:
        database.close()


if __name__ == "__main__":
    app()
