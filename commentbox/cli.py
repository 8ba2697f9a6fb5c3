"""CLI entry point for comment service management commands."""

import sys

import click

from commentbox import create_app
from commentbox.database import (
    check_db_connection,
    get_current_revision,
    get_pending_migrations,
    upgrade_database,
)
from commentbox.exceptions import BusinessLogicException


@click.group()
def cli() -> None:
    """Comment service CLI - Database and admin secret management commands."""
    pass


@cli.command()
@click.option("--recreate", is_flag=True, help="Drop all tables before upgrading")
@click.option(
    "--yes-i-am-sure",
    is_flag=True,
    help="Required safety flag when using --recreate",
)
def upgrade_db(recreate: bool, yes_i_am_sure: bool) -> None:
    """Upgrade database to latest migration.

    Applies all pending Alembic migrations to bring the database schema up to date.
    Use --recreate to drop all tables first (useful for development).

    Examples:
        commentbox-cli upgrade-db                              Apply pending migrations
        commentbox-cli upgrade-db --recreate --yes-i-am-sure   Drop all tables and recreate
    """
    # Safety check for recreate
    if recreate and not yes_i_am_sure:
        click.echo(
            "Error: --recreate requires --yes-i-am-sure flag for safety", err=True
        )
        click.echo(
            "   This will DROP ALL TABLES and recreate from migrations!", err=True
        )
        sys.exit(1)

    app = create_app()

    with app.app_context():
        # Check database connection first
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

        if recreate:
            click.echo("WARNING: About to drop all tables and recreate from migrations!")
            click.echo("   This will permanently delete all comments and the stored admin secret.")

        # Show pending migrations
        pending = get_pending_migrations()
        if not pending and not recreate:
            click.echo("Database is already up to date")
            return

        if pending:
            click.echo(f"Found {len(pending)} pending migration(s)")

        try:
            applied = upgrade_database(recreate=recreate)
            if applied:
                click.echo(f"Applied {len(applied)} migration(s):")
                for rev, desc in applied:
                    click.echo(f"  - {rev}: {desc}")
            click.echo("Database upgrade complete")
        except Exception as e:
            click.echo(f"Error during database upgrade: {e}", err=True)
            sys.exit(1)


@cli.command()
def db_status() -> None:
    """Show database migration status.

    Displays current database revision and any pending migrations.
    """
    app = create_app()

    with app.app_context():
        # Check database connection first
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

        current = get_current_revision()
        pending = get_pending_migrations()

        if current:
            click.echo(f"Current revision: {current}")
        else:
            click.echo("No migrations applied yet")

        if pending:
            click.echo(f"Pending migrations: {len(pending)}")
            for rev in pending:
                click.echo(f"  - {rev}")
        else:
            click.echo("No pending migrations")


@cli.command()
@click.option(
    "--new-secret",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="New admin secret (at least 8 characters)",
)
@click.option(
    "--current-secret",
    default=None,
    help="Current admin secret (required once a secret is configured)",
)
def set_admin_secret(new_secret: str, current_secret: str | None) -> None:
    """Set or rotate the admin secret stored in the database.

    Follows the same rules as POST /setup.

    Examples:
        commentbox-cli set-admin-secret                                 Prompt for the first secret
        commentbox-cli set-admin-secret --current-secret OLD --new-secret NEW
    """
    app = create_app()

    with app.app_context():
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

        session = app.container.db_session()
        try:
            app.container.admin_secret_service().update(current_secret, new_secret)
            session.commit()
        except BusinessLogicException as e:
            session.rollback()
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        finally:
            session.close()
            app.container.db_session.reset()

        click.echo("Admin secret updated")


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
