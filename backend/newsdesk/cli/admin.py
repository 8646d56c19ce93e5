from typing import Optional

import click
from pydantic import ValidationError

from newsdesk.core.config import settings
from newsdesk.core.errors import NewsDeskError
from newsdesk.core.logging_config import configure_logging
from newsdesk.db.session import SessionLocal, init_db
from newsdesk.models.account import AccountRole


@click.command("init-db")
def init_db_command():
    """Create all database tables"""
    configure_logging()
    init_db()
    click.echo("Database tables created")


@click.command("create-admin")
@click.option("--email", help="Admin email, defaults to DEFAULT_ADMIN_EMAIL")
@click.option("--password", help="Admin password, defaults to DEFAULT_ADMIN_PASSWORD")
@click.option("--name", default="Administrator", show_default=True, help="Display name")
def create_admin(email: Optional[str], password: Optional[str], name: str):
    """Seed an admin account"""
    from newsdesk.crud.account import create_account, get_account_by_email
    from newsdesk.schemas.account import AccountCreate

    configure_logging()
    email = email or settings.DEFAULT_ADMIN_EMAIL
    password = password or settings.DEFAULT_ADMIN_PASSWORD
    if not email or not password:
        raise click.UsageError("Give --email and --password or set DEFAULT_ADMIN_EMAIL and DEFAULT_ADMIN_PASSWORD")

    try:
        account_in = AccountCreate(name=name, email=email, password=password, role=AccountRole.ADMIN)
    except ValidationError as e:
        raise click.ClickException(f"Invalid admin account: {e}")

    db = SessionLocal()
    try:
        existing = get_account_by_email(db, email)
        if existing:
            click.echo(f"Account {email} already exists (id {existing.id})")
            return
        account = create_account(db, account_in)
        click.echo(f"Created admin account {account.email} (id {account.id})")
    except NewsDeskError as e:
        raise click.ClickException(e.message)
    finally:
        db.close()
