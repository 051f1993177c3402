"""CLI tools for CRM user administration."""

import click
import pydantic

from app.core.errors import CRMError
from app.db.enums import Role
from app.db.models import User
from app.db.session import SessionLocal
from app.schemas.auth import RegisterRequest
from app.services import auth_service


@click.group()
def cli():
    """CRM CLI tools."""
    pass


@cli.command()
@click.option("--email", required=True, help="Login email")
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.ADMIN.value,
    show_default=True,
)
@click.password_option(help="Initial password (prompted when omitted)")
def create_user(email: str, first_name: str, last_name: str, role: str, password: str):
    """
    Create a user with any role.

    Self-registration is open, so this is mainly for bootstrapping the
    first admin of a fresh database.

    Example:
        python -m app.cli create-user --email admin@example.com --first-name Ada --last-name Admin
    """
    try:
        data = RegisterRequest(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            role=role,
        )
    except pydantic.ValidationError as e:
        for err in e.errors():
            click.echo(f"❌ {err['loc'][-1]}: {err['msg']}")
        raise SystemExit(1)

    db = SessionLocal()
    try:
        user, _ = auth_service.register(db, data)
        click.echo(f"✓ Created {user.role} user: {user.email}")
        click.echo(f"  ID: {user.id}")
    except CRMError as e:
        db.rollback()
        click.echo(f"❌ {e.message}")
        raise SystemExit(1)
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True, help="User email")
@click.option("--active/--inactive", default=True, help="Enable or disable the account")
def set_active(email: str, active: bool):
    """
    Enable or disable a user account.

    Disabled users cannot log in and their existing tokens stop working.
    Accounts are never deleted.

    Example:
        python -m app.cli set-active --email "user@example.com" --inactive
    """
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email.strip().lower()).first()
        if not user:
            click.echo(f"❌ User not found: {email}")
            raise SystemExit(1)

        user.is_active = active
        db.commit()

        state = "enabled" if active else "disabled"
        click.echo(f"✓ Account {state}: {user.email}")
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True, help="User email to revoke sessions for")
def revoke_sessions(email: str):
    """
    Revoke all sessions for a user by bumping their token_version.

    Example:
        python -m app.cli revoke-sessions --email "user@example.com"
    """
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email.strip().lower()).first()
        if not user:
            click.echo(f"❌ User not found: {email}")
            raise SystemExit(1)

        old_version = user.token_version
        user.token_version += 1
        db.commit()

        click.echo(f"✓ Revoked all sessions for {user.email}")
        click.echo(f"  Token version: {old_version} → {user.token_version}")
    finally:
        db.close()


if __name__ == "__main__":
    cli()
