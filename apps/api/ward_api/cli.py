"""CLI tools for ward dashboard administration."""

import uuid

import click

from ward_api.core.permissions import ROLE_DEFAULTS, default_grants_for_role
from ward_api.db.enums import Role, UserStatus
from ward_api.db.models import User
from ward_api.db.session import SessionLocal
from ward_api.services import permission_service


@click.group()
def cli():
    """Ward dashboard CLI tools."""
    pass


@cli.command()
@click.option("--email", required=True, help="Operator email address")
@click.option("--name", required=True, help="Display name")
@click.option(
    "--provider-user-id",
    required=True,
    help="User id of the existing identity provider account",
)
def create_admin(email: str, name: str, provider_user_id: str):
    """
    Create (or promote) an admin operator.

    This is the bootstrap command for the first operator. The identity
    provider account must already exist; its id links the two.

    Example:
        python -m ward_api.cli create-admin --email clerk@example.org --name "Ward Clerk" \\
            --provider-user-id 5f0c...
    """
    try:
        user_id = uuid.UUID(provider_user_id)
    except ValueError:
        raise click.BadParameter("must be a UUID", param_hint="--provider-user-id")

    db = SessionLocal()
    try:
        user = db.get(User, user_id)
        if user:
            user.role = Role.ADMIN.value
            user.status = UserStatus.ACTIVE.value
            user.permissions = permission_service.role_defaults_json(Role.ADMIN.value)
            action = "Promoted"
        else:
            user = User(
                id=user_id,
                email=email.strip().lower(),
                name=name.strip(),
                role=Role.ADMIN.value,
                status=UserStatus.ACTIVE.value,
                permissions=permission_service.role_defaults_json(Role.ADMIN.value),
            )
            db.add(user)
            action = "Created"
        db.commit()
        click.echo(f"✓ {action} admin operator {user.email}")
        click.echo(f"  ID: {user.id}")
    except Exception as e:
        db.rollback()
        raise click.ClickException(f"Error: {e}")
    finally:
        db.close()


@cli.command()
@click.argument("role", required=False)
def show_role_defaults(role: str | None):
    """Print the default grant table (optionally for one ROLE)."""
    roles = [role] if role else list(ROLE_DEFAULTS)
    for name in roles:
        grants = default_grants_for_role(name)
        click.echo(f"{name}:")
        if not grants:
            click.echo("  (no grants)")
        for grant in grants:
            click.echo(f"  {grant.resource.value}:{grant.action.value}")


if __name__ == "__main__":
    cli()
