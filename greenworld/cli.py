"""CLI tools for GreenWorld administration."""

import click

from greenworld.core.security import PASSWORD_MAX_BYTES, password_fits_bcrypt
from greenworld.db.enums import Role
from greenworld.db.session import SessionLocal, init_db


@click.group()
def cli():
    """GreenWorld CLI tools."""
    pass


@cli.command("init-db")
def init_db_command():
    """
    Create all tables that do not exist yet.

    Production deployments should prefer `alembic upgrade head`.
    """
    init_db()
    click.echo("✓ Database tables created")


@cli.command()
def seed():
    """
    Insert demo accounts and projects (password: password123).

    Skipped when any user already exists.

    Example:
        greenworld seed
    """
    from greenworld.services.seed_service import DEMO_PASSWORD, DEMO_USERS, seed_demo_data

    init_db()
    db = SessionLocal()
    try:
        if not seed_demo_data(db):
            click.echo("Database already has users, skipping seed")
            return
        db.commit()

        click.echo("✓ Seeded demo data")
        for demo in DEMO_USERS:
            click.echo(f"  {demo['role'].value:<10} {demo['email']}")
        click.echo(f"→ All demo accounts use password: {DEMO_PASSWORD}")

    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
        raise SystemExit(1)
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True, help="Admin email address")
@click.option("--name", required=True, help="Display name")
@click.option("--password", required=True, prompt=True, hide_input=True, help="Login password")
def create_admin(email: str, name: str, password: str):
    """
    Create an admin account.

    Example:
        greenworld create-admin --email "ops@greenworld.org" --name "Ops"
    """
    from greenworld.services import user_service

    if len(password) < 6:
        click.echo("❌ Password must be at least 6 characters")
        raise SystemExit(1)
    if not password_fits_bcrypt(password):
        click.echo(f"❌ Password must be at most {PASSWORD_MAX_BYTES} bytes")
        raise SystemExit(1)

    db = SessionLocal()
    try:
        user = user_service.create_user(
            db, email=email, password=password, name=name, role=Role.ADMIN
        )
        db.commit()

        click.echo(f"✓ Created admin: {user.email}")
        click.echo(f"  ID: {user.id}")

    except user_service.EmailAlreadyRegisteredError:
        db.rollback()
        click.echo(f"❌ User already exists: {email}")
        raise SystemExit(1)
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
        raise SystemExit(1)
    finally:
        db.close()


@cli.command()
@click.option("--user-id", required=True, type=int, help="Volunteer user ID")
@click.option("--project-id", required=True, type=int, help="Project ID")
def issue_certificate(user_id: int, project_id: int):
    """
    Issue a certificate for the hours a volunteer has logged on a project.

    Example:
        greenworld issue-certificate --user-id 4 --project-id 3
    """
    from greenworld.services import volunteer_service

    db = SessionLocal()
    try:
        certificate = volunteer_service.issue_certificate(db, user_id, project_id)
        db.commit()

        click.echo(f"✓ Issued certificate {certificate.id}")
        click.echo(f"  Hours: {certificate.hours}")

    except volunteer_service.RegistrationNotFoundError:
        db.rollback()
        click.echo(f"❌ User {user_id} is not registered for project {project_id}")
        raise SystemExit(1)
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
        raise SystemExit(1)
    finally:
        db.close()


if __name__ == "__main__":
    cli()
