"""Run or create Alembic migrations for the clinic schema.

Usage:
    python scripts/migrate.py                      # upgrade to head
    python scripts/migrate.py downgrade <revision>
    python scripts/migrate.py create <message>
    python scripts/migrate.py current
"""

import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def alembic_config() -> Config:
    """Config pointing at the project's alembic.ini regardless of the cwd."""
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return cfg


def run_migrations(revision: str = "head") -> None:
    """Upgrade the database to ``revision``."""
    try:
        print(f"Upgrading database to {revision}...")
        command.upgrade(alembic_config(), revision)
        print("✓ Migrations completed successfully!")
    except Exception as e:
        print(f"✗ Migration failed: {e}", file=sys.stderr)
        sys.exit(1)


def downgrade(revision: str) -> None:
    """Downgrade the database to ``revision``."""
    try:
        print(f"Downgrading database to {revision}...")
        command.downgrade(alembic_config(), revision)
        print("✓ Downgrade completed successfully!")
    except Exception as e:
        print(f"✗ Downgrade failed: {e}", file=sys.stderr)
        sys.exit(1)


def create_migration(message: str) -> None:
    """Autogenerate a revision from the table metadata."""
    try:
        print(f"Creating migration: {message}")
        command.revision(alembic_config(), message=message, autogenerate=True)
        print("✓ Migration created successfully!")
    except Exception as e:
        print(f"✗ Migration creation failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    args = sys.argv[1:]
    if not args:
        run_migrations()
    elif args[0] == "create" and len(args) > 1:
        create_migration(" ".join(args[1:]))
    elif args[0] == "downgrade" and len(args) == 2:
        downgrade(args[1])
    elif args[0] == "current":
        command.current(alembic_config(), verbose=True)
    else:
        print(__doc__)
        sys.exit(2)
