"""Alembic migration runner.

Migrations live in the ``migrations`` directory next to this module and
are applied in revision order. Alembic records the applied revision in
the ``alembic_version`` table, so upgrading an up-to-date database is a
no-op.
"""

import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def get_alembic_config() -> Config:
    """Build an Alembic config pointing at the packaged migrations.

    Returns:
        Alembic Config without an ini file
    """
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    return config


def upgrade_database(engine: Engine, revision: str = "head") -> None:
    """Apply migrations up to a revision.

    Args:
        engine: Engine for the target database
        revision: Target revision identifier (default "head")
    """
    config = get_alembic_config()
    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, revision)
    logger.info(f"Database schema upgraded to {revision}")


def current_revision(engine: Engine) -> Optional[str]:
    """Get the revision currently recorded in the database.

    Returns:
        Revision identifier, or None for an unversioned database
    """
    with engine.connect() as connection:
        context = MigrationContext.configure(connection)
        return context.get_current_revision()
