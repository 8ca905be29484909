"""Schema migration runner built on Alembic."""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from alembic.util import CommandError
from sqlalchemy.exc import SQLAlchemyError

from src.config import get_settings
from src.database import create_engine_for
from src.errors import MigrationError

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"
SCRIPT_LOCATION = PROJECT_ROOT / "alembic"


def get_alembic_config(database_url: str) -> Config:
    """Build an Alembic config pointing at the bundled migrations."""
    config = Config(str(ALEMBIC_INI)) if ALEMBIC_INI.exists() else Config()
    config.set_main_option("script_location", str(SCRIPT_LOCATION))
    # ConfigParser interpolation treats % specially
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    config.attributes["configure_logger"] = False
    return config


class MigrationRunner:
    """Apply the ordered schema migrations to one database."""

    def __init__(self, database_url: str | None = None):
        self.database_url = database_url or get_settings().database_url
        self.config = get_alembic_config(self.database_url)
        self.script = ScriptDirectory.from_config(self.config)

    def revisions(self) -> list[str]:
        """All revision ids, oldest first."""
        return [script.revision for script in reversed(list(self.script.walk_revisions()))]

    def current(self) -> str | None:
        """Revision recorded in the database, or None if it is not version controlled."""
        engine = create_engine_for(self.database_url)
        try:
            with engine.connect() as connection:
                return MigrationContext.configure(connection).get_current_revision()
        finally:
            engine.dispose()

    def pending(self) -> list[str]:
        """Revision ids not yet applied, oldest first."""
        revisions = self.revisions()
        current = self.current()
        if current is None:
            return revisions
        if current not in revisions:
            raise MigrationError(f"Database is at unknown revision {current}", revision=current)
        return revisions[revisions.index(current) + 1 :]

    def is_up_to_date(self) -> bool:
        return not self.pending()

    def upgrade(self, revision: str = "head") -> list[str]:
        """Apply pending migrations up to ``revision`` and return the ids applied."""
        before = self.pending()
        if revision != "head":
            revisions = self.revisions()
            if revision not in revisions:
                raise MigrationError(f"No migration with revision {revision} exists", revision)
            before = [rev for rev in before if revisions.index(rev) <= revisions.index(revision)]

        if not before:
            logger.info("Database is up to date, nothing to apply")
            return []

        logger.info(f"Upgrading to {revision}, {len(before)} migration(s) pending")

        engine = create_engine_for(self.database_url)
        try:
            with engine.begin() as connection:
                self.config.attributes["connection"] = connection
                command.upgrade(self.config, revision)
        except (SQLAlchemyError, CommandError) as e:
            logger.error(f"Migration to {revision} failed: {e}")
            raise MigrationError(f"Migration to {revision} failed: {e}", revision) from e
        finally:
            self.config.attributes.pop("connection", None)
            engine.dispose()

        for rev in before:
            logger.info(f"Applied migration {rev}")
        logger.info(f"Database now at {before[-1]}")
        return before


def run_migrations(database_url: str | None = None, revision: str = "head") -> list[str]:
    """Upgrade the configured database to ``revision``."""
    return MigrationRunner(database_url).upgrade(revision)
