"""
Schema migrations for the game history tables.
Each migration runs once and is recorded in the ``migration`` table.
"""

from sqlmodel import SQLModel, Field, create_engine, text, Session, select
from typing import Optional
from datetime import datetime, timezone

from .config import settings
from .logging_utils import get_logger

logger = get_logger("wordguess.migrations")


class Migration(SQLModel, table=True):
    """Applied migration marker"""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    applied_at: datetime


MIGRATIONS = [
    (
        "001_history_indexes",
        """
        CREATE INDEX IF NOT EXISTS idx_historyentry_game_timestamp ON historyentry(game_id, timestamp);
        CREATE INDEX IF NOT EXISTS idx_gamerecord_started_at ON gamerecord(started_at)
        """,
    ),
    (
        "002_gamerecord_status_index",
        """
        CREATE INDEX IF NOT EXISTS idx_gamerecord_status ON gamerecord(status)
        """,
    ),
]


def get_engine():
    return create_engine(settings.database_url, echo=False, connect_args=settings.connect_args())


def has_migration_been_applied(engine, migration_name: str) -> bool:
    Migration.metadata.create_all(engine, tables=[Migration.__table__])
    with Session(engine) as session:
        result = session.exec(
            select(Migration).where(Migration.name == migration_name)
        ).first()
        return result is not None


def apply_migration(engine, migration_name: str, migration_sql: str) -> bool:
    """Apply a migration unless already recorded. Returns True when it ran."""
    if has_migration_been_applied(engine, migration_name):
        logger.debug(f"Migration {migration_name} already applied, skipping")
        return False

    logger.info(f"Applying migration: {migration_name}")
    with Session(engine) as session:
        try:
            for statement in migration_sql.strip().split(';'):
                statement = statement.strip()
                if statement:
                    session.execute(text(statement))
            session.add(Migration(name=migration_name, applied_at=datetime.now(timezone.utc)))
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Failed to apply migration {migration_name}", extra={"error": str(e)})
            raise
    return True


def run_migrations(engine=None) -> int:
    """Run all pending migrations, returning how many were applied."""
    engine = engine or get_engine()
    applied = 0
    for name, sql in MIGRATIONS:
        if apply_migration(engine, name, sql):
            applied += 1
    logger.info("migrations_completed")
    return applied
