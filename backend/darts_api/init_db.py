"""Database initialization and seeding commands.

Creates the tables defined in SQLAlchemy models and loads the player seed
file. Also used by the application lifespan when ``RESET_DB`` is set.
"""

import asyncio
import sys
from pathlib import Path
from typing import NoReturn, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from darts_api.core import Base, DatabaseManager, get_global_settings, setup_logging
from darts_api.features.players.seed import load_seed_records, seed_players

logger = structlog.get_logger(__name__)


async def create_tables(db_manager: DatabaseManager) -> None:
    """Create all tables defined in Base.metadata if they are missing.

    Raises:
        SQLAlchemyError: If database connection or table creation fails
    """
    try:
        async with db_manager.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info(
            "Database tables ready",
            table_names=list(Base.metadata.tables.keys()),
        )
    except SQLAlchemyError as e:
        logger.error(
            "Database initialization failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise


async def drop_tables(db_manager: DatabaseManager) -> None:
    """Drop all tables from the database.

    WARNING: This is destructive and will delete all data!
    """
    try:
        logger.warning("Dropping all database tables...")
        async with db_manager.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("All database tables dropped successfully")
    except SQLAlchemyError as e:
        logger.error(
            "Failed to drop database tables",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise


async def seed_from_file(db_manager: DatabaseManager, seed_file: Path) -> int:
    """Create tables and replace stored players with the seed file contents.

    :returns: Number of players inserted
    """
    await create_tables(db_manager)
    records = load_seed_records(seed_file)

    async with db_manager.get_session() as session:
        inserted = await seed_players(session, records)

    logger.info("Seed import completed", seed_file=str(seed_file), inserted=inserted)
    return inserted


async def run_command(command: str, seed_file: Optional[Path] = None) -> None:
    """Run one database command against the configured database."""
    settings = get_global_settings()
    db_manager = DatabaseManager(settings)
    try:
        if command == "init":
            await create_tables(db_manager)
        elif command == "drop":
            await drop_tables(db_manager)
        elif command == "reset":
            await drop_tables(db_manager)
            await seed_from_file(db_manager, seed_file or settings.seed_file)
        elif command == "seed":
            await seed_from_file(db_manager, seed_file or settings.seed_file)
        else:
            raise ValueError(f"Unknown command: {command}")
    finally:
        await db_manager.close()


def main() -> NoReturn:
    """Run CLI for database commands.

    Supports commands:
    - init: Create all tables (default)
    - drop: Drop all tables (WARNING: destructive)
    - reset: Drop, recreate and seed (WARNING: destructive)
    - seed: Replace stored players with the seed file

    Usage:
        python -m darts_api.init_db [init|drop|reset|seed] [seed_file]
    """
    setup_logging(get_global_settings().log_level)
    command = sys.argv[1] if len(sys.argv) > 1 else "init"
    seed_file = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    if command not in {"init", "drop", "reset", "seed"}:
        logger.error("Unknown command", command=command)
        print("Usage: python -m darts_api.init_db [init|drop|reset|seed] [seed_file]")
        sys.exit(1)

    asyncio.run(run_command(command, seed_file))
    sys.exit(0)


if __name__ == "__main__":
    main()
