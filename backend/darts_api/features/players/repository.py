"""Repository pattern implementation for players feature.

Provides collection-like, read-only access to stored player records.
Isolates data access logic from the query shaping in the service layer.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from darts_api.core.exceptions import InvalidIdentifierError
from .orm_models import PlayerORM

logger = structlog.get_logger(__name__)

# Fields whose distinct values can be listed and searched
DISTINCT_FIELDS = ("country", "nickname")


def parse_player_id(player_id: str) -> uuid.UUID:
    """Parse a public player identifier.

    :param player_id: Identifier as received from the client
    :returns: Parsed UUID
    :raises InvalidIdentifierError: If the identifier is not a well-formed UUID
    """
    try:
        return uuid.UUID(str(player_id))
    except (ValueError, AttributeError, TypeError) as e:
        raise InvalidIdentifierError(
            player_id, operation="fetch_by_id", original_error=e
        ) from e


class PlayerRepositoryInterface(ABC):
    """Interface for player repository.

    Defines contract for data access operations.
    Enables mocking and potential swap of implementations.
    """

    @abstractmethod
    async def fetch_all(self) -> list[PlayerORM]:
        """Get every stored player in insertion order.

        :returns: All player records, duplicates included
        """
        pass

    @abstractmethod
    async def fetch_distinct(self, field: str) -> list[str]:
        """Get the distinct non-null values of a field.

        :param field: Either ``"country"`` or ``"nickname"``
        :returns: Distinct values ordered by first occurrence
        :raises ValueError: If the field cannot be listed
        """
        pass

    @abstractmethod
    async def fetch_by_id(self, player_id: str) -> Optional[PlayerORM]:
        """Get a player by its public identifier.

        :param player_id: Player identifier string
        :returns: PlayerORM if found, None otherwise
        :raises InvalidIdentifierError: If the identifier is malformed
        """
        pass


class SQLAlchemyPlayerRepository(PlayerRepositoryInterface):
    """SQLAlchemy implementation of player repository."""

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session.

        :param db: Async database session
        """
        self.db = db

    async def fetch_all(self) -> list[PlayerORM]:
        """Get every stored player in insertion order."""
        stmt = select(PlayerORM).order_by(PlayerORM.row_id)

        result = await self.db.execute(stmt)
        players = list(result.scalars().all())

        logger.debug("players_fetched", count=len(players))

        return players

    async def fetch_distinct(self, field: str) -> list[str]:
        """Get distinct non-null values of a field by first occurrence."""
        if field not in DISTINCT_FIELDS:
            raise ValueError(f"Cannot list distinct values of field: {field}")

        column = getattr(PlayerORM, field)
        stmt = (
            select(column)
            .where(column.is_not(None))
            .group_by(column)
            .order_by(func.min(PlayerORM.row_id))
        )

        result = await self.db.execute(stmt)
        values = list(result.scalars().all())

        logger.debug("distinct_values_fetched", field=field, count=len(values))

        return values

    async def fetch_by_id(self, player_id: str) -> Optional[PlayerORM]:
        """Get a player by its public identifier."""
        parsed_id = parse_player_id(player_id)

        stmt = select(PlayerORM).where(PlayerORM.id == parsed_id)

        result = await self.db.execute(stmt)
        player = result.scalar_one_or_none()

        logger.debug("player_fetched_by_id", player_id=str(parsed_id), found=player is not None)

        return player
