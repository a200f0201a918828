"""Transformers for converting between layers in players feature.

ORM models → Pydantic schemas (API responses).
"""

from typing import Iterable

from .orm_models import PlayerORM
from .schemas import PlayerResponse


def player_orm_to_response(player: PlayerORM) -> PlayerResponse:
    """Transform a stored player into the API response schema.

    :param player: Player record from the database
    :returns: Player response schema for API
    """
    return PlayerResponse.model_validate(player)


def players_orm_to_response(players: Iterable[PlayerORM]) -> list[PlayerResponse]:
    """Transform stored players, keeping their order."""
    return [player_orm_to_response(player) for player in players]
