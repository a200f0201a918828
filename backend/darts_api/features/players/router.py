"""Player catalog API endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException, Query, status

from darts_api.core.exceptions import (
    FieldNotFoundError,
    InvalidIdentifierError,
    NoMatchInRankingBoundError,
    PlayerNotFoundError,
    QueryFailureError,
)
from .dependencies import PlayerServiceDep
from .schemas import ErrorResponse, PlayerResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["players"])

GENERIC_ERROR_DETAIL = "Something went wrong"

RankingQuery = Query(
    None,
    description="Inclusive upper ranking bound (defaults to 200)",
)


def _query_failed(error: QueryFailureError) -> HTTPException:
    logger.error(
        "player_query_failed",
        operation=error.operation,
        error=error.message,
    )
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail=GENERIC_ERROR_DETAIL
    )


@router.get(
    "/players",
    response_model=list[PlayerResponse],
    responses={400: {"model": ErrorResponse}},
)
async def list_players(
    player_service: PlayerServiceDep,
    ranking: Optional[int] = RankingQuery,
):
    """
    List unique players within a ranking bound, best ranked first.

    Examples:
        GET /players
        GET /players?ranking=16
    """
    try:
        return await player_service.list_players(max_ranking=ranking)
    except QueryFailureError as e:
        raise _query_failed(e)


@router.get(
    "/players/player/{player_id}",
    response_model=PlayerResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_player(player_id: str, player_service: PlayerServiceDep):
    """Get a single player by identifier."""
    try:
        return await player_service.get_player(player_id)
    except InvalidIdentifierError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid player id"
        )
    except PlayerNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Player not found"
        )
    except QueryFailureError as e:
        raise _query_failed(e)


@router.get(
    "/countries",
    response_model=list[str],
    responses={400: {"model": ErrorResponse}},
)
async def list_countries(player_service: PlayerServiceDep):
    """List every country represented in the catalog."""
    try:
        return await player_service.list_countries()
    except QueryFailureError as e:
        raise _query_failed(e)


@router.get(
    "/countries/{country}",
    response_model=list[PlayerResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def search_country(
    country: str,
    player_service: PlayerServiceDep,
    ranking: Optional[int] = RankingQuery,
):
    """
    Find players whose country contains the given text, best ranked first.

    Examples:
        GET /countries/ger
        GET /countries/netherlands?ranking=50
    """
    try:
        return await player_service.search_country(country, max_ranking=ranking)
    except FieldNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Country not found"
        )
    except NoMatchInRankingBoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No player within this ranking",
        )
    except QueryFailureError as e:
        raise _query_failed(e)


@router.get(
    "/nicknames",
    response_model=list[str],
    responses={400: {"model": ErrorResponse}},
)
async def list_nicknames(player_service: PlayerServiceDep):
    """List every player nickname in the catalog."""
    try:
        return await player_service.list_nicknames()
    except QueryFailureError as e:
        raise _query_failed(e)


@router.get(
    "/nicknames/{nickname}",
    response_model=list[PlayerResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def search_nickname(nickname: str, player_service: PlayerServiceDep):
    """Find players whose nickname contains the given text."""
    try:
        return await player_service.search_nickname(nickname)
    except FieldNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Nickname not found"
        )
    except QueryFailureError as e:
        raise _query_failed(e)
