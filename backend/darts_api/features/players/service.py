"""Player query service.

Thin orchestration layer over the player repository:
- Reads raw records and distinct field values through the repository
- Gates searches on whether the term is recognized among distinct values
- Shapes results with the dedup/filter/sort pipeline
- Transforms ORM rows into API schemas

Country search and nickname search deliberately differ: country search is
ranking-bounded, sorted, and reports an empty bounded result as its own
error, while nickname search has no ranking bound, keeps store order and
returns an empty list as a normal result.
"""

from typing import Optional

import structlog

from darts_api.core.decorators import service_error_handler
from darts_api.core.exceptions import (
    FieldNotFoundError,
    NoMatchInRankingBoundError,
    PlayerNotFoundError,
)
from .pipeline import (
    DEFAULT_MAX_RANKING,
    FieldPredicate,
    PipelineOptions,
    run_pipeline,
    term_is_recognized,
)
from .repository import PlayerRepositoryInterface
from .schemas import PlayerResponse
from .transformers import player_orm_to_response, players_orm_to_response

logger = structlog.get_logger(__name__)


class PlayerService:
    """Service for read-only player queries."""

    def __init__(
        self,
        repository: PlayerRepositoryInterface,
        default_max_ranking: int = DEFAULT_MAX_RANKING,
    ):
        """Initialize player service with its repository.

        :param repository: Player repository
        :param default_max_ranking: Ranking bound used when callers pass none
        """
        self.repository = repository
        self.default_max_ranking = default_max_ranking

    def _resolve_bound(self, max_ranking: Optional[int]) -> int:
        return self.default_max_ranking if max_ranking is None else max_ranking

    @service_error_handler("PlayerService")
    async def list_players(
        self, max_ranking: Optional[int] = None
    ) -> list[PlayerResponse]:
        """List unique players within the ranking bound, best ranked first.

        :param max_ranking: Inclusive ranking bound (defaults to 200)
        :returns: Players sorted by ranking; may be empty
        """
        bound = self._resolve_bound(max_ranking)
        records = await self.repository.fetch_all()
        players = run_pipeline(records, PipelineOptions(max_ranking=bound))

        logger.info("players_listed", max_ranking=bound, count=len(players))

        return players_orm_to_response(players)

    @service_error_handler("PlayerService")
    async def get_player(self, player_id: str) -> PlayerResponse:
        """Get a single player by identifier.

        :raises InvalidIdentifierError: If the identifier is malformed
        :raises PlayerNotFoundError: If no player has this identifier
        """
        player = await self.repository.fetch_by_id(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id, operation="get_player")

        return player_orm_to_response(player)

    @service_error_handler("PlayerService")
    async def list_countries(self) -> list[str]:
        """List distinct countries in first-seen order."""
        return await self.repository.fetch_distinct("country")

    @service_error_handler("PlayerService")
    async def search_country(
        self, country: str, max_ranking: Optional[int] = None
    ) -> list[PlayerResponse]:
        """Find unique players whose country contains the term.

        :param country: Case-insensitive substring of a country name
        :param max_ranking: Inclusive ranking bound (defaults to 200)
        :returns: Matching players sorted by ranking
        :raises FieldNotFoundError: If no stored country contains the term
        :raises NoMatchInRankingBoundError: If the country is known but no
            player is within the ranking bound
        """
        bound = self._resolve_bound(max_ranking)
        countries = await self.repository.fetch_distinct("country")

        if not term_is_recognized(country, countries):
            logger.info("country_search_not_found", country=country)
            raise FieldNotFoundError("country", country, operation="search_country")

        records = await self.repository.fetch_all()
        players = run_pipeline(
            records,
            PipelineOptions(
                max_ranking=bound,
                predicate=FieldPredicate("country", country),
                sort=True,
            ),
        )

        if not players:
            logger.info(
                "country_search_no_match_in_ranking", country=country, max_ranking=bound
            )
            raise NoMatchInRankingBoundError(
                "country", country, bound, operation="search_country"
            )

        logger.info(
            "country_search_completed",
            country=country,
            max_ranking=bound,
            count=len(players),
        )

        return players_orm_to_response(players)

    @service_error_handler("PlayerService")
    async def list_nicknames(self) -> list[str]:
        """List distinct nicknames in first-seen order."""
        return await self.repository.fetch_distinct("nickname")

    @service_error_handler("PlayerService")
    async def search_nickname(self, nickname: str) -> list[PlayerResponse]:
        """Find unique players whose nickname contains the term.

        No ranking bound is applied and results stay in store order.

        :raises FieldNotFoundError: If no stored nickname contains the term
        """
        nicknames = await self.repository.fetch_distinct("nickname")

        if not term_is_recognized(nickname, nicknames):
            logger.info("nickname_search_not_found", nickname=nickname)
            raise FieldNotFoundError("nickname", nickname, operation="search_nickname")

        records = await self.repository.fetch_all()
        players = run_pipeline(
            records,
            PipelineOptions(
                max_ranking=None,
                predicate=FieldPredicate("nickname", nickname),
                sort=False,
            ),
        )

        logger.info("nickname_search_completed", nickname=nickname, count=len(players))

        return players_orm_to_response(players)
