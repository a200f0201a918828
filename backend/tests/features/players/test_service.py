"""Tests for the player query service."""

import uuid

import pytest
from unittest.mock import AsyncMock

from darts_api.core.exceptions import (
    FieldNotFoundError,
    InvalidIdentifierError,
    NoMatchInRankingBoundError,
    PlayerNotFoundError,
    QueryFailureError,
)
from darts_api.features.players.repository import PlayerRepositoryInterface
from darts_api.features.players.schemas import PlayerResponse
from darts_api.features.players.service import PlayerService


@pytest.fixture
def stored_players(make_player):
    """Store contents in insertion order."""
    return [
        make_player("Peter Wright", country="Scotland", nickname="Snakebite", ranking=9),
        make_player("Gabriel Clemens", country="Germany", nickname="The German Giant", ranking=50),
        make_player("Michael van Gerwen", country="Netherlands", nickname="Mighty Mike", ranking=3),
        make_player("Peter Wright", country="Scotland", nickname="Snakebite", ranking=2),
        make_player("Martin Schindler", country="Germany", nickname="The Wall", ranking=220),
    ]


@pytest.fixture
def mock_repository(stored_players):
    repository = AsyncMock(spec=PlayerRepositoryInterface)
    repository.fetch_all.return_value = stored_players

    distinct = {
        "country": ["Scotland", "Germany", "Netherlands"],
        "nickname": ["Snakebite", "The German Giant", "Mighty Mike", "The Wall"],
    }
    repository.fetch_distinct.side_effect = lambda field: distinct[field]
    return repository


@pytest.fixture
def service(mock_repository):
    return PlayerService(mock_repository)


class TestListPlayers:
    async def test_default_bound_dedupes_and_sorts(self, service, stored_players):
        result = await service.list_players()

        assert all(isinstance(p, PlayerResponse) for p in result)
        assert [p.name for p in result] == [
            "Michael van Gerwen",
            "Peter Wright",
            "Gabriel Clemens",
        ]
        # First stored Peter Wright wins, not the better-ranked duplicate
        wright = next(p for p in result if p.name == "Peter Wright")
        assert wright.id == stored_players[0].id
        assert wright.ranking == 9

    async def test_custom_bound(self, service):
        result = await service.list_players(max_ranking=5)

        # Filtering runs before deduplication, so the second Peter Wright
        # row is the first one inside this bound
        assert [(p.name, p.ranking) for p in result] == [
            ("Peter Wright", 2),
            ("Michael van Gerwen", 3),
        ]

    async def test_sorted_non_decreasing(self, service):
        result = await service.list_players(max_ranking=1000)

        rankings = [p.ranking for p in result]
        assert rankings == sorted(rankings)

    async def test_configured_default_bound(self, mock_repository):
        service = PlayerService(mock_repository, default_max_ranking=10)

        result = await service.list_players()

        assert [p.name for p in result] == ["Michael van Gerwen", "Peter Wright"]

    async def test_empty_store_returns_empty_list(self, service, mock_repository):
        mock_repository.fetch_all.return_value = []

        assert await service.list_players() == []

    async def test_repeated_queries_are_identical(self, service):
        assert await service.list_players() == await service.list_players()


class TestGetPlayer:
    async def test_found(self, service, mock_repository, stored_players):
        mock_repository.fetch_by_id.return_value = stored_players[1]

        result = await service.get_player(str(stored_players[1].id))

        assert result.name == "Gabriel Clemens"
        mock_repository.fetch_by_id.assert_awaited_once_with(str(stored_players[1].id))

    async def test_not_found(self, service, mock_repository):
        mock_repository.fetch_by_id.return_value = None

        with pytest.raises(PlayerNotFoundError):
            await service.get_player(str(uuid.uuid4()))

    async def test_invalid_identifier_propagates(self, service, mock_repository):
        mock_repository.fetch_by_id.side_effect = InvalidIdentifierError("nope")

        with pytest.raises(InvalidIdentifierError):
            await service.get_player("nope")


class TestDistinctValues:
    async def test_list_countries(self, service, mock_repository):
        assert await service.list_countries() == ["Scotland", "Germany", "Netherlands"]
        mock_repository.fetch_distinct.assert_awaited_once_with("country")

    async def test_list_nicknames(self, service, mock_repository):
        result = await service.list_nicknames()

        assert result[0] == "Snakebite"
        mock_repository.fetch_distinct.assert_awaited_once_with("nickname")


class TestSearchCountry:
    async def test_partial_match_within_default_bound(self, service):
        result = await service.search_country("ger")

        assert [p.name for p in result] == ["Gabriel Clemens"]

    async def test_no_match_within_bound(self, service):
        with pytest.raises(NoMatchInRankingBoundError) as exc_info:
            await service.search_country("ger", max_ranking=10)

        assert exc_info.value.max_ranking == 10

    @pytest.mark.parametrize("bound", [None, 1, 200, 10_000])
    async def test_unknown_country_skips_pipeline(self, service, mock_repository, bound):
        with pytest.raises(FieldNotFoundError) as exc_info:
            await service.search_country("france", max_ranking=bound)

        assert exc_info.value.field == "country"
        mock_repository.fetch_all.assert_not_awaited()

    async def test_results_are_sorted_and_deduped(self, service):
        result = await service.search_country("SCOT")

        assert len(result) == 1
        assert result[0].ranking == 9


class TestSearchNickname:
    async def test_results_keep_store_order(self, service):
        result = await service.search_nickname("the")

        # Store order, not ranking order: Clemens (50) before Schindler (220)
        assert [p.name for p in result] == ["Gabriel Clemens", "Martin Schindler"]

    async def test_no_ranking_bound_applied(self, service):
        result = await service.search_nickname("wall")

        assert [p.ranking for p in result] == [220]

    async def test_unknown_nickname(self, service, mock_repository):
        with pytest.raises(FieldNotFoundError) as exc_info:
            await service.search_nickname("iceman")

        assert exc_info.value.field == "nickname"
        mock_repository.fetch_all.assert_not_awaited()

    async def test_recognized_but_empty_is_not_an_error(self, service, mock_repository):
        mock_repository.fetch_all.return_value = []

        assert await service.search_nickname("snake") == []


class TestErrorNormalization:
    async def test_store_failure_becomes_query_failure(self, service, mock_repository):
        mock_repository.fetch_all.side_effect = ConnectionError("database unreachable")

        with pytest.raises(QueryFailureError) as exc_info:
            await service.list_players()

        assert exc_info.value.operation == "list_players"
        assert isinstance(exc_info.value.original_error, ConnectionError)

    async def test_distinct_failure_becomes_query_failure(self, service, mock_repository):
        mock_repository.fetch_distinct.side_effect = RuntimeError("boom")

        with pytest.raises(QueryFailureError):
            await service.search_country("ger")
