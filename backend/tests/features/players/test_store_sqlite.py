"""Player store and service against a real SQLite database.

Store order must be insertion order for first-wins deduplication, so these
tests seed through ``seed_players`` and read back through the real
repository rather than a mocked session.
"""

import pytest

from darts_api.core import DatabaseManager, Settings
from darts_api.core.exceptions import NoMatchInRankingBoundError
from darts_api.features.players.repository import SQLAlchemyPlayerRepository
from darts_api.features.players.seed import seed_players
from darts_api.features.players.service import PlayerService
from darts_api.init_db import create_tables

SEED_RECORDS = [
    {"name": "Z", "country": "Wales", "nickname": "Zed", "ranking": 40},
    {"name": "A", "country": "Germany", "nickname": "Alpha", "ranking": "50"},
    {"name": "Z", "country": "Wales", "nickname": "Zed", "ranking": 1},
    {"name": "B", "country": "germany", "nickname": None, "ranking": "n/a"},
    {"name": "C", "country": "Austria", "nickname": "Cee", "ranking": 10},
]


@pytest.fixture
async def db_manager(tmp_path):
    settings = Settings(
        _env_file=None,
        database_url_override=f"sqlite+aiosqlite:///{tmp_path / 'players.db'}",
    )
    manager = DatabaseManager(settings)
    await create_tables(manager)
    async with manager.get_session() as session:
        await seed_players(session, SEED_RECORDS)
    yield manager
    await manager.close()


@pytest.fixture
async def session(db_manager):
    async with db_manager.get_session() as session:
        yield session


@pytest.fixture
def repository(session):
    return SQLAlchemyPlayerRepository(session)


@pytest.fixture
def service(repository):
    return PlayerService(repository)


class TestStoreOrder:
    async def test_fetch_all_returns_insertion_order(self, repository):
        players = await repository.fetch_all()

        assert [(p.name, p.ranking) for p in players] == [
            ("Z", 40),
            ("A", 50),
            ("Z", 1),
            ("B", None),
            ("C", 10),
        ]

    async def test_distinct_countries_by_first_occurrence(self, repository):
        countries = await repository.fetch_distinct("country")

        assert countries == ["Wales", "Germany", "germany", "Austria"]

    async def test_distinct_nicknames_exclude_nulls(self, repository):
        nicknames = await repository.fetch_distinct("nickname")

        assert nicknames == ["Zed", "Alpha", "Cee"]

    async def test_fetch_by_id_round_trips(self, repository):
        first = (await repository.fetch_all())[0]

        found = await repository.fetch_by_id(str(first.id))

        assert found.row_id == first.row_id

    async def test_reseeding_replaces_rows(self, db_manager, repository):
        async with db_manager.get_session() as other_session:
            await seed_players(other_session, SEED_RECORDS[:2])

        players = await repository.fetch_all()

        assert [p.name for p in players] == ["Z", "A"]


class TestServiceOverStore:
    async def test_list_players_keeps_first_stored_duplicate(self, service):
        result = await service.list_players()

        assert [(p.name, p.ranking) for p in result] == [
            ("C", 10),
            ("Z", 40),
            ("A", 50),
        ]

    async def test_search_nickname_keeps_store_order(self, service):
        result = await service.search_nickname("e")

        assert [(p.name, p.ranking) for p in result] == [("Z", 40), ("C", 10)]

    async def test_search_country_matches_any_case(self, service):
        result = await service.search_country("ger")

        assert [(p.name, p.ranking) for p in result] == [("A", 50)]

    async def test_search_country_outside_bound(self, service):
        with pytest.raises(NoMatchInRankingBoundError):
            await service.search_country("ger", max_ranking=10)
