"""Shared fixtures for the darts player catalog tests."""

import uuid
from typing import Any, Callable

import pytest

from darts_api.features.players.orm_models import PlayerORM


@pytest.fixture
def make_player() -> Callable[..., PlayerORM]:
    """Build transient player records with sensible defaults."""

    def _make(name: str, **overrides: Any) -> PlayerORM:
        values = {
            "id": uuid.uuid4(),
            "name": name,
            "country": "England",
            "age": 30,
            "date_of_birth": "1 January 1994",
            "nickname": None,
            "ranking": 50,
            "tour_card": "Yes",
            "career_earnings": "£100,000",
        }
        values.update(overrides)
        return PlayerORM(**values)

    return _make
