"""Tests for the public names exported by the core and players packages."""

import pytest

import darts_api.core as core
from darts_api.features.players import dependencies


@pytest.mark.parametrize("module", [core, dependencies])
def test_exported_names_resolve(module):
    for name in module.__all__:
        assert hasattr(module, name), name


def test_core_exports_only_setup_for_logging():
    assert "setup_logging" in core.__all__
    assert "get_logger" not in core.__all__
    assert not hasattr(core, "get_logger")


def test_players_dependencies_expose_service_only():
    assert dependencies.__all__ == [
        "get_player_service",
        "get_player_repository",
        "PlayerServiceDep",
    ]
    assert not hasattr(dependencies, "PlayerRepositoryDep")
