"""Shared fixtures for PokeBattle tests."""

import pytest
from sqlmodel import create_engine
from sqlmodel.pool import StaticPool
from typer.testing import CliRunner

from pokebattle.data.history import HistoryStore
from tests.helpers import make_combatant, make_move


@pytest.fixture
def player():
    """A fast electric-type player with Tackle and Thunder Shock."""
    return make_combatant(
        moves=[make_move(), make_move("thunder-shock", "electric", 40, 100, 30)],
        hp=200,
    )


@pytest.fixture
def opponent():
    """A slower fire-type opponent with Tackle only."""
    return make_combatant(
        name="charmander",
        species_id=4,
        types=("fire",),
        hp=200,
        attack=52,
        defense=43,
        speed=65,
    )


@pytest.fixture
def memory_engine():
    """In-memory SQLite engine shared across connections."""
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def history_store(memory_engine) -> HistoryStore:
    store = HistoryStore(engine=memory_engine)
    store.init()
    return store


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a CLI runner for testing commands."""
    return CliRunner()
