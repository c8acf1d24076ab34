"""Tests for the CLI commands."""

import pytest
from sqlmodel import create_engine

from pokebattle.cli import app as cli_module
from pokebattle.cli.app import app
from pokebattle.core.errors import CatalogError
from pokebattle.data.history import HistoryStore
from tests.helpers import make_combatant, make_move


@pytest.fixture
def fake_battle(monkeypatch, history_store):
    """Patch catalog and history so battles run offline against one-hit opponents."""
    calls = {}

    def quick_battle_sync(rng, level=None, player=None, opponent=None, client=None):
        calls["args"] = (level, player, opponent)
        player_mon = make_combatant(
            level=level or 50,
            hp=200,
            moves=[make_move(), make_move("thunder-shock", "electric", 40, 100, 30)],
        )
        opponent_mon = make_combatant(name="charmander", types=("fire",), hp=200, speed=65, current_hp=1)
        return player_mon, opponent_mon

    monkeypatch.setattr(cli_module, "quick_battle_sync", quick_battle_sync)
    monkeypatch.setattr(cli_module, "get_catalog", lambda: None)
    monkeypatch.setattr(cli_module, "get_history_store", lambda: history_store)
    return calls


class TestBattleCommand:
    def test_battle_win(self, cli_runner, fake_battle, history_store):
        result = cli_runner.invoke(app, ["battle", "--seed", "1"], input="1\n")
        assert result.exit_code == 0, result.output
        assert "A wild Charmander appeared!" in result.output
        assert "Pikachu used Tackle!" in result.output
        assert "YOU WIN!" in result.output
        assert len(history_store.recent()) == 1

    def test_battle_options_forwarded(self, cli_runner, fake_battle):
        result = cli_runner.invoke(
            app,
            ["battle", "--level", "30", "--player", "pikachu", "--opponent", "charmander"],
            input="1\n",
        )
        assert result.exit_code == 0, result.output
        assert fake_battle["args"] == (30, "pikachu", "charmander")

    def test_no_save(self, cli_runner, fake_battle, history_store):
        result = cli_runner.invoke(app, ["battle", "--no-save"], input="1\n")
        assert result.exit_code == 0, result.output
        assert history_store.recent() == []

    def test_battle_finishes_when_history_unavailable(self, cli_runner, fake_battle, monkeypatch):
        opened = []

        def unreachable_history():
            opened.append(True)
            store = HistoryStore(engine=create_engine("sqlite:////nonexistent-pokebattle-dir/history.db"))
            store.init()
            return store

        monkeypatch.setattr(cli_module, "get_history_store", unreachable_history)
        result = cli_runner.invoke(app, ["battle"], input="1\n")
        assert result.exit_code == 0, result.output
        assert "YOU WIN!" in result.output
        assert opened == [True]

    def test_invalid_choice_reprompts(self, cli_runner, fake_battle):
        result = cli_runner.invoke(app, ["battle"], input="7\n2\n")
        assert result.exit_code == 0, result.output
        assert "No move in slot 6" in result.output
        assert "Pikachu used Thunder Shock!" in result.output

    def test_catalog_failure_exits(self, cli_runner, monkeypatch):
        def failing(*args, **kwargs):
            raise CatalogError("Could not load Pokemon 'agumon'")

        monkeypatch.setattr(cli_module, "quick_battle_sync", failing)
        monkeypatch.setattr(cli_module, "get_catalog", lambda: None)
        result = cli_runner.invoke(app, ["battle", "--opponent", "agumon"])
        assert result.exit_code == 1
        assert "Could not start battle" in result.output


class TestHistoryCommand:
    def test_empty(self, cli_runner, monkeypatch, history_store):
        monkeypatch.setattr(cli_module, "get_history_store", lambda: history_store)
        result = cli_runner.invoke(app, ["history"])
        assert result.exit_code == 0
        assert "No battles recorded yet." in result.output

    def test_lists_battles(self, cli_runner, fake_battle):
        cli_runner.invoke(app, ["battle"], input="1\n")
        result = cli_runner.invoke(app, ["history"])
        assert result.exit_code == 0
        assert "Battle History" in result.output
        assert "Win" in result.output


class TestTypechartCommand:
    @pytest.mark.parametrize(
        "args,expected",
        [
            (["fire", "grass"], "x2"),
            (["normal", "ghost"], "x0"),
            (["ice", "grass", "flying"], "x4"),
            (["fire", "water", "rock"], "x0.25"),
        ],
    )
    def test_multiplier(self, cli_runner, args, expected):
        result = cli_runner.invoke(app, ["typechart", *args])
        assert result.exit_code == 0
        assert expected in result.output

    def test_too_many_types(self, cli_runner):
        result = cli_runner.invoke(app, ["typechart", "fire", "grass", "water", "rock"])
        assert result.exit_code == 1
