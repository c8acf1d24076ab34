"""Main CLI application for PokeBattle."""

from typing import Optional

import typer

from pokebattle.cli.ui.displays import (
    console,
    display_combatant,
    display_history,
    display_log_entries,
    display_moves,
)
from pokebattle.core.battle import BattleOutcome, BattleRecord, BattleSession
from pokebattle.core.errors import CatalogError, InvalidMoveError
from pokebattle.core.moves import get_type_effectiveness
from pokebattle.core.rng import RandomSource
from pokebattle.data.cache import JsonFileCache
from pokebattle.data.history import HistoryStore
from pokebattle.data.pokeapi import PokeAPIClient, quick_battle_sync
from pokebattle.utils.config import config, configure_logging

app = typer.Typer(
    name="pokebattle",
    help="PokeBattle - turn-based Pokemon battles in your terminal",
    no_args_is_help=True,
)


def get_history_store() -> HistoryStore:
    store = HistoryStore()
    store.init()
    return store


def save_result(record: BattleRecord) -> None:
    get_history_store().save(record)


def get_catalog() -> PokeAPIClient:
    config.ensure_dirs()
    return PokeAPIClient(cache=JsonFileCache(config.cache_dir))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    configure_logging("DEBUG" if verbose else None)


@app.command("battle")
def battle(
    level: int = typer.Option(config.default_level, "--level", "-l", min=1, max=100),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed for a reproducible battle"),
    player: Optional[str] = typer.Option(None, "--player", "-p", help="Your Pokemon (random if omitted)"),
    opponent: Optional[str] = typer.Option(None, "--opponent", "-o", help="Opponent (random if omitted)"),
    save: bool = typer.Option(True, "--save/--no-save", help="Record the result in battle history"),
) -> None:
    """Quick 1v1 battle against a wild Pokemon."""
    rng = RandomSource(seed)
    try:
        with console.status("Preparing battle..."):
            player_mon, opponent_mon = quick_battle_sync(rng, level, player, opponent, client=get_catalog())
    except CatalogError as exc:
        console.print(f"[red]Could not start battle:[/red] {exc}")
        raise typer.Exit(code=1)

    # The store is opened only once the battle is over; BattleSession logs any failure
    on_finish = save_result if save else None
    session = BattleSession(player_mon, opponent_mon, rng=rng, on_finish=on_finish)
    display_log_entries(session.start())

    while not session.state.is_over:
        state = session.state
        display_combatant(state.opponent, "Opponent")
        display_combatant(state.player, "You")

        if state.player.usable_moves:
            display_moves(state.player)
            choice = typer.prompt("Choose a move", type=int)
            move_index: Optional[int] = choice - 1
        else:
            console.print("[yellow]No PP left on any move![/yellow]")
            move_index = None

        try:
            entries = session.take_turn(move_index)
        except InvalidMoveError as exc:
            console.print(f"[red]{exc}[/red]")
            continue
        display_log_entries(entries)

    if session.state.outcome == BattleOutcome.PLAYER_WIN:
        console.print("[bold green]YOU WIN![/bold green]")
    else:
        console.print("[bold red]YOU LOSE![/bold red]")


@app.command("history")
def history(
    limit: int = typer.Option(20, "--limit", "-n", min=1),
) -> None:
    """Show recently finished battles."""
    display_history(get_history_store().recent(limit=limit))


@app.command("typechart")
def typechart(
    attack_type: str = typer.Argument(..., help="Attacking move type"),
    defender_types: list[str] = typer.Argument(..., help="One or two defending types"),
) -> None:
    """Show the effectiveness multiplier of an attack type."""
    if len(defender_types) > 2:
        console.print("[red]A Pokemon has at most two types.[/red]")
        raise typer.Exit(code=1)
    mult = get_type_effectiveness(attack_type, defender_types)
    console.print(f"{attack_type.lower()} -> {'/'.join(t.lower() for t in defender_types)}: [bold]x{mult:g}[/bold]")


if __name__ == "__main__":
    app()
