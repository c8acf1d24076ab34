"""Rich display components for the CLI."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pokebattle.core.battle import BattleLogEntry, LogCategory
from pokebattle.core.pokemon import Combatant
from pokebattle.data.history import BattleHistory

console = Console()


TYPE_COLORS = {
    "normal": "white",
    "fire": "red",
    "water": "blue",
    "electric": "yellow",
    "grass": "green",
    "ice": "cyan",
    "fighting": "red",
    "poison": "magenta",
    "ground": "yellow",
    "flying": "cyan",
    "psychic": "magenta",
    "bug": "green",
    "rock": "yellow",
    "ghost": "magenta",
    "dragon": "blue",
    "dark": "white",
    "steel": "white",
    "fairy": "magenta",
}

LOG_STYLES = {
    LogCategory.INFO: "white",
    LogCategory.DAMAGE: "bold red",
    LogCategory.STATUS: "magenta",
    LogCategory.FAINT: "red",
    LogCategory.VICTORY: "bold green",
}


def format_types(types: list[str]) -> str:
    return "/".join(f"[{TYPE_COLORS.get(t, 'white')}]{t.capitalize()}[/]" for t in types)


def hp_bar(current: int, maximum: int, width: int = 20) -> str:
    """Render an HP bar, green above half, yellow above a fifth, red below."""
    pct = (current / maximum) if maximum else 0.0
    filled = round(pct * width)
    color = "green" if pct > 0.5 else "yellow" if pct > 0.2 else "red"
    return f"[{color}]{'#' * filled}[/][dim]{'-' * (width - filled)}[/]"


def display_combatant(mon: Combatant, title: str) -> None:
    status = f"  [magenta]{mon.status.value.upper()}[/]" if mon.status else ""
    body = (
        f"[bold]{mon.display_name}[/bold] Lv{mon.level}  {format_types(mon.types)}{status}\n"
        f"HP {hp_bar(mon.current_hp, mon.stats.max_hp)} {mon.current_hp}/{mon.stats.max_hp}"
    )
    console.print(Panel(body, title=title, box=box.ROUNDED, expand=False))


def display_moves(mon: Combatant) -> None:
    table = Table(box=box.SIMPLE)
    table.add_column("#", style="dim", width=3)
    table.add_column("Move", min_width=14)
    table.add_column("Type", width=10)
    table.add_column("Power", justify="right", width=6)
    table.add_column("PP", justify="right", width=7)
    for i, move in enumerate(mon.moves, start=1):
        style = None if move.is_usable else "dim"
        table.add_row(
            str(i),
            move.display_name,
            format_types([move.type]),
            str(move.power or "-"),
            f"{move.current_pp}/{move.pp}",
            style=style,
        )
    console.print(table)


def display_log_entries(entries: list[BattleLogEntry]) -> None:
    for entry in entries:
        console.print(f"[{LOG_STYLES[entry.category]}]{entry.message}[/]")


def display_history(records: list[BattleHistory]) -> None:
    if not records:
        console.print("[dim]No battles recorded yet.[/dim]")
        return

    table = Table(title="Battle History", box=box.ROUNDED)
    table.add_column("Date", width=16)
    table.add_column("Your Pokemon", min_width=12)
    table.add_column("Opponent", min_width=14)
    table.add_column("Turns", justify="right", width=5)
    table.add_column("Result", width=6)
    for record in records:
        result = "[green]Win[/green]" if record.result == "win" else "[red]Loss[/red]"
        player_name = str(record.player_team.get("name", "?")).replace("-", " ").title()
        table.add_row(
            record.created_at.strftime("%Y-%m-%d %H:%M"),
            player_name,
            record.opponent_type,
            str(record.turns),
            result,
        )
    console.print(table)
