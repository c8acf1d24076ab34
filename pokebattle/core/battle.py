"""Turn-based battle state machine.

Handles the lifecycle of a single 1v1 battle against the computer:
    setup -> active -> (player/opponent half-turns) -> terminal

Turn order is fixed once at battle start by speed; the first faint ends
the turn and the battle immediately.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from pokebattle.core.ai import choose_move
from pokebattle.core.damage import resolve_damage
from pokebattle.core.errors import BattleStateError, InvalidMoveError
from pokebattle.core.moves import Move, struggle
from pokebattle.core.pokemon import Combatant
from pokebattle.core.rng import RandomSource
from pokebattle.core.status import apply_status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BattlePhase(str, Enum):
    """Lifecycle phase of a battle."""

    SETUP = "setup"
    ACTIVE = "active"
    TERMINAL = "terminal"


class BattleOutcome(str, Enum):
    PLAYER_WIN = "player_win"
    OPPONENT_WIN = "opponent_win"


class Side(str, Enum):
    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> Side:
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


class LogCategory(str, Enum):
    INFO = "info"
    DAMAGE = "damage"
    STATUS = "status"
    FAINT = "faint"
    VICTORY = "victory"


# ---------------------------------------------------------------------------
# Supporting models
# ---------------------------------------------------------------------------

class BattleLogEntry(BaseModel):
    """One line of the battle log. The client renders these in order."""

    message: str
    category: LogCategory = LogCategory.INFO


class BattleRecord(BaseModel):
    """Finished-battle summary handed to history persistence."""

    battle_id: str
    opponent_type: str  # e.g. "Wild Pikachu"
    player_team: Combatant
    opponent_team: Combatant
    battle_log: list[BattleLogEntry]
    result: str  # "win" | "loss", from the player's perspective
    turns: int = 0


# ---------------------------------------------------------------------------
# Main battle state
# ---------------------------------------------------------------------------

class BattleState(BaseModel):
    """The complete state of one battle.

    Owns its combatants exclusively; they are copies of whatever the
    caller passed in.
    """

    battle_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    phase: BattlePhase = BattlePhase.SETUP
    player: Combatant
    opponent: Combatant
    player_first: bool = True  # Fixed at battle start, never re-evaluated

    turn_number: int = 0
    log: list[BattleLogEntry] = Field(default_factory=list)
    outcome: BattleOutcome | None = None

    def combatant(self, side: Side) -> Combatant:
        return self.player if side is Side.PLAYER else self.opponent

    @property
    def turn_order(self) -> tuple[Side, Side]:
        if self.player_first:
            return Side.PLAYER, Side.OPPONENT
        return Side.OPPONENT, Side.PLAYER

    @property
    def is_over(self) -> bool:
        return self.phase == BattlePhase.TERMINAL

    def add_log(self, message: str, category: LogCategory = LogCategory.INFO) -> BattleLogEntry:
        entry = BattleLogEntry(message=message, category=category)
        self.log.append(entry)
        return entry


def create_battle(player: Combatant, opponent: Combatant) -> BattleState:
    """Set up a battle from copies of both combatants.

    The player moves first on a speed tie.
    """
    player = player.model_copy(deep=True)
    opponent = opponent.model_copy(deep=True)
    return BattleState(
        player=player,
        opponent=opponent,
        player_first=player.stats.speed >= opponent.stats.speed,
    )


def build_battle_record(state: BattleState) -> BattleRecord:
    """Summarize a finished battle for history persistence."""
    if state.outcome is None:
        raise BattleStateError("Battle has not finished yet")
    return BattleRecord(
        battle_id=state.battle_id,
        opponent_type=f"Wild {state.opponent.display_name}",
        player_team=state.player.model_copy(deep=True),
        opponent_team=state.opponent.model_copy(deep=True),
        battle_log=list(state.log),
        result="win" if state.outcome == BattleOutcome.PLAYER_WIN else "loss",
        turns=state.turn_number,
    )


# ---------------------------------------------------------------------------
# Turn resolution engine
# ---------------------------------------------------------------------------

class BattleEngine:
    """Resolves turns of a battle.

    Stateless -- takes a BattleState, mutates it, and returns the log
    entries appended during that call.
    """

    @staticmethod
    def start(state: BattleState) -> list[BattleLogEntry]:
        """Move a battle from setup to active and announce both sides."""
        if state.phase != BattlePhase.SETUP:
            raise BattleStateError(f"Battle is already {state.phase.value}")
        start = len(state.log)
        state.add_log(f"A wild {state.opponent.display_name} appeared!")
        state.add_log(f"Go, {state.player.display_name}!")
        state.phase = BattlePhase.ACTIVE
        state.updated_at = datetime.now(timezone.utc)
        return state.log[start:]

    @staticmethod
    def select_player_move(state: BattleState, move_index: int | None) -> Move:
        """Validate and spend the player's chosen move.

        ``move_index=None`` requests Struggle, which is only legal once
        every move is out of PP.
        """
        player = state.player
        if move_index is None:
            if player.usable_moves:
                raise InvalidMoveError("Struggle is only allowed when no move has PP left")
            return struggle()
        if not 0 <= move_index < len(player.moves):
            raise InvalidMoveError(f"No move in slot {move_index}")
        move = player.moves[move_index]
        move.use()
        return move

    @staticmethod
    def resolve_turn(state: BattleState, move_index: int | None, rng: RandomSource) -> list[BattleLogEntry]:
        """Resolve one turn: the player's chosen move plus the AI's reply.

        The player's move is spent as soon as it is selected, even if
        status keeps the player from acting. The AI picks its move only
        when it gets to act.
        """
        if state.phase != BattlePhase.ACTIVE:
            raise BattleStateError(f"Cannot take a turn while the battle is {state.phase.value}")

        player_move = BattleEngine.select_player_move(state, move_index)
        start = len(state.log)
        state.turn_number += 1
        logger.debug("Battle %s: resolving turn %d", state.battle_id, state.turn_number)

        for side in state.turn_order:
            move = player_move if side is Side.PLAYER else None
            BattleEngine._half_turn(state, side, move, rng)
            if state.is_over:
                break

        state.updated_at = datetime.now(timezone.utc)
        return state.log[start:]

    @staticmethod
    def _half_turn(state: BattleState, side: Side, move: Move | None, rng: RandomSource) -> None:
        """One combatant's action slot. ``move=None`` lets the AI choose."""
        actor = state.combatant(side)
        target = state.combatant(side.other)

        status = apply_status(actor, rng)
        for message in status.messages:
            state.add_log(message, LogCategory.STATUS)

        if actor.is_fainted:
            BattleEngine._finish(state, loser=side)
            return
        if not status.can_act:
            return

        if move is None:
            move = choose_move(actor, target, rng)
            if any(m is move for m in actor.moves):
                move.use()

        state.add_log(f"{actor.display_name} used {move.display_name}!")
        result = resolve_damage(actor, target, move, rng)
        target.take_damage(result.damage)

        category = LogCategory.DAMAGE if result.effectiveness > 1 else LogCategory.INFO
        for message in result.messages:
            state.add_log(message, category)
        if result.damage > 0:
            state.add_log(f"{target.display_name} took {result.damage} damage!", LogCategory.DAMAGE)

        if target.is_fainted:
            BattleEngine._finish(state, loser=side.other)

    @staticmethod
    def _finish(state: BattleState, loser: Side) -> None:
        """Enter the terminal phase and log the faint and the victory."""
        winner = loser.other
        state.add_log(f"{state.combatant(loser).display_name} fainted!", LogCategory.FAINT)
        state.add_log(
            "You won the battle!" if winner is Side.PLAYER else "Opponent won the battle!",
            LogCategory.VICTORY,
        )
        state.phase = BattlePhase.TERMINAL
        state.outcome = BattleOutcome.PLAYER_WIN if winner is Side.PLAYER else BattleOutcome.OPPONENT_WIN
        logger.info(
            "Battle %s finished after %d turn(s): %s",
            state.battle_id,
            state.turn_number,
            state.outcome.value,
        )


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class BattleSession:
    """One battle plus its randomness source and the on-finish hook.

    ``on_finish`` receives the BattleRecord once, when the battle ends.
    A failing hook is logged and ignored; the outcome stands.
    """

    def __init__(
        self,
        player: Combatant,
        opponent: Combatant,
        rng: RandomSource | None = None,
        on_finish: Callable[[BattleRecord], object] | None = None,
    ):
        self.state = create_battle(player, opponent)
        self.rng = rng or RandomSource()
        self.on_finish = on_finish

    @property
    def battle_id(self) -> str:
        return self.state.battle_id

    def start(self) -> list[BattleLogEntry]:
        return BattleEngine.start(self.state)

    def take_turn(self, move_index: int | None) -> list[BattleLogEntry]:
        entries = BattleEngine.resolve_turn(self.state, move_index, self.rng)
        if self.state.is_over:
            self._notify_finished()
        return entries

    def snapshot(self) -> BattleState:
        """Return an independent copy of the current state."""
        return self.state.model_copy(deep=True)

    def _notify_finished(self) -> None:
        if self.on_finish is None:
            return
        record = build_battle_record(self.state)
        try:
            self.on_finish(record)
        except Exception:
            logger.exception("Failed to record result of battle %s", self.battle_id)
