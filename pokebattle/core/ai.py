"""Move selection for the computer-controlled side."""

from pokebattle.core.damage import stab_multiplier
from pokebattle.core.moves import Move, get_type_effectiveness, struggle
from pokebattle.core.pokemon import Combatant
from pokebattle.core.rng import RandomSource

BEST_MOVE_CHANCE = 0.7


def score_move(move: Move, attacker: Combatant, defender: Combatant) -> float:
    """Power x type effectiveness x STAB. Non-damaging moves score 0."""
    if not move.is_damaging:
        return 0.0
    score = float(move.power)
    score *= get_type_effectiveness(move.type, defender.types)
    score *= stab_multiplier(move.type, attacker.types)
    return score


def choose_move(attacker: Combatant, defender: Combatant, rng: RandomSource) -> Move:
    """Pick a move for the AI.

    Usually the highest-scoring move; 30% of the time (or whenever nothing
    scores above zero) a uniformly random usable move instead. Falls back to
    Struggle when every move is out of PP.
    """
    candidates = attacker.usable_moves
    if not candidates:
        return struggle()

    ranked = sorted(candidates, key=lambda m: score_move(m, attacker, defender), reverse=True)
    best = ranked[0]
    if rng.chance(BEST_MOVE_CHANCE) and score_move(best, attacker, defender) > 0:
        return best
    return candidates[rng.index(len(candidates))]
