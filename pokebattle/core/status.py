"""Start-of-action status resolution (paralysis, sleep, freeze, burn, poison)."""

from pydantic import BaseModel, Field

from pokebattle.core.moves import StatusCondition
from pokebattle.core.pokemon import Combatant
from pokebattle.core.rng import RandomSource

FULL_PARALYSIS_CHANCE = 0.25
WAKE_CHANCE = 0.33
THAW_CHANCE = 0.2
BURN_DIVISOR = 16
POISON_DIVISOR = 8


class StatusResult(BaseModel):
    """Whether the Pokemon may use its move this half-turn, plus log lines."""

    can_act: bool = True
    damage: int = 0
    messages: list[str] = Field(default_factory=list)


def status_damage(max_hp: int, divisor: int) -> int:
    return max(1, max_hp // divisor)


def apply_status(combatant: Combatant, rng: RandomSource) -> StatusResult:
    """Resolve the combatant's status before its move.

    Mutates the combatant: sleep and freeze may clear, burn and poison
    deal damage (HP clamps at 0). The caller must check for a faint
    before executing any move.
    """
    name = combatant.display_name
    status = combatant.status

    if status is None:
        return StatusResult()

    if status == StatusCondition.PARALYSIS:
        if rng.chance(FULL_PARALYSIS_CHANCE):
            return StatusResult(can_act=False, messages=[f"{name} is paralyzed! It can't move!"])
        return StatusResult()

    if status == StatusCondition.SLEEP:
        if rng.chance(WAKE_CHANCE):
            combatant.status = None
            return StatusResult(messages=[f"{name} woke up!"])
        return StatusResult(can_act=False, messages=[f"{name} is fast asleep."])

    if status == StatusCondition.FREEZE:
        if rng.chance(THAW_CHANCE):
            combatant.status = None
            return StatusResult(messages=[f"{name} thawed out!"])
        return StatusResult(can_act=False, messages=[f"{name} is frozen solid!"])

    if status == StatusCondition.BURN:
        dealt = combatant.take_damage(status_damage(combatant.stats.max_hp, BURN_DIVISOR))
        return StatusResult(damage=dealt, messages=[f"{name} is hurt by its burn!"])

    # Poison
    dealt = combatant.take_damage(status_damage(combatant.stats.max_hp, POISON_DIVISOR))
    return StatusResult(damage=dealt, messages=[f"{name} is hurt by poison!"])
