"""Damage calculation for a single move use.

Steps run in a fixed order and each consumes randomness only when reached:

    nothing happened -> accuracy -> base -> STAB -> type -> critical
    -> random spread -> floor/min 1 -> burn halving

Every intermediate multiplier is floored before the next one applies.
"""

import math

from pydantic import BaseModel, Field

from pokebattle.core.moves import DamageClass, Move, StatusCondition, get_type_effectiveness
from pokebattle.core.pokemon import Combatant
from pokebattle.core.rng import RandomSource

CRITICAL_CHANCE = 1 / 16
CRITICAL_MULTIPLIER = 1.5
STAB_MULTIPLIER = 1.5
SPREAD_LOW = 0.85
SPREAD_HIGH = 1.0


class DamageResult(BaseModel):
    """Outcome of one move use against one defender."""

    damage: int = 0
    effectiveness: float = 1.0
    is_critical: bool = False
    missed: bool = False
    messages: list[str] = Field(default_factory=list)


def base_damage(level: int, power: int, attack: int, defense: int) -> int:
    """floor(floor((2*level/5 + 2) * power * A / D) / 50 + 2)"""
    return math.floor(math.floor((2 * level / 5 + 2) * power * attack / defense) / 50 + 2)


def stab_multiplier(move_type: str, attacker_types: list[str]) -> float:
    return STAB_MULTIPLIER if move_type.lower() in attacker_types else 1.0


def resolve_damage(
    attacker: Combatant,
    defender: Combatant,
    move: Move,
    rng: RandomSource,
) -> DamageResult:
    """Compute damage, effectiveness and critical flag for one move use.

    Does not touch either combatant's HP; the caller applies the result.
    """
    if not move.is_damaging:
        return DamageResult(messages=["But nothing happened!"])

    # Accuracy check -- moves without an accuracy never miss
    if move.accuracy is not None and rng.random() * 100 > move.accuracy:
        return DamageResult(
            missed=True,
            messages=[f"{attacker.display_name}'s attack missed!"],
        )

    is_physical = move.damage_class == DamageClass.PHYSICAL
    if is_physical:
        atk_stat, def_stat = attacker.stats.attack, defender.stats.defense
    else:
        atk_stat, def_stat = attacker.stats.special_attack, defender.stats.special_defense

    damage = base_damage(attacker.level, move.power, atk_stat, max(1, def_stat))
    damage = math.floor(damage * stab_multiplier(move.type, attacker.types))

    messages: list[str] = []
    effectiveness = get_type_effectiveness(move.type, defender.types)
    if effectiveness == 0:
        return DamageResult(
            effectiveness=0.0,
            messages=[f"It doesn't affect {defender.display_name}..."],
        )
    damage = math.floor(damage * effectiveness)
    if effectiveness > 1:
        messages.append("It's super effective!")
    elif effectiveness < 1:
        messages.append("It's not very effective...")

    is_critical = rng.chance(CRITICAL_CHANCE)
    if is_critical:
        damage = math.floor(damage * CRITICAL_MULTIPLIER)
        messages.append("A critical hit!")

    damage = max(1, math.floor(damage * rng.uniform(SPREAD_LOW, SPREAD_HIGH)))

    # Burn halving comes after the minimum-1 clamp, so a burned 1-damage hit deals 0
    if is_physical and attacker.status == StatusCondition.BURN:
        damage = damage // 2

    return DamageResult(
        damage=damage,
        effectiveness=effectiveness,
        is_critical=is_critical,
        messages=messages,
    )
