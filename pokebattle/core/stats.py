"""Battle stat derivation.

IVs are fixed at 15 and EVs at 0, which gives every Pokemon the same
nature-neutral baseline for a given species and level.
"""

from pydantic import BaseModel

FIXED_IV = 15
FIXED_EV = 0
DEFAULT_BASE_STAT = 50

# PokeAPI stat name -> BattleStats field
STAT_FIELDS: dict[str, str] = {
    "hp": "max_hp",
    "attack": "attack",
    "defense": "defense",
    "special-attack": "special_attack",
    "special-defense": "special_defense",
    "speed": "speed",
}


class BattleStats(BaseModel):
    """Stats frozen at battle start. Never recomputed mid-battle."""

    max_hp: int
    attack: int
    defense: int
    special_attack: int
    special_defense: int
    speed: int


def derive_stat(base: int, level: int, is_hp: bool = False) -> int:
    """Derive one battle stat from its base value and the Pokemon's level."""
    scaled = ((2 * base + FIXED_IV + FIXED_EV // 4) * level) // 100
    if is_hp:
        return scaled + level + 10
    return scaled + 5


def derive_battle_stats(base_stats: dict[str, int], level: int) -> BattleStats:
    """Derive all six battle stats.

    Accepts PokeAPI names ("special-attack") or underscored ones
    ("special_attack"). Missing stats fall back to a base of 50.
    """
    normalized = {k.replace("_", "-"): v for k, v in base_stats.items()}
    values = {}
    for stat_name, field in STAT_FIELDS.items():
        base = normalized.get(stat_name, DEFAULT_BASE_STAT)
        values[field] = derive_stat(base, level, is_hp=(stat_name == "hp"))
    return BattleStats(**values)
