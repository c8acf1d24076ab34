"""Move model, type effectiveness chart, and the Struggle fallback."""

from enum import Enum

from pydantic import BaseModel, Field

from pokebattle.core.errors import InvalidMoveError


class PokemonType(str, Enum):
    """The eighteen elemental types."""

    NORMAL = "normal"
    FIRE = "fire"
    WATER = "water"
    ELECTRIC = "electric"
    GRASS = "grass"
    ICE = "ice"
    FIGHTING = "fighting"
    POISON = "poison"
    GROUND = "ground"
    FLYING = "flying"
    PSYCHIC = "psychic"
    BUG = "bug"
    ROCK = "rock"
    GHOST = "ghost"
    DRAGON = "dragon"
    DARK = "dark"
    STEEL = "steel"
    FAIRY = "fairy"


class DamageClass(str, Enum):
    """Which stat pair a move uses. Status moves deal no damage."""

    PHYSICAL = "physical"
    SPECIAL = "special"
    STATUS = "status"


class StatusCondition(str, Enum):
    """Persistent status conditions. A Pokemon holds at most one."""

    BURN = "burn"
    POISON = "poison"
    PARALYSIS = "paralysis"
    SLEEP = "sleep"
    FREEZE = "freeze"


# ---------------------------------------------------------------------------
# Type chart
# ---------------------------------------------------------------------------
# attacking type -> (super effective against, resisted by, no effect on)
# Every pair not listed is neutral (1x).
# ---------------------------------------------------------------------------

# fmt: off
_MATCHUPS: dict[str, tuple[str, str, str]] = {
    "normal":   ("",                               "rock steel",                                   "ghost"),
    "fire":     ("grass ice bug steel",            "fire water rock dragon",                       ""),
    "water":    ("fire ground rock",               "water grass dragon",                           ""),
    "electric": ("water flying",                   "electric grass dragon",                        "ground"),
    "grass":    ("water ground rock",              "fire grass poison flying bug dragon steel",    ""),
    "ice":      ("grass ground flying dragon",     "fire water ice steel",                         ""),
    "fighting": ("normal ice rock dark steel",     "poison flying psychic bug fairy",              "ghost"),
    "poison":   ("grass fairy",                    "poison ground rock ghost",                     "steel"),
    "ground":   ("fire electric poison rock steel", "grass bug",                                   "flying"),
    "flying":   ("grass fighting bug",             "electric rock steel",                          ""),
    "psychic":  ("fighting poison",                "psychic steel",                                "dark"),
    "bug":      ("grass psychic dark",             "fire fighting poison flying ghost steel fairy", ""),
    "rock":     ("fire ice flying bug",            "fighting ground steel",                        ""),
    "ghost":    ("psychic ghost",                  "dark",                                         "normal"),
    "dragon":   ("dragon",                         "steel",                                        "fairy"),
    "dark":     ("psychic ghost",                  "fighting dark fairy",                          ""),
    "steel":    ("ice rock fairy",                 "fire water electric steel",                    ""),
    "fairy":    ("fighting dragon dark",           "fire poison steel",                            ""),
}
# fmt: on


def _build_type_chart() -> dict[str, dict[str, float]]:
    chart = {}
    for attacking in PokemonType:
        strong, weak, immune = _MATCHUPS[attacking.value]
        row = {defending.value: 1.0 for defending in PokemonType}
        row.update({t: 2.0 for t in strong.split()})
        row.update({t: 0.5 for t in weak.split()})
        row.update({t: 0.0 for t in immune.split()})
        chart[attacking.value] = row
    return chart


# TYPE_CHART[attacking_type][defending_type] -> multiplier
TYPE_CHART: dict[str, dict[str, float]] = _build_type_chart()


def get_type_effectiveness(move_type: str, defender_types: list[str]) -> float:
    """Calculate the combined multiplier of a move type against every defending type.

    Results can be 0x, 0.25x, 0.5x, 1x, 2x, or 4x. Pairs missing from the
    chart count as neutral.
    """
    row = TYPE_CHART.get(move_type.lower(), {})
    mult = 1.0
    for defender_type in defender_types:
        mult *= row.get(defender_type.lower(), 1.0)
    return mult


# ---------------------------------------------------------------------------
# Move model
# ---------------------------------------------------------------------------

class Move(BaseModel):
    """A move slot on a battling Pokemon."""

    name: str
    display_name: str = ""  # Derived from name when left blank
    type: str  # Elemental type, lowercase
    damage_class: DamageClass = DamageClass.PHYSICAL
    power: int | None = None  # None for non-damaging moves
    accuracy: int | None = None  # None means always hits
    pp: int = Field(default=20, ge=0)  # Maximum uses per battle
    current_pp: int | None = Field(default=None, ge=0)

    def model_post_init(self, __context) -> None:
        """Set display_name from name and fill current_pp if not provided."""
        if not self.display_name:
            self.display_name = self.name.replace("-", " ").title()
        if self.current_pp is None:
            self.current_pp = self.pp

    @property
    def is_damaging(self) -> bool:
        return bool(self.power) and self.damage_class != DamageClass.STATUS

    @property
    def is_usable(self) -> bool:
        return (self.current_pp or 0) > 0

    def use(self) -> None:
        """Spend one PP. Selecting a depleted move is a contract violation."""
        if not self.is_usable:
            raise InvalidMoveError(f"{self.display_name} has no PP left")
        self.current_pp -= 1


STRUGGLE_NAME = "struggle"


def struggle() -> Move:
    """Return a fresh Struggle, used when every move is out of PP.

    A new instance is built per use so it is never depleted.
    """
    return Move(
        name=STRUGGLE_NAME,
        type="normal",
        damage_class=DamageClass.PHYSICAL,
        power=50,
        accuracy=100,
        pp=999,
    )


def tackle() -> Move:
    """Return the Tackle used to pad short movesets."""
    return Move(name="tackle", type="normal", damage_class=DamageClass.PHYSICAL, power=40, accuracy=100, pp=35)
