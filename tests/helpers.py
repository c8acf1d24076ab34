"""Builders and a scripted randomness source shared by the test modules."""

from pokebattle.core.moves import DamageClass, Move, StatusCondition
from pokebattle.core.pokemon import Combatant
from pokebattle.core.rng import RandomSource
from pokebattle.core.stats import BattleStats


class FixedRandom(RandomSource):
    """Returns the scripted values in order, then ``default`` forever.

    With the default of 0.5 a move with accuracy >= 50 hits, no critical
    hit lands, paralysis does not trigger, sleep and freeze persist and
    the AI picks its best move.
    """

    def __init__(self, values=None, default: float = 0.5):
        super().__init__(seed=0)
        self.values = list(values or [])
        self.default = default
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        if self.values:
            return self.values.pop(0)
        return self.default


def make_move(
    name="tackle",
    type_="normal",
    power=40,
    accuracy=100,
    pp=35,
    damage_class=DamageClass.PHYSICAL,
) -> Move:
    return Move(name=name, type=type_, damage_class=damage_class, power=power, accuracy=accuracy, pp=pp)


def make_combatant(
    name="pikachu",
    species_id=25,
    types=("electric",),
    level=50,
    hp=100,
    attack=55,
    defense=40,
    special_attack=50,
    special_defense=50,
    speed=90,
    moves=None,
    status: StatusCondition | None = None,
    current_hp=None,
) -> Combatant:
    if moves is None:
        moves = [make_move()]
    return Combatant(
        species_id=species_id,
        name=name,
        types=list(types),
        level=level,
        stats=BattleStats(
            max_hp=hp,
            attack=attack,
            defense=defense,
            special_attack=special_attack,
            special_defense=special_defense,
            speed=speed,
        ),
        current_hp=hp if current_hp is None else current_hp,
        moves=moves,
        status=status,
    )
