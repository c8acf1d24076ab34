"""Tests for damage calculation."""

from pokebattle.core.damage import base_damage, resolve_damage, stab_multiplier
from pokebattle.core.moves import DamageClass, StatusCondition
from pokebattle.core.rng import RandomSource
from tests.helpers import FixedRandom, make_combatant, make_move

# Draws: accuracy, critical, spread
NO_CRIT_MAX_ROLL = [0.0, 0.99, 1.0]

HITTABLE_TYPES = ["water", "rock", "steel", "fire", "fighting", "psychic"]


def _attacker(**kwargs):
    defaults = dict(name="charmander", types=("fire",), attack=100, special_attack=100)
    defaults.update(kwargs)
    return make_combatant(**defaults)


def _defender(**kwargs):
    defaults = dict(name="squirtle", types=("water",), defense=80, special_defense=80)
    defaults.update(kwargs)
    return make_combatant(**defaults)


class TestBaseDamage:
    def test_reference_value(self):
        # floor(floor(22 * 40 * 100 / 80) / 50 + 2)
        assert base_damage(50, 40, 100, 80) == 24

    def test_minimum_two(self):
        assert base_damage(1, 10, 5, 500) == 2

    def test_stab(self):
        assert stab_multiplier("fire", ["fire"]) == 1.5
        assert stab_multiplier("water", ["fire"]) == 1.0


class TestResolveDamage:
    def test_neutral_hit(self):
        result = resolve_damage(_attacker(), _defender(), make_move(), FixedRandom(NO_CRIT_MAX_ROLL))
        assert result.damage == 24
        assert result.effectiveness == 1.0
        assert not result.is_critical
        assert not result.missed
        assert result.messages == []

    def test_special_move_uses_special_stats(self):
        attacker = _attacker(attack=10)
        defender = _defender(defense=500)
        move = make_move("swift", power=40, damage_class=DamageClass.SPECIAL)
        result = resolve_damage(attacker, defender, move, FixedRandom(NO_CRIT_MAX_ROLL))
        assert result.damage == 24

    def test_stab_applies(self):
        attacker = _attacker(types=("normal",))
        result = resolve_damage(attacker, _defender(), make_move(), FixedRandom(NO_CRIT_MAX_ROLL))
        assert result.damage == 36

    def test_super_effective(self):
        attacker = _attacker(types=("normal",))
        defender = _defender(types=("fire",))
        move = make_move("water-gun", "water")
        result = resolve_damage(attacker, defender, move, FixedRandom(NO_CRIT_MAX_ROLL))
        assert result.damage == 48
        assert result.effectiveness == 2.0
        assert result.messages == ["It's super effective!"]

    def test_double_weakness(self):
        attacker = _attacker(types=("normal",))
        defender = _defender(types=("grass", "flying"))
        move = make_move("ice-shard", "ice")
        result = resolve_damage(attacker, defender, move, FixedRandom(NO_CRIT_MAX_ROLL))
        assert result.damage == 96
        assert result.effectiveness == 4.0

    def test_not_very_effective(self):
        attacker = _attacker(types=("normal",))
        move = make_move("ember", "fire")
        result = resolve_damage(attacker, _defender(), move, FixedRandom(NO_CRIT_MAX_ROLL))
        assert result.damage == 12
        assert result.messages == ["It's not very effective..."]

    def test_immune_deals_zero(self):
        defender = _defender(name="gastly", types=("ghost",))
        # A critical draw of 0.0 would trigger if it were reached
        rng = FixedRandom([0.0, 0.0, 1.0])
        result = resolve_damage(_attacker(), defender, make_move(), rng)
        assert result.damage == 0
        assert result.effectiveness == 0.0
        assert not result.is_critical
        assert result.messages == ["It doesn't affect Gastly..."]
        assert rng.draws == 1

    def test_critical_hit(self):
        result = resolve_damage(_attacker(), _defender(), make_move(), FixedRandom([0.0, 0.0, 1.0]))
        assert result.is_critical
        assert result.damage == 36
        assert result.messages == ["A critical hit!"]

    def test_spread_low_roll(self):
        result = resolve_damage(_attacker(), _defender(), make_move(), FixedRandom([0.0, 0.99, 0.0]))
        # floor(24 * 0.85)
        assert result.damage == 20

    def test_miss(self):
        move = make_move(accuracy=50)
        rng = FixedRandom([0.6])
        result = resolve_damage(_attacker(), _defender(), move, rng)
        assert result.missed
        assert result.damage == 0
        assert result.messages == ["Charmander's attack missed!"]
        assert rng.draws == 1

    def test_accuracy_boundary_hits(self):
        move = make_move(accuracy=50)
        result = resolve_damage(_attacker(), _defender(), move, FixedRandom([0.5, 0.99, 1.0]))
        assert not result.missed
        assert result.damage == 24

    def test_no_accuracy_never_misses_and_skips_draw(self):
        move = make_move("swift", accuracy=None)
        rng = FixedRandom([0.99, 1.0])
        result = resolve_damage(_attacker(), _defender(), move, rng)
        assert result.damage == 24
        assert rng.draws == 2

    def test_status_move_does_nothing(self):
        move = make_move("growl", power=None, damage_class=DamageClass.STATUS)
        rng = FixedRandom()
        result = resolve_damage(_attacker(), _defender(), move, rng)
        assert result.damage == 0
        assert result.messages == ["But nothing happened!"]
        assert rng.draws == 0

    def test_burn_halves_physical(self):
        attacker = _attacker(status=StatusCondition.BURN)
        result = resolve_damage(attacker, _defender(), make_move(), FixedRandom(NO_CRIT_MAX_ROLL))
        assert result.damage == 12

    def test_burn_ignores_special(self):
        attacker = _attacker(status=StatusCondition.BURN)
        move = make_move("swift", damage_class=DamageClass.SPECIAL)
        result = resolve_damage(attacker, _defender(), move, FixedRandom(NO_CRIT_MAX_ROLL))
        assert result.damage == 24

    def test_burn_applies_after_minimum(self):
        attacker = _attacker(level=1, attack=5)
        defender = _defender(defense=500)
        move = make_move(power=10)
        healthy = resolve_damage(attacker, defender, move, FixedRandom([0.0, 0.99, 0.0]))
        assert healthy.damage == 1

        attacker.status = StatusCondition.BURN
        burned = resolve_damage(attacker, defender, move, FixedRandom([0.0, 0.99, 0.0]))
        assert burned.damage == 0

    def test_does_not_touch_hp(self):
        attacker, defender = _attacker(), _defender()
        resolve_damage(attacker, defender, make_move(), FixedRandom(NO_CRIT_MAX_ROLL))
        assert defender.current_hp == defender.stats.max_hp


class TestDamageProperties:
    def test_hits_deal_at_least_one(self):
        rng = RandomSource(seed=42)
        for _ in range(500):
            attacker = _attacker(level=rng.randint(1, 100), attack=rng.randint(1, 300))
            defender = _defender(types=(HITTABLE_TYPES[rng.index(len(HITTABLE_TYPES))],), defense=rng.randint(1, 600))
            move = make_move(power=rng.randint(1, 150), accuracy=None)
            result = resolve_damage(attacker, defender, move, rng)
            assert result.damage >= 1

    def test_immune_always_zero(self):
        rng = RandomSource(seed=7)
        for _ in range(200):
            attacker = _attacker(level=rng.randint(1, 100), attack=rng.randint(1, 300))
            defender = _defender(types=("ghost",), defense=rng.randint(1, 300))
            result = resolve_damage(attacker, defender, make_move(power=rng.randint(1, 150)), rng)
            assert result.damage == 0
