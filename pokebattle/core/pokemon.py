"""Species records and the battle-side Pokemon (combatant) model."""

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from pokebattle.core.moves import Move, StatusCondition
from pokebattle.core.stats import BattleStats, derive_battle_stats


class SpeciesRecord(BaseModel):
    """Static species data as returned by the catalog."""

    id: int
    name: str
    types: list[str]
    base_stats: dict[str, int] = Field(default_factory=dict)  # PokeAPI stat name -> base value
    sprite: str = ""
    move_names: list[str] = Field(default_factory=list)  # Learnable moves, catalog order


class Combatant(BaseModel):
    """A Pokemon prepared for battle with runtime HP, PP and status tracking.

    This is a snapshot -- changes here do NOT propagate back to the
    catalog or team data it was built from.
    """

    # Identity
    species_id: int
    name: str
    sprite: str = ""

    types: list[str] = Field(min_length=1, max_length=2)
    level: int = Field(default=50, ge=1, le=100)

    # Calculated stats (frozen at battle start)
    stats: BattleStats
    current_hp: int = Field(ge=0)

    moves: list[Move] = Field(default_factory=list, max_length=4)
    status: StatusCondition | None = None

    @field_validator("types")
    @classmethod
    def _lowercase_types(cls, value: list[str]) -> list[str]:
        return [t.lower() for t in value]

    @model_validator(mode="after")
    def _hp_within_max(self) -> "Combatant":
        if self.current_hp > self.stats.max_hp:
            raise ValueError(f"current_hp {self.current_hp} exceeds max_hp {self.stats.max_hp}")
        return self

    @property
    def display_name(self) -> str:
        return self.name.replace("-", " ").title()

    @computed_field
    @property
    def is_fainted(self) -> bool:
        return self.current_hp == 0

    @property
    def hp_percent(self) -> float:
        if self.stats.max_hp == 0:
            return 0.0
        return (self.current_hp / self.stats.max_hp) * 100

    @property
    def usable_moves(self) -> list[Move]:
        return [m for m in self.moves if m.is_usable]

    def take_damage(self, amount: int) -> int:
        """Apply damage, return actual amount dealt. Clamps to 0."""
        actual = min(amount, self.current_hp)
        self.current_hp -= actual
        return actual


def create_combatant(species: SpeciesRecord, moves: list[Move], level: int) -> Combatant:
    """Create a Combatant from a species record, a move list and a level.

    Stats are derived once here and frozen for the duration of the battle.
    Moves are copied with full PP.
    """
    stats = derive_battle_stats(species.base_stats, level)
    battle_moves = [m.model_copy(update={"current_pp": m.pp}) for m in moves[:4]]
    return Combatant(
        species_id=species.id,
        name=species.name,
        sprite=species.sprite,
        types=species.types,
        level=level,
        stats=stats,
        current_hp=stats.max_hp,
        moves=battle_moves,
    )
