"""Exceptions raised by the battle engine and its collaborators."""


class BattleError(Exception):
    """Base class for battle errors."""


class InvalidMoveError(BattleError):
    """A move was selected that cannot be used (no PP left or no such slot)."""


class BattleStateError(BattleError):
    """An action was attempted that the battle's current phase does not allow."""


class CatalogError(Exception):
    """Species or move data could not be obtained from the catalog."""
