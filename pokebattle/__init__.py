"""PokeBattle - turn-based Pokemon battle simulator."""

__version__ = "0.1.0"
