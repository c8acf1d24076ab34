"""PokeAPI client for fetching species and move data.

Every request reads through an injected CatalogCache keyed by URL, so a
species or move is fetched at most once per cache.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from pokebattle.core.errors import CatalogError
from pokebattle.core.moves import DamageClass, Move, tackle
from pokebattle.core.pokemon import Combatant, SpeciesRecord, create_combatant
from pokebattle.core.rng import RandomSource
from pokebattle.data.cache import CatalogCache, MemoryCache
from pokebattle.utils.config import config

logger = logging.getLogger(__name__)


class PokeAPIClient:
    """Client for interacting with PokeAPI."""

    def __init__(
        self,
        cache: Optional[CatalogCache] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or config.pokeapi_base_url).rstrip("/")
        self.cache = cache if cache is not None else MemoryCache()
        self._transport = transport

    async def _get_json(self, url: str) -> Optional[dict[str, Any]]:
        """Fetch a URL through the cache. Returns None on HTTP failure."""
        cached = self.cache.get(url)
        if cached is not None:
            logger.debug("Cache hit for %s", url)
            return cached

        async with httpx.AsyncClient(transport=self._transport, timeout=config.request_timeout) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPError as exc:
                logger.warning("PokeAPI request failed for %s: %s", url, exc)
                return None

        self.cache.set(url, data)
        return data

    async def get_pokemon(self, name_or_id: str | int) -> Optional[dict[str, Any]]:
        """Fetch raw Pokemon data from API or cache."""
        key = str(name_or_id).lower()
        return await self._get_json(f"{self.base_url}/pokemon/{key}")

    async def get_move(self, name: str) -> Optional[dict[str, Any]]:
        """Fetch raw move data from API or cache."""
        return await self._get_json(f"{self.base_url}/move/{name.lower()}")

    @staticmethod
    def parse_species(data: dict[str, Any]) -> SpeciesRecord:
        """Build a SpeciesRecord from a /pokemon payload."""
        sprites = data.get("sprites") or {}
        artwork = ((sprites.get("other") or {}).get("official-artwork") or {}).get("front_default")
        return SpeciesRecord(
            id=data["id"],
            name=data["name"],
            types=[t["type"]["name"] for t in data.get("types", [])] or ["normal"],
            base_stats={s["stat"]["name"]: s["base_stat"] for s in data.get("stats", [])},
            sprite=sprites.get("front_default") or artwork or "",
            move_names=[m["move"]["name"] for m in data.get("moves", [])],
        )

    @staticmethod
    def parse_move(data: dict[str, Any]) -> Move:
        """Build a Move from a /move payload. Missing damage class means status."""
        damage_class = (data.get("damage_class") or {}).get("name") or DamageClass.STATUS.value
        return Move(
            name=data["name"],
            type=data["type"]["name"],
            damage_class=DamageClass(damage_class),
            power=data.get("power"),
            accuracy=data.get("accuracy"),
            pp=data.get("pp") or 1,
        )

    async def get_species(self, name_or_id: str | int) -> Optional[SpeciesRecord]:
        data = await self.get_pokemon(name_or_id)
        if not data:
            return None
        return self.parse_species(data)

    async def get_move_details(self, name: str) -> Optional[Move]:
        data = await self.get_move(name)
        if not data:
            return None
        return self.parse_move(data)

    async def build_quick_moveset(self, species: SpeciesRecord) -> list[Move]:
        """Pick four damaging moves from the species' first learnable moves.

        Scans up to ``move_scan_limit`` moves, keeps at most
        ``move_candidate_limit`` with power, uses the first four and pads
        with Tackle.
        """
        candidates: list[Move] = []
        for name in species.move_names[: config.move_scan_limit]:
            if len(candidates) >= config.move_candidate_limit:
                break
            move = await self.get_move_details(name)
            if move and move.power and move.power > 0:
                candidates.append(move)

        selected = candidates[:4]
        while len(selected) < 4:
            selected.append(tackle())
        return selected

    async def create_combatant(
        self,
        name_or_id: str | int,
        level: Optional[int] = None,
        moves: Optional[list[Move]] = None,
    ) -> Combatant:
        """Create a battle-ready Combatant. Raises CatalogError if the species is unavailable."""
        species = await self.get_species(name_or_id)
        if species is None:
            raise CatalogError(f"Could not load Pokemon {name_or_id!r}")
        if moves is None:
            moves = await self.build_quick_moveset(species)
        return create_combatant(species, moves, level or config.default_level)

    async def quick_battle(
        self,
        rng: RandomSource,
        level: Optional[int] = None,
        player: str | int | None = None,
        opponent: str | int | None = None,
    ) -> tuple[Combatant, Combatant]:
        """Load both sides of a quick 1v1. Unspecified sides are random Kanto Pokemon."""
        player_id = player if player is not None else rng.randint(1, config.quick_battle_max_id)
        opponent_id = opponent if opponent is not None else rng.randint(1, config.quick_battle_max_id)
        player_mon, opponent_mon = await asyncio.gather(
            self.create_combatant(player_id, level),
            self.create_combatant(opponent_id, level),
        )
        return player_mon, opponent_mon


# Synchronous wrapper for CLI usage
def quick_battle_sync(
    rng: RandomSource,
    level: Optional[int] = None,
    player: str | int | None = None,
    opponent: str | int | None = None,
    client: Optional[PokeAPIClient] = None,
) -> tuple[Combatant, Combatant]:
    """Synchronous wrapper for loading a quick battle."""
    client = client or PokeAPIClient()
    return asyncio.run(client.quick_battle(rng, level, player, opponent))
