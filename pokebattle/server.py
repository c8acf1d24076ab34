"""HTTP API for playing battles against the computer.

Battles in progress live in an in-memory registry. A battle leaves the
registry on the turn it ends; its result is persisted to battle history
after the response is sent.
"""

import logging
from typing import Annotated

from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from pokebattle import __version__
from pokebattle.core.battle import BattleLogEntry, BattleRecord, BattleSession, BattleState, build_battle_record
from pokebattle.core.errors import BattleStateError, CatalogError, InvalidMoveError
from pokebattle.core.rng import RandomSource
from pokebattle.data.cache import JsonFileCache
from pokebattle.data.history import BattleHistory, HistoryStore
from pokebattle.data.pokeapi import PokeAPIClient
from pokebattle.utils.config import config, configure_logging

logger = logging.getLogger(__name__)

configure_logging()
app = FastAPI(title="PokeBattle", version=__version__)

# --- Models ---


class BattleCreate(BaseModel):
    level: int = Field(default=config.default_level, ge=1, le=100)
    player: str | None = None  # Species name or id; random when omitted
    opponent: str | None = None
    seed: int | None = None


class TurnRequest(BaseModel):
    move_index: int | None = None  # None requests Struggle


class TurnResponse(BaseModel):
    entries: list[BattleLogEntry]
    battle: BattleState


# --- Registry & dependencies ---

_sessions: dict[str, BattleSession] = {}
_catalog: PokeAPIClient | None = None
_history: HistoryStore | None = None


def get_catalog() -> PokeAPIClient:
    global _catalog
    if _catalog is None:
        config.ensure_dirs()
        _catalog = PokeAPIClient(cache=JsonFileCache(config.cache_dir))
    return _catalog


def get_history() -> HistoryStore:
    global _history
    if _history is None:
        store = HistoryStore()
        store.init()
        _history = store
    return _history


def record_result(record: BattleRecord) -> None:
    """Save a finished battle. Failures are logged; the battle outcome stands."""
    try:
        history = get_history()
    except (SQLAlchemyError, OSError):
        logger.exception("History unavailable; battle %s not recorded", record.battle_id)
        return
    history.save(record)


def get_session(battle_id: str) -> BattleSession:
    session = _sessions.get(battle_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Battle not found")
    return session


# --- Endpoints ---


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/battles", response_model=BattleState)
async def create_battle(
    body: BattleCreate,
    catalog: Annotated[PokeAPIClient, Depends(get_catalog)],
):
    rng = RandomSource(body.seed)
    try:
        player, opponent = await catalog.quick_battle(rng, body.level, body.player, body.opponent)
    except CatalogError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from None

    session = BattleSession(player, opponent, rng=rng)
    session.start()
    _sessions[session.battle_id] = session
    logger.info(
        "Battle %s created: %s vs %s",
        session.battle_id,
        player.display_name,
        opponent.display_name,
    )
    return session.snapshot()


@app.get("/battles/{battle_id}", response_model=BattleState)
async def read_battle(session: Annotated[BattleSession, Depends(get_session)]):
    return session.snapshot()


@app.post("/battles/{battle_id}/turn", response_model=TurnResponse)
async def take_turn(
    body: TurnRequest,
    background_tasks: BackgroundTasks,
    session: Annotated[BattleSession, Depends(get_session)],
):
    try:
        entries = session.take_turn(body.move_index)
    except InvalidMoveError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except BattleStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from None

    response = TurnResponse(entries=entries, battle=session.snapshot())
    if session.state.is_over:
        background_tasks.add_task(record_result, build_battle_record(session.state))
        _sessions.pop(session.battle_id, None)
    return response


@app.get("/history", response_model=list[BattleHistory])
async def list_history(
    history: Annotated[HistoryStore, Depends(get_history)],
    limit: int = 20,
    offset: int = 0,
):
    return history.recent(limit=limit, offset=offset)
