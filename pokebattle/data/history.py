"""Battle history persistence (SQLModel).

Saving is fire-and-forget from the battle's point of view: a failed save
is logged and reported as False, never raised, and never changes the
outcome of the battle being saved.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import JSON, Column, Field, Session, SQLModel, create_engine, select

from pokebattle.core.battle import BattleRecord
from pokebattle.utils.config import config

logger = logging.getLogger(__name__)


class BattleHistory(SQLModel, table=True):
    """Persistent record of a finished battle."""

    __tablename__ = "battle_history"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    battle_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    opponent_type: str  # e.g. "Wild Pikachu"
    result: str  # "win" | "loss"
    turns: int = 0

    # Final snapshots and the full log (JSON blobs)
    player_team: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    opponent_team: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    battle_log: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))

    @classmethod
    def from_record(cls, record: BattleRecord) -> BattleHistory:
        return cls(
            battle_id=record.battle_id,
            opponent_type=record.opponent_type,
            result=record.result,
            turns=record.turns,
            player_team=record.player_team.model_dump(mode="json"),
            opponent_team=record.opponent_team.model_dump(mode="json"),
            battle_log=[entry.model_dump(mode="json") for entry in record.battle_log],
        )


class HistoryStore:
    """Saves and lists finished battles."""

    def __init__(self, engine=None):
        if engine is None:
            config.ensure_dirs()
            engine = create_engine(config.database_url, echo=False)
        self.engine = engine

    def init(self) -> None:
        """Create the history table."""
        SQLModel.metadata.create_all(self.engine)

    def save(self, record: BattleRecord) -> bool:
        """Persist a finished battle. Returns False (and logs) on failure."""
        try:
            row = BattleHistory.from_record(record)
            with Session(self.engine) as session:
                session.add(row)
                session.commit()
        except (SQLAlchemyError, ValueError):
            logger.exception("Failed to save history for battle %s", record.battle_id)
            return False
        logger.debug("Saved history for battle %s (%s)", record.battle_id, record.result)
        return True

    def recent(self, limit: int = 20, offset: int = 0) -> list[BattleHistory]:
        """Most recent battles first."""
        with Session(self.engine) as session:
            stmt = (
                select(BattleHistory)
                .order_by(BattleHistory.created_at.desc(), BattleHistory.id.desc())  # type: ignore[union-attr]
                .offset(offset)
                .limit(limit)
            )
            return list(session.exec(stmt).all())
