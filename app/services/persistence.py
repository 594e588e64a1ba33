"""Progress storage collaborators for the game engine."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol
from sqlalchemy import desc
from sqlalchemy.orm import Session
from app.db.models import Player, StageProgression
from app.constants import STAGE_HISTORY_LIMIT
from app.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SavedProgress:
    """The persisted unit of progress: lifetime score and selected operation."""
    score: Any
    operation: Any


class ProgressStore(Protocol):
    """Anything the engine can load progress from and save progress to."""

    def load(self) -> Optional[SavedProgress]:
        ...

    def save(self, progress: SavedProgress) -> None:
        ...


class InMemoryProgressStore:
    """Keeps the last saved progress in memory. Used by tests and scripts."""

    def __init__(self, initial: Optional[SavedProgress] = None):
        self.saved = initial
        self.save_count = 0

    def load(self) -> Optional[SavedProgress]:
        return self.saved

    def save(self, progress: SavedProgress) -> None:
        self.saved = progress
        self.save_count += 1


class SqlAlchemyProgressStore:
    """
    Progress store backed by one row of the players table.

    Every save commits immediately. On failure the session is rolled back
    and the error re-raised for the engine to log.
    """

    def __init__(self, db: Session, player: Player):
        self.db = db
        self.player = player

    def load(self) -> Optional[SavedProgress]:
        if self.player.score is None and self.player.operation is None:
            return None
        return SavedProgress(score=self.player.score, operation=self.player.operation)

    def save(self, progress: SavedProgress) -> None:
        try:
            self.player.score = progress.score
            self.player.operation = progress.operation.value
            self.player.last_active_at = datetime.utcnow()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


def record_stage_up(
    db: Session,
    player: Player,
    from_stage: int,
    to_stage: int,
    score: int
) -> Dict:
    """
    Record that a player advanced to a later stage.

    Args:
        db: Database session
        player: Player who advanced
        from_stage: Stage index before the answer
        to_stage: Stage index after the answer
        score: Score that reached the new stage

    Returns:
        Dictionary describing the advance:
        {
            "from_stage": 2,
            "to_stage": 3,
            "score": 180,
            "achieved_at": "2026-10-19T10:30:00"
        }
    """
    progression = StageProgression(
        player_id=player.id,
        from_stage=from_stage,
        to_stage=to_stage,
        score=score,
        achieved_at=datetime.utcnow()
    )
    db.add(progression)
    db.flush()

    logger.info(
        f"Player reached stage {to_stage + 1}",
        extra={"player_id": player.id, "stage_index": to_stage}
    )

    return {
        "from_stage": from_stage,
        "to_stage": to_stage,
        "score": progression.score,
        "achieved_at": progression.achieved_at.isoformat()
    }


def get_stage_history(db: Session, player_id: str, limit: int = STAGE_HISTORY_LIMIT) -> List[Dict]:
    """Most recent stage advances for a player, newest first."""
    progressions = db.query(StageProgression).filter(
        StageProgression.player_id == player_id
    ).order_by(desc(StageProgression.achieved_at), desc(StageProgression.id)).limit(limit).all()

    return [
        {
            "from_stage": p.from_stage,
            "to_stage": p.to_stage,
            "score": p.score,
            "achieved_at": p.achieved_at.isoformat()
        }
        for p in progressions
    ]
