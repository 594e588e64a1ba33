"""SQLAlchemy models for the Emoji Math Stages service."""
from datetime import datetime
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from app.db.database import Base


class Player(Base):
    """Anonymous player tracked by UUID cookie."""
    __tablename__ = "players"

    id = Column(Text, primary_key=True)  # UUID from ems_uid cookie
    score = Column(Integer, nullable=False, default=0)  # lifetime points
    operation = Column(Text, nullable=False, default="+")  # operation symbol

    # Question currently on screen
    current_a = Column(Integer, nullable=True)
    current_b = Column(Integer, nullable=True)
    current_operation = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_active_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("score >= 0", name="ck_player_score_non_negative"),
    )

    # Relationships
    stage_progressions = relationship(
        "StageProgression",
        back_populates="player",
        cascade="all, delete-orphan"
    )


class StageProgression(Base):
    """A player moving up to a later stage."""
    __tablename__ = "stage_progressions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    player_id = Column(Text, ForeignKey("players.id"), nullable=False)
    from_stage = Column(Integer, nullable=False)  # 0-based stage index
    to_stage = Column(Integer, nullable=False)
    score = Column(Integer, nullable=False)
    achieved_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("to_stage > from_stage", name="ck_stage_progression_forward"),
        CheckConstraint("to_stage >= 0 AND to_stage <= 99", name="ck_stage_progression_range"),
        Index("idx_stage_progressions_player", "player_id", "achieved_at"),
    )

    player = relationship("Player", back_populates="stage_progressions")
