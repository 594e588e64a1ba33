"""Game engine driving one player's session.

The engine owns the explicit game state (lifetime score, selected operation
and the question on screen) and exposes the operations the presentation
layer calls. It never performs I/O itself: every score or operation change is
handed to a ProgressStore, and a failing store is logged and ignored so the
in-memory state stays authoritative for the session.
"""
import math
import random
from dataclasses import dataclass
from typing import Dict, Mapping, Optional
from app.services.operations import Operation
from app.services.difficulty import DifficultyCategory, DIFFICULTY_POINTS, points_for
from app.services.question_generator import Question, generate_question
from app.services.level_progression import StagePosition, get_position
from app.services.persistence import ProgressStore, SavedProgress
from app.constants import ANSWER_TOLERANCE
from app.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class GameState:
    """Everything the engine knows about the session."""
    score: int = 0
    operation: Operation = Operation.ADDITION
    question: Optional[Question] = None


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of an accepted answer submission."""
    correct: bool
    category: DifficultyCategory
    points_awarded: int
    correct_answer: float

    def to_dict(self) -> Dict:
        answer = self.correct_answer
        if isinstance(answer, float) and answer.is_integer():
            answer = int(answer)
        return {
            "correct": self.correct,
            "category": self.category.value,
            "points_awarded": self.points_awarded,
            "correct_answer": answer,
        }


def sanitize_progress(saved: Optional[SavedProgress]) -> SavedProgress:
    """
    Validate progress read back from storage.

    A missing record, a score that is not a non-negative integer, or an
    unknown operation falls back to score 0 and addition respectively.

    Args:
        saved: Stored progress or None

    Returns:
        SavedProgress safe to seed the engine with
    """
    if saved is None:
        return SavedProgress(score=0, operation=Operation.ADDITION)

    score = saved.score
    if isinstance(score, bool) or not isinstance(score, int) or score < 0:
        score = 0

    return SavedProgress(score=score, operation=Operation.parse(saved.operation))


def parse_answer(value) -> Optional[float]:
    """
    Parse a submitted answer.

    Args:
        value: Raw value from the player

    Returns:
        Finite float, or None if the value is not a number
    """
    if isinstance(value, bool):
        return None
    # float() accepts digit separators such as "1_1"
    if isinstance(value, str) and "_" in value:
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


class GameEngine:
    """
    Arithmetic game session.

    Args:
        store: Persistence collaborator; progress is kept only in memory when omitted
        rng: Random source for questions, seed it for reproducible sessions
        scoring_table: Points per difficulty category
        question: Question already on screen, restored instead of generating one

    Attributes:
        last_save_ok: False when the most recent save to the store failed
    """

    def __init__(
        self,
        store: Optional[ProgressStore] = None,
        rng: Optional[random.Random] = None,
        scoring_table: Mapping[DifficultyCategory, int] = DIFFICULTY_POINTS,
        question: Optional[Question] = None
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.scoring_table = scoring_table
        self.last_save_ok = True

        saved = sanitize_progress(self._load())
        self.state = GameState(score=saved.score, operation=saved.operation)

        if question is not None and question.operation == self.state.operation:
            self.state.question = question
        else:
            self.generate_question()

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def operation(self) -> Operation:
        return self.state.operation

    @property
    def question(self) -> Question:
        return self.state.question

    def select_operation(self, operation) -> Question:
        """
        Switch to another operation and show a fresh question for it.

        Unrecognized values select addition.
        """
        self.state.operation = Operation.parse(operation)
        self._save()
        return self.generate_question()

    def generate_question(self) -> Question:
        """Replace the current question with a new one. Score is untouched."""
        self.state.question = generate_question(self.state.operation, self.rng)
        return self.state.question

    def skip(self) -> Question:
        """Move on to a new question without scoring the current one."""
        logger.debug(
            f"Skipping {self.state.question.prompt}",
            extra={"operation": self.state.operation.value}
        )
        return self.generate_question()

    def submit_answer(self, value) -> Optional[AnswerResult]:
        """
        Check an answer against the current question.

        A correct answer adds the category's points to the score, saves the
        progress and moves to a new question. A wrong answer changes nothing
        and keeps the question. Non-numeric input is ignored entirely.

        Args:
            value: Player's answer, any value float() understands

        Returns:
            AnswerResult, or None when the value was not a number
        """
        number = parse_answer(value)
        if number is None:
            return None

        question = self.state.question
        category = question.category
        correct_answer = question.answer

        if abs(number - correct_answer) >= ANSWER_TOLERANCE:
            return AnswerResult(
                correct=False,
                category=category,
                points_awarded=0,
                correct_answer=correct_answer
            )

        points = points_for(category, self.scoring_table)
        self.state.score += points
        self._save()
        self.generate_question()

        return AnswerResult(
            correct=True,
            category=category,
            points_awarded=points,
            correct_answer=correct_answer
        )

    def get_position(self) -> StagePosition:
        """Rank and stage for the current score."""
        return get_position(self.state.score)

    def snapshot(self) -> GameState:
        """Copy of the current state."""
        return GameState(
            score=self.state.score,
            operation=self.state.operation,
            question=self.state.question
        )

    def _load(self) -> Optional[SavedProgress]:
        if self.store is None:
            return None
        try:
            return self.store.load()
        except Exception as e:
            logger.warning(f"Could not load saved progress, starting fresh: {e}", exc_info=True)
            return None

    def _save(self) -> bool:
        if self.store is None:
            self.last_save_ok = True
            return True
        try:
            self.store.save(SavedProgress(score=self.state.score, operation=self.state.operation))
        except Exception as e:
            logger.warning(
                f"Could not save progress: {e}",
                exc_info=True,
                extra={"operation": self.state.operation.value}
            )
            self.last_save_ok = False
            return False
        self.last_save_ok = True
        return True
