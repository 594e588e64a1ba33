"""Game play endpoints."""
import random
from typing import Dict, Optional, Union
from fastapi import APIRouter, Depends, Request, HTTPException
from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr, validator
from sqlalchemy.orm import Session
from app.db.database import get_db
from app.db.models import Player
from app.services.game_engine import GameEngine
from app.services.operations import Operation
from app.services.difficulty import get_scoring_table
from app.services.question_generator import Question, format_question
from app.services.level_progression import get_stage_table
from app.services.persistence import SqlAlchemyProgressStore, record_stage_up, get_stage_history
from app.limiter import limiter
from app.config import settings
from app.constants import COOKIE_NAME, ANSWER_SUBMISSION_RATE_LIMIT
from app.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/game", tags=["game"])


class AnswerSubmission(BaseModel):
    """Request body for answer submission."""
    # Strict so JSON true reaches the engine as a bool instead of 1.0
    answer: Union[StrictInt, StrictFloat, StrictStr, StrictBool] = Field(
        ..., description="Player's answer, numeric or as typed"
    )

    @validator('answer')
    def strip_answer(cls, v):
        """Trim whitespace around typed answers."""
        if isinstance(v, str):
            if len(v) > 32:
                raise ValueError('answer is too long')
            return v.strip()
        return v


class OperationSelection(BaseModel):
    """Request body for choosing an operation."""
    operation: str = Field(..., min_length=1, max_length=20, description="Symbol or name, e.g. '+' or 'division'")


def get_player_id_from_cookie(request: Request) -> str:
    """Extract player ID from cookie."""
    player_id = request.cookies.get(COOKIE_NAME)
    if not player_id:
        raise HTTPException(status_code=401, detail="No player session found")
    return player_id


def get_player(request: Request, db: Session) -> Player:
    """Look up the player named by the cookie."""
    player_id = get_player_id_from_cookie(request)
    player = db.query(Player).filter(Player.id == player_id).first()
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")
    return player


def stored_question(player: Player) -> Optional[Question]:
    """Question saved on the player's row, if any."""
    if player.current_a is None or player.current_b is None or not player.current_operation:
        return None
    return Question(
        a=player.current_a,
        b=player.current_b,
        operation=Operation.parse(player.current_operation)
    )


def remember_question(player: Player, question: Question) -> None:
    """Store the question on screen so the next request can check answers against it."""
    player.current_a = question.a
    player.current_b = question.b
    player.current_operation = question.operation.value


def build_engine(db: Session, player: Player) -> GameEngine:
    """Create an engine seeded from the player's row."""
    return GameEngine(
        store=SqlAlchemyProgressStore(db, player),
        rng=random.Random(),
        scoring_table=get_scoring_table(settings.SCORING_MODE),
        question=stored_question(player)
    )


def game_state_payload(player: Player, engine: GameEngine) -> Dict:
    """Current score, position and question for the front-end."""
    return {
        "player_id": player.id,
        "score": engine.score,
        "operation": engine.operation.label,
        "operator": engine.operation.value,
        "position": engine.get_position().to_dict(),
        "question": format_question(engine.question, engine.rng)
    }


@router.get("/state")
async def get_game_state(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Get the player's score, stage position and current question.
    """
    player = get_player(request, db)
    engine = build_engine(db, player)

    if stored_question(player) != engine.question:
        remember_question(player, engine.question)
        db.commit()

    return game_state_payload(player, engine)


@router.post("/operation")
async def select_operation(
    selection: OperationSelection,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Choose the operation to practise.

    Unrecognized operations select addition. A new question is generated.
    """
    player = get_player(request, db)
    engine = build_engine(db, player)

    engine.select_operation(selection.operation)
    remember_question(player, engine.question)
    db.commit()

    logger.info(
        f"Operation selected: {engine.operation.label}",
        extra={"player_id": player.id, "operation": engine.operation.value}
    )

    return game_state_payload(player, engine)


@router.post("/answer")
@limiter.limit(ANSWER_SUBMISSION_RATE_LIMIT)
async def submit_answer(
    submission: AnswerSubmission,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Submit an answer to the current question.

    Correct answers add points for the question's difficulty and move on to
    a new question; wrong answers keep the question. Answers that are not
    numbers are ignored and reported with accepted=false.

    Returns:
    - Evaluation result (correct, category, points_awarded, correct_answer)
    - stage_up if the player reached a new stage
    - Updated game state
    """
    player = get_player(request, db)

    try:
        engine = build_engine(db, player)
        before = engine.get_position()

        result = engine.submit_answer(submission.answer)

        if result is None:
            return {
                "accepted": False,
                **game_state_payload(player, engine)
            }

        response = {"accepted": True, **result.to_dict()}

        if result.correct:
            after = engine.get_position()
            # Only a saved score may be recorded as a stage advance
            if engine.last_save_ok and after.stage_index > before.stage_index:
                response["stage_up"] = record_stage_up(
                    db, player, before.stage_index, after.stage_index, engine.score
                )
            remember_question(player, engine.question)
            db.commit()

        response.update(game_state_payload(player, engine))
        return response

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error submitting answer: {e}", exc_info=True, extra={"player_id": player.id})
        raise HTTPException(status_code=500, detail=f"Error submitting answer: {str(e)}")


@router.post("/skip")
async def skip_question(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Replace the current question with a new one without scoring it.
    """
    player = get_player(request, db)
    engine = build_engine(db, player)

    engine.skip()
    remember_question(player, engine.question)
    db.commit()

    return game_state_payload(player, engine)


@router.get("/stages")
async def list_stages():
    """
    List all stages with their names and rank requirements.
    """
    stages = get_stage_table()
    return {
        "stage_count": len(stages),
        "stages": stages
    }


@router.get("/history")
async def stage_history(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Get the player's most recent stage advances.
    """
    player = get_player(request, db)
    return {
        "player_id": player.id,
        "history": get_stage_history(db, player.id)
    }
