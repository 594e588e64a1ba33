"""Player bootstrap endpoint."""
import uuid
from datetime import datetime
from fastapi import APIRouter, Depends, Response, Request
from sqlalchemy.orm import Session
from app.db.database import get_db
from app.db.models import Player
from app.routers.game import build_engine, game_state_payload, remember_question, stored_question
from app.services.level_progression import STAGE_NAMES
from app.services.persistence import get_stage_history
from app.config import settings
from app.constants import COOKIE_NAME, PLAYER_ID_PREFIX
from app.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["player"])


def get_or_create_player(request: Request, response: Response, db: Session) -> Player:
    """
    Get or create anonymous player based on cookie.

    Args:
        request: FastAPI request
        response: FastAPI response (to set cookie)
        db: Database session

    Returns:
        Player row
    """
    player_id = request.cookies.get(COOKIE_NAME)

    if player_id:
        player = db.query(Player).filter(Player.id == player_id).first()
        if player:
            player.last_active_at = datetime.utcnow()
            db.commit()
            return player

    # Create new player
    player_id = f"{PLAYER_ID_PREFIX}{uuid.uuid4()}"
    player = Player(id=player_id, score=0, operation="+")
    db.add(player)
    db.commit()

    logger.info("New player created", extra={"player_id": player_id})

    response.set_cookie(
        key=COOKIE_NAME,
        value=player_id,
        max_age=settings.COOKIE_MAX_AGE,
        httponly=settings.COOKIE_HTTPONLY,
        samesite=settings.COOKIE_SAMESITE,
        secure=settings.COOKIE_SECURE  # Enable in production via COOKIE_SECURE=true env var
    )

    return player


@router.get("/bootstrap")
async def bootstrap(
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Bootstrap player session and return initial data.

    Returns:
    - Score, operation and stage position
    - Question to show
    - Recent stage advances
    """
    player = get_or_create_player(request, response, db)
    engine = build_engine(db, player)

    if stored_question(player) != engine.question:
        remember_question(player, engine.question)
        db.commit()

    return {
        **game_state_payload(player, engine),
        "stage_count": len(STAGE_NAMES),
        "scoring_mode": settings.SCORING_MODE,
        "history": get_stage_history(db, player.id)
    }
