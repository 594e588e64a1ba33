"""Main FastAPI application for Emoji Math Stages."""
from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, Depends
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session
from app.routers import user, game
from app.db.init_db import init_db
from app.db.database import get_db
from app.limiter import limiter
from app.logging_config import setup_logging, get_logger
from app.config import settings
from app.constants import DEFAULT_RATE_LIMIT

# Set up logging on module import
log_level = settings.LOG_LEVEL if settings.LOG_LEVEL else None
setup_logging(log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup."""
    logger.info("Application startup initiated")
    try:
        init_db()
        logger.info("Database initialization completed successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)
        raise

    yield

    logger.info("Application shutdown complete")


app = FastAPI(
    title="Emoji Math Stages API",
    description="""
    Arithmetic practice game for young children.

    ## Features

    - **Four Operations**: addition, subtraction, multiplication and division
    - **Difficulty Categories**: every question is rated from Super Easy to Einstein
    - **Variable Points**: harder questions are worth up to 4 points
    - **100 Stages**: ranks accumulate into themed stages, from Tiny Worm to Omniscient Whale
    - **Anonymous Sessions**: no account required, uses a browser cookie

    ## Game Flow

    1. **Bootstrap**: GET `/api/bootstrap` to get a player cookie and the first question
    2. **Choose Operation**: POST `/api/game/operation`
    3. **Answer**: POST `/api/game/answer`; correct answers score and move on
    4. **Skip**: POST `/api/game/skip` for a new question without scoring

    ## Progression

    - Every 10 points is one rank
    - Stages take 3, 5, 10, 15, 22, 28 ranks and steadily more after that
    """,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_tags=[
        {
            "name": "player",
            "description": "Player session bootstrap"
        },
        {
            "name": "game",
            "description": "Questions, answers, skipping and stage progress"
        },
        {
            "name": "health",
            "description": "Service health and readiness checks"
        }
    ]
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

logger.info(
    f"Rate limiting {'enabled' if limiter.enabled else 'disabled'}: "
    f"default {DEFAULT_RATE_LIMIT} per IP"
)

app.include_router(user.router)
app.include_router(game.router)


@app.get("/health", tags=["health"])
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint with database verification.

    Returns:
        200 OK: Service is healthy and database is accessible
        503 Service Unavailable: Database connection failed

    Example Response (Healthy):
        {
            "status": "healthy",
            "database": "connected",
            "timestamp": "2026-10-19T10:30:00.000000Z",
            "environment": "production"
        }
    """
    timestamp = datetime.utcnow().isoformat() + "Z"

    try:
        db.execute(text("SELECT 1"))
        logger.debug("Health check passed")

        return {
            "status": "healthy",
            "database": "connected",
            "timestamp": timestamp,
            "environment": settings.ENVIRONMENT
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}", exc_info=True)

        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "database": "disconnected",
                "error": str(e),
                "timestamp": timestamp
            }
        )


@app.get("/readiness", tags=["health"])
async def readiness_check(db: Session = Depends(get_db)):
    """Readiness check for container orchestration.

    Returns:
        200 OK: Service is ready
        503 Service Unavailable: Service is not ready
    """
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ready", "timestamp": datetime.utcnow().isoformat() + "Z"}
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "error": str(e)}
        )
