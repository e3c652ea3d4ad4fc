import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.endpoints import players as player_endpoints
from app.api.endpoints import matches as match_endpoints
from app.api.endpoints import tournament as tournament_endpoints
from app.core.config import settings
from app.core.database import init_db
from app.core.exceptions import (
    InvalidStateError,
    NotFoundError,
    StorageError,
    TournamentError,
    ValidationError,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ValidationError: 422,
    InvalidStateError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready")
    yield


app = FastAPI(title="Tournament Planner API", lifespan=lifespan)


@app.exception_handler(TournamentError)
async def tournament_error_handler(request: Request, exc: TournamentError):
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


# Include routers
app.include_router(player_endpoints.router, prefix=f"{settings.API_PREFIX}/players", tags=["Players"])
app.include_router(match_endpoints.router, prefix=f"{settings.API_PREFIX}/matches", tags=["Matches"])
app.include_router(tournament_endpoints.router, prefix=f"{settings.API_PREFIX}/tournament", tags=["Tournament"])


@app.get("/")
async def read_root():
    return {"message": "Tournament Planner API"}
