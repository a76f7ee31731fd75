from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from golfpot.api.games import router as games_router
from golfpot.api.points import router as points_router
from golfpot.api.settlements import router as settlements_router
from golfpot.config import get_settings
from golfpot.storage.database import init_db

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("settlement storage ready")
    yield


app = FastAPI(title="Golf Wager Settlement API", lifespan=lifespan)
app.include_router(points_router)
app.include_router(games_router)
app.include_router(settlements_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
