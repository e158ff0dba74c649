"""
http surface for the game.

    GET  /api/score                 top of the leaderboard
    POST /api/score                 score a seven-word submission
    GET  /api/migrate?secret=...    re-score the whole leaderboard
"""

import logging
from typing import Any, Callable, Optional

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .errors import FarawayError, ValidationError
from .service import GameService

logger = logging.getLogger(__name__)


class ScoreRequest(BaseModel):
    # shape is checked by the word filters so the error text stays ours
    words: Any = None


def create_app(service: GameService) -> FastAPI:
    app = FastAPI(title="faraway", description="seven words, as far apart as possible")

    @app.get("/api/score")
    def read_leaderboard():
        return _respond(lambda: {"leaderboard": service.leaderboard()})

    @app.post("/api/score")
    def submit_score(request: ScoreRequest):
        return _respond(lambda: service.submit(request.words))

    @app.get("/api/migrate")
    def run_migration(secret: Optional[str] = Query(None)):
        return _respond(lambda: service.migrate(secret).to_dict())

    return app


def _respond(handler: Callable[[], dict]) -> JSONResponse:
    """run a route body and turn errors into json responses."""
    try:
        return JSONResponse(handler())
    except FarawayError as e:
        if e.status_code >= 500:
            logger.error("request failed: %s", e, exc_info=True)
            return _error("Internal server error.", e.status_code)
        body = {"error": str(e)}
        if isinstance(e, ValidationError) and e.invalid_words:
            body["invalidWords"] = e.invalid_words
        return JSONResponse(body, status_code=e.status_code)
    except Exception:
        logger.exception("unexpected error")
        return _error("Internal server error.", 500)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)
