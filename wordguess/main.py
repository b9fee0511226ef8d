from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlmodel import SQLModel, Session, create_engine
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware

from . import crud
from .config import settings
from .deps import get_game, get_session
from .errors import GameError
from .logging_utils import setup_logging, get_logger, request_id_ctx
from .service import WordGame
from .words import default_dictionary

import time
import uuid


setup_logging(settings.log_level)
logger = get_logger("wordguess")
app = FastAPI(title="Word Guess")
app.state.game = WordGame(default_dictionary(settings.words_file))


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_ctx.set(rid)
        start = time.time()
        client = request.client.host if request.client else "-"
        response = None
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = rid
            return response
        except Exception:
            logger.exception("request_error", extra={"path": request.url.path, "method": request.method})
            raise
        finally:
            logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": getattr(response, "status_code", 500),
                    "duration_ms": int((time.time() - start) * 1000),
                    "client": client,
                },
            )
            request_id_ctx.reset(token)


app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Accept", "Content-Type", "X-Request-ID"],
)


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    logger.warning("game_error", extra={"path": request.url.path, "kind": exc.kind, "error": exc.message})
    return JSONResponse(status_code=400, content={"error": exc.message, "kind": exc.kind})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("validation_error", extra={"method": request.method, "path": request.url.path, "errors": exc.errors()})
    return JSONResponse(
        status_code=422,
        content={
            "detail": jsonable_encoder(exc.errors()),
            "message": "Input validation failed"
        }
    )


@app.on_event("startup")
def on_startup():
    from .migrations import run_migrations

    engine = create_engine(settings.database_url, echo=False, connect_args=settings.connect_args())
    SQLModel.metadata.create_all(engine)
    try:
        run_migrations(engine)
    except Exception as e:
        logger.warning("migrations_failed", extra={"error": str(e)})
    crud.engine = engine
    logger.info("startup_complete", extra={"database_url": settings.database_url})


@app.get("/health", include_in_schema=False)
def health():
    return JSONResponse({"status": "ok"})


class StartRequest(BaseModel):
    # range checks are left to the game so callers get its messages
    word_length: int
    tries: int


class GuessRequest(BaseModel):
    guess: str


@app.get("/api/rules")
def rules(wg: WordGame = Depends(get_game)):
    return {"result": wg.rules()}


@app.post("/api/start")
def start(body: StartRequest, session: Session = Depends(get_session), wg: WordGame = Depends(get_game)):
    return {"result": wg.start(session, body.word_length, body.tries)}


@app.get("/api/tries_left")
def tries_left(wg: WordGame = Depends(get_game)):
    return {"result": wg.tries_left()}


@app.post("/api/guess")
def guess(body: GuessRequest, session: Session = Depends(get_session), wg: WordGame = Depends(get_game)):
    return {"result": wg.guess(session, body.guess)}


@app.get("/api/games")
def games_history_list(session: Session = Depends(get_session)):
    return {"games": [g.model_dump() for g in crud.list_games(session)]}


@app.get("/api/games/{game_id}/history")
def specific_game_history(game_id: str, session: Session = Depends(get_session), wg: WordGame = Depends(get_game)):
    entries = wg.history(session, game_id)
    return {"game_id": game_id, "history": [e.model_dump() for e in entries]}


@app.get("/api/history/current")
def current_game_history(session: Session = Depends(get_session), wg: WordGame = Depends(get_game)):
    entries = wg.current_history(session)
    return {"game_id": wg.active_game_id, "history": [e.model_dump() for e in entries]}


@app.delete("/api/history")
def remove_history(session: Session = Depends(get_session)):
    games, entries = crud.clear_all(session)
    return {"status": "ok", "games_removed": games, "entries_removed": entries}
