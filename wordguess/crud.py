import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import delete as sa_delete
from sqlmodel import Session, select

from . import models
from .config import settings
from .errors import HistoryBodyTooLong
from .logging_utils import get_logger

logger = get_logger("wordguess.crud")

engine = None


def now_ns() -> int:
    return time.time_ns()


def format_timestamp(ns: int) -> str:
    """Render a nanosecond timestamp as e.g. ``Mon Oct 19 2026 14:03:11 GMT+0000``."""
    dt = datetime.fromtimestamp(ns / 1_000_000_000, tz=timezone.utc)
    return dt.strftime("%a %b %d %Y %H:%M:%S GMT%z")


def check_body(body: str) -> None:
    # the budget is in bytes of the UTF-8 encoded body
    limit = settings.history_body_max_length
    if len(body.encode("utf-8")) > limit:
        raise HistoryBodyTooLong(f"History entry exceeds {limit} bytes.")


def _new_entry(game_id: str, body: str, ts: int) -> models.HistoryEntry:
    return models.HistoryEntry(
        id=str(uuid.uuid4()),
        game_id=game_id,
        body=body,
        timestamp=ts,
        formatted_timestamp=format_timestamp(ts),
    )


def record_game_start(session: Session, word_length: int, tries: int) -> models.GameRecord:
    """Create an active game record together with its "started" entry."""
    body = f"Game was started, word length: {word_length}, tries: {tries}"
    check_body(body)
    ts = now_ns()
    game = models.GameRecord(
        id=str(uuid.uuid4()),
        status="active",
        started_at=ts,
        formatted_started_at=format_timestamp(ts),
    )
    session.add(game)
    session.add(_new_entry(game.id, body, ts))
    session.commit()
    session.refresh(game)
    return game


def record_event(session: Session, game_id: str, body: str) -> models.HistoryEntry:
    check_body(body)
    entry = _new_entry(game_id, body, now_ns())
    session.add(entry)
    session.commit()
    session.refresh(entry)
    return entry


def get_game(session: Session, game_id: str) -> Optional[models.GameRecord]:
    return session.get(models.GameRecord, game_id)


def end_game_record(session: Session, game_id: str) -> Optional[models.GameRecord]:
    game = get_game(session, game_id)
    if not game:
        return None
    game.status = "ended"
    session.add(game)
    session.commit()
    session.refresh(game)
    return game


def list_games(session: Session) -> List[models.GameRecord]:
    return list(session.exec(
        select(models.GameRecord).order_by(models.GameRecord.started_at, models.GameRecord.id)
    ).all())


def list_entries_for_game(session: Session, game_id: str) -> List[models.HistoryEntry]:
    return list(session.exec(
        select(models.HistoryEntry)
        .where(models.HistoryEntry.game_id == game_id)
        .order_by(models.HistoryEntry.timestamp, models.HistoryEntry.id)
    ).all())


def clear_all(session: Session) -> Tuple[int, int]:
    """Delete every game record and history entry. Returns (games, entries) removed."""
    entries = session.execute(sa_delete(models.HistoryEntry)).rowcount
    games = session.execute(sa_delete(models.GameRecord)).rowcount
    session.commit()
    logger.info("history_cleared", extra={"removed_games": games, "removed_entries": entries})
    return games, entries
