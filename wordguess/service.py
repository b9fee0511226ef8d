"""
The single game session shared by every API call.

``WordGame`` owns the secret word, the remaining tries and the pointer to
the game record currently receiving history. Exactly one instance lives on
the application; route handlers receive it through a dependency.
"""

import threading
from typing import List, Optional

from sqlmodel import Session

from . import crud, game, models
from .errors import (
    Exhausted,
    HistoryBodyTooLong,
    InvalidLength,
    InvalidTries,
    NotStarted,
    WordGenerationFailure,
)
from .logging_utils import get_logger
from .words import Dictionary

logger = get_logger("wordguess.service")


class WordGame:

    def __init__(self, dictionary: Dictionary, rng=None):
        self.dictionary = dictionary
        self.rng = rng
        self.state: game.GameState = game.Inactive()
        self.active_game_id: Optional[str] = None
        self._lock = threading.RLock()

    @property
    def secret(self) -> Optional[str]:
        return self.state.secret if isinstance(self.state, game.Active) else None

    def rules(self) -> str:
        min_len, max_len = self.dictionary.length_bounds()
        return (
            game.length_message(min_len, max_len)
            + "\n"
            + "Execute start function with needed word length and tries count"
        )

    def tries_left(self) -> str:
        if isinstance(self.state, game.Active):
            return str(self.state.tries_remaining)
        return "Game is not started."

    def start(self, db: Session, word_length: int, tries: int) -> str:
        min_len, max_len = self.dictionary.length_bounds()
        if not (min_len <= word_length <= max_len):
            raise InvalidLength(game.length_message(min_len, max_len))
        if tries <= 0:
            raise InvalidTries("Tries count must be greater than zero.")
        word = self.dictionary.pick(word_length, self.rng)
        if not word:
            raise WordGenerationFailure(f"Word with length {word_length} cannot be generated.")
        # the longest report a guess can produce must fit in one history entry
        try:
            crud.check_body(game.guess_report(word, word, game.lost_message(word)))
        except HistoryBodyTooLong as exc:
            raise WordGenerationFailure(f"Word with length {word_length} cannot be generated.") from exc

        with self._lock:
            if isinstance(self.state, game.Active) and self.active_game_id:
                # the replaced game's record is left in "active" status
                logger.warning("game_abandoned", extra={"game_id": self.active_game_id})
            record = crud.record_game_start(db, word_length, tries)
            self.state = game.Active(secret=word, tries_remaining=tries)
            self.active_game_id = record.id
        logger.info("game_started", extra={"game_id": record.id, "word_length": word_length, "tries": tries})
        return game.start_message(word_length, tries)

    def end_game(self, db: Session) -> None:
        with self._lock:
            self.state = game.Inactive()
            if self.active_game_id:
                crud.end_game_record(db, self.active_game_id)

    def guess(self, db: Session, word: str) -> str:
        with self._lock:
            state = self.state
            if not isinstance(state, game.Active):
                raise NotStarted("Game was not started yet.")
            if state.tries_remaining <= 0:
                raise Exhausted("You have no tries left, start again.")
            feedback = game.evaluate(state.secret, word)

            tries_remaining = state.tries_remaining - 1
            outcome = None
            message = ""
            if game.is_win(state.secret, word):
                outcome, message = "won", game.won_message()
            elif tries_remaining == 0:
                outcome, message = "lost", game.lost_message(state.secret)
            report = game.guess_report(word, feedback, message)
            crud.check_body(report)

            game_id = self.active_game_id
            self.state = game.Active(secret=state.secret, tries_remaining=tries_remaining)
            if outcome:
                self.end_game(db)
            if game_id:
                crud.record_event(db, game_id, report)
        logger.info("guess_scored", extra={"game_id": game_id, "tries_left": tries_remaining, "outcome": outcome})
        if outcome:
            logger.info("game_ended", extra={"game_id": game_id, "outcome": outcome})
        return report

    def history(self, db: Session, game_id: str) -> List[models.HistoryEntry]:
        return crud.list_entries_for_game(db, game_id)

    def current_history(self, db: Session) -> List[models.HistoryEntry]:
        if not self.active_game_id:
            raise NotStarted("Game is not started yet.")
        return crud.list_entries_for_game(db, self.active_game_id)

    def reset(self) -> None:
        """Drop the in-memory session state; persisted history is untouched."""
        with self._lock:
            self.state = game.Inactive()
            self.active_game_id = None
