class GameError(Exception):
    """Base for failures reported back to the caller as a message."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidLength(GameError):
    kind = "invalid_length"


class InvalidTries(GameError):
    kind = "invalid_tries"


class WordGenerationFailure(GameError):
    kind = "word_generation_failure"


class NotStarted(GameError):
    kind = "not_started"


class Exhausted(GameError):
    kind = "exhausted"


class HistoryBodyTooLong(GameError):
    kind = "history_body_too_long"
