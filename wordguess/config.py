import logging
import os
from typing import List, Optional


class Settings:
    """Environment-driven settings, read once at import time."""

    def __init__(self):
        self.database_url: str = os.getenv("DATABASE_URL", "sqlite:///./wordguess.db")
        self.words_file: Optional[str] = os.getenv("WORDS_FILE") or None
        # value budget of a single stored history entry
        self.history_body_max_length: int = int(os.getenv("HISTORY_BODY_MAX_LENGTH", "1000"))
        self.log_level: int = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
        if not isinstance(self.log_level, int):
            self.log_level = logging.INFO
        origins = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
        self.allowed_origins: List[str] = [o.strip() for o in origins.split(",") if o.strip()]

    def connect_args(self) -> dict:
        return {"check_same_thread": False} if self.database_url.startswith("sqlite") else {}


settings = Settings()
