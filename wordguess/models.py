from typing import Optional
from sqlmodel import SQLModel, Field


class GameRecord(SQLModel, table=True):
    id: Optional[str] = Field(default=None, primary_key=True)
    status: str = "active"  # active | ended
    started_at: int = 0  # nanoseconds since epoch
    formatted_started_at: str = ""


class HistoryEntry(SQLModel, table=True):
    id: Optional[str] = Field(default=None, primary_key=True)
    game_id: str = Field(index=True)
    body: str = ""
    timestamp: int = 0  # nanoseconds since epoch
    formatted_timestamp: str = ""
