import json
import logging
import os
import sys
import typing as _t
from contextvars import ContextVar
from typing import Any, Dict, Optional

# Request id carried through a single API call
request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# structured fields picked up from logger.extra
_REQUEST_FIELDS = ("method", "path", "status", "duration_ms", "client")
_GAME_FIELDS = (
    "game_id",
    "word_length",
    "tries",
    "tries_left",
    "outcome",
    "kind",
    "error",
    "errors",
    "removed_games",
    "removed_entries",
    "database_url",
)


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "logger": record.name,
            "message": record.getMessage(),
        }
        rid = request_id_ctx.get()
        if rid:
            payload["request_id"] = rid
        for key in _REQUEST_FIELDS + _GAME_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                payload[key] = val
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """Colorized single-line output for a terminal."""

    RESET = "\033[0m"
    GREY = "\033[90m"
    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return f"{color}{text}{self.RESET}"

    def _fields(self, record: logging.LogRecord, keys: _t.Iterable[str]) -> _t.List[str]:
        out = []
        for key in keys:
            val = getattr(record, key, None)
            if val is not None:
                out.append(f"{key}={val}")
        return out

    def format(self, record: logging.LogRecord) -> str:
        parts: _t.List[str] = [
            self._color(record.levelname, self.COLORS.get(record.levelname, "")),
            self.formatTime(record, datefmt="%H:%M:%S"),
        ]
        rid = request_id_ctx.get()
        if rid:
            parts.append(self._color(f"rid={rid}", "\033[35m"))
        parts.append(self._color(record.name, "\033[34m"))

        req = self._fields(record, _REQUEST_FIELDS)
        if req:
            parts.append(" ".join(req))
        msg = record.getMessage()
        if msg:
            parts.extend(["-", msg])
        ctx = self._fields(record, _GAME_FIELDS)
        if ctx:
            parts.append(self._color("[" + " ".join(ctx) + "]", self.GREY))
        if record.exc_info:
            parts.append("\n" + self.formatException(record.exc_info))
        return " ".join(parts)


def _isatty(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure root and uvicorn loggers.

    - LOG_FORMAT=pretty forces the colorized formatter
    - LOG_FORMAT=json forces JSON
    - otherwise: pretty on a TTY, JSON elsewhere
    - LOG_COLOR=0 disables ANSI colors in pretty mode
    """
    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)

    fmt_env = os.getenv("LOG_FORMAT", "").lower()
    color_env = os.getenv("LOG_COLOR", "1").lower()
    use_pretty = (fmt_env == "pretty") or (fmt_env == "" and _isatty(sys.stdout))
    use_color = use_pretty and color_env not in ("0", "false", "no")

    handler = logging.StreamHandler(sys.stdout)
    if use_pretty:
        handler.setFormatter(ColorFormatter(use_color=use_color))
    else:
        handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers = [handler]
        lg.setLevel(level)
        lg.propagate = False

    return root


def get_logger(name: str = "wordguess") -> logging.Logger:
    return logging.getLogger(name)
