from sqlmodel import create_engine, SQLModel
from . import models  # noqa: F401  registers the tables
from .config import settings
from .logging_utils import get_logger, setup_logging

logger = get_logger("wordguess.init_db")


def init_db(url: str = ""):
    url = url or settings.database_url
    engine = create_engine(url, connect_args={"check_same_thread": False} if url.startswith("sqlite") else {})
    SQLModel.metadata.create_all(engine)
    logger.info("db_initialized", extra={"database_url": url})
    return engine


if __name__ == '__main__':
    setup_logging(settings.log_level)
    init_db()
