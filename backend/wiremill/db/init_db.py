"""Create all tables. Run on app startup."""
import logging

from sqlalchemy.engine import Engine

from wiremill.db.base import Base
from wiremill import models  # noqa: F401 - register models

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database schema ready ({len(Base.metadata.tables)} tables)")
