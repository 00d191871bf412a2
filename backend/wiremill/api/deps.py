"""FastAPI dependencies: DB session from the application's session factory."""
from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session


def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
