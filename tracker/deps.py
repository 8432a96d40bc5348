"""
tracker/deps.py

FastAPI dependencies shared by the routers.
- get_session: one SQLAlchemy session per request
- get_current_user_id: owner id supplied by the upstream identity provider
"""

from typing import Annotated, Generator

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from db.models import SessionLocal


def get_session() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_current_user_id(
    x_user_id: Annotated[str | None, Header()] = None,
) -> str:
    """Authentication happens upstream; this only reads the resolved owner id."""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return x_user_id


SessionDep = Annotated[Session, Depends(get_session)]
UserIdDep = Annotated[str, Depends(get_current_user_id)]


def page_count(total: int, limit: int) -> int:
    return -(-total // limit) if limit else 0
