from typing import Annotated, Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.db.session import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Open a document-store session for one request and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Session parameter type for routers and dependency factories
DbSession = Annotated[Session, Depends(get_db)]
