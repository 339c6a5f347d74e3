"""Query execution engines for runnable query builder statements."""

import logging
from typing import Any, Protocol

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.modules.query_builder.exceptions import QueryError

logger = logging.getLogger(__name__)


class QueryEngine(Protocol):
    """Runs an already substituted SQL statement."""

    def execute(self, sql: str) -> list[dict[str, Any]]: ...


class SqlAlchemyQueryEngine:
    """Query engine backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def execute(self, sql: str) -> list[dict[str, Any]]:
        """Execute a statement and return its rows as dictionaries.

        Raises:
            QueryError: If the database refuses the statement.
        """
        try:
            result = self.db.execute(text(sql))
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.info(f"Query refused by engine: {e}")
            message = str(getattr(e, "orig", None) or e)
            raise QueryError(message) from e
