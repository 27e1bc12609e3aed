import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from .....exceptions import StoreFailure

logger = logging.getLogger(__name__)

_SENSITIVE = ("email", "phone", "address", "notes")


def _sanitize(params: dict) -> dict:
    return {k: ("***" if k in _SENSITIVE and v is not None else v) for k, v in params.items()}


class SqlRepository:
    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _guard(self, operation: str, **params: Any) -> Iterator[None]:
        """Roll back and re-raise any database error as StoreFailure."""
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error during {operation} {_sanitize(params)}: {e}", exc_info=True)
            raise StoreFailure(operation, e) from e


LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """Case-folded LIKE pattern that treats % and _ in the term literally."""
    escaped = (
        term.lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
