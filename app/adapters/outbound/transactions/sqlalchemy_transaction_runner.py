"""SQLAlchemy transaction runner adapter."""

import threading
from typing import Callable, Optional, TypeVar

from sqlalchemy.orm import Session

from app.application.ports.transaction_runner import TransactionRunner
from app.infrastructure.logging.logger import logger

T = TypeVar("T")

_local = threading.local()


def current_session() -> Optional[Session]:
    """
    Get the session of the transaction running on this thread.

    Returns:
        Active session, or None outside run_in_new_transaction
    """
    return getattr(_local, "session", None)


class SQLAlchemyTransactionRunner(TransactionRunner):
    """Runs each action in its own session and transaction."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        """
        Initialize runner.

        Args:
            session_factory: Callable returning a new session (e.g. a sessionmaker)
        """
        self._session_factory = session_factory

    def run_in_new_transaction(self, action: Callable[[], T]) -> Optional[T]:
        """
        Run action in a new transaction.

        Commits on success. On any exception, rolls back and logs it; the
        exception is not re-raised.

        Args:
            action: No-argument unit of work

        Returns:
            The action's result, or None if it failed
        """
        db = self._session_factory()
        outer_session = current_session()
        _local.session = db
        try:
            result = action()
            db.commit()
            return result
        except Exception as e:
            db.rollback()
            logger.error(f"Transaction failed and was rolled back: {str(e)}", exc_info=e)
            return None
        finally:
            _local.session = outer_session
            db.close()
