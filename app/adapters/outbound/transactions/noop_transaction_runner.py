"""No-op transaction runner (used when no database is configured)."""

from typing import Callable, Optional, TypeVar

from app.application.ports.transaction_runner import TransactionRunner
from app.infrastructure.logging.logger import logger

T = TypeVar("T")


class NoOpTransactionRunner(TransactionRunner):
    """Runs actions directly, with the same failure handling as a real runner."""

    def run_in_new_transaction(self, action: Callable[[], T]) -> Optional[T]:
        """Run action; log and swallow any exception it raises."""
        try:
            return action()
        except Exception as e:
            logger.error(f"Action failed (no transaction to roll back): {str(e)}", exc_info=e)
            return None
