"""Transaction runner port."""

from abc import ABC, abstractmethod
from typing import Callable, Optional, TypeVar

T = TypeVar("T")


class TransactionRunner(ABC):
    """Port interface for running work in its own transaction."""

    @abstractmethod
    def run_in_new_transaction(self, action: Callable[[], T]) -> Optional[T]:
        """
        Run an action inside a new, independent transaction.

        The transaction commits when the action returns and rolls back when it
        raises. Errors are logged and never propagate to the caller.

        Args:
            action: No-argument unit of work

        Returns:
            The action's result, or None if it failed
        """
        pass
