"""Abstract interface for transactional boundaries spanning several stores."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class IUnitOfWork(ABC):
    """Groups store calls so they commit or roll back together."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """
        Open a transaction that every store call inside the block joins.

        Usage:
            async with uow.transaction():
                await inventory_store.adjust_quantity(...)
                await production_store.create_batch(...)
        """
        pass
