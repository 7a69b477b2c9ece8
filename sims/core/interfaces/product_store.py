"""Abstract interface for product catalogue storage."""

from abc import ABC, abstractmethod
from typing import Any

from sims.core.entities.product import Product


class IProductStore(ABC):
    """Interface for product persistence."""

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Create a product with an allocated id."""
        pass

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        pass

    @abstractmethod
    async def list_products(self, active_only: bool = False) -> list[Product]:
        """List products ordered by name."""
        pass

    @abstractmethod
    async def update_product(self, product_id: int, fields: dict[str, Any]) -> Product:
        """Apply a partial update; raises ProductNotFoundError."""
        pass

    @abstractmethod
    async def delete_product(self, product_id: int) -> bool:
        pass
