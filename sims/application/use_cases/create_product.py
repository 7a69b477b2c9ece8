"""Create Product Use Case."""

from sims.application.dto.requests import CreateProductRequest
from sims.application.dto.responses import ProductResponse
from sims.config import get_logger
from sims.core.entities.product import Product
from sims.core.exceptions import InvalidInputError
from sims.core.interfaces import IProductStore

logger = get_logger(__name__)


class CreateProductUseCase:
    """Add a product to the catalogue."""

    def __init__(self, product_store: IProductStore | None = None):
        self._product_store = product_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from sims.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def execute(self, request: CreateProductRequest) -> Product:
        """Execute create product use case."""
        if not request.name or not request.name.strip():
            raise InvalidInputError(field="name", message="is required")

        store = await self._get_product_store()
        product = await store.create_product(
            Product(
                name=request.name.strip(),
                category=request.category,
                description=request.description,
                idea_creation_date=request.idea_creation_date,
                production_start_date=request.production_start_date,
                is_active=request.is_active,
            )
        )

        logger.info("product_registered", product_id=product.id, name=product.name)
        return product

    def to_response(self, product: Product) -> ProductResponse:
        return ProductResponse.from_entity(product)
