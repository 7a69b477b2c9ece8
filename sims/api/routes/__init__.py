"""API route modules."""

from sims.api.routes.analytics import reports_router
from sims.api.routes.analytics import router as analytics_router
from sims.api.routes.distributions import router as distributions_router
from sims.api.routes.health import router as health_router
from sims.api.routes.inventory import finished_products_router, raw_materials_router
from sims.api.routes.inventory import router as inventory_router
from sims.api.routes.payments import recovery_router
from sims.api.routes.payments import router as payments_router
from sims.api.routes.production import router as production_router
from sims.api.routes.products import router as products_router

__all__ = [
    "health_router",
    "products_router",
    "inventory_router",
    "raw_materials_router",
    "finished_products_router",
    "production_router",
    "distributions_router",
    "payments_router",
    "recovery_router",
    "analytics_router",
    "reports_router",
]
