"""API route modules."""

from studio.api.routes.bookings import router as bookings_router
from studio.api.routes.cost_of_sale import router as cost_of_sale_router
from studio.api.routes.health import router as health_router
from studio.api.routes.inventory import router as inventory_router
from studio.api.routes.reports import router as reports_router
from studio.api.routes.sessions import router as sessions_router
from studio.api.routes.settings import router as settings_router

__all__ = [
    "health_router",
    "bookings_router",
    "sessions_router",
    "inventory_router",
    "cost_of_sale_router",
    "settings_router",
    "reports_router",
]
