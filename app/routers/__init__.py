from app.routers.books import router as books_router
from app.routers.clients import router as clients_router
from app.routers.coffees import router as coffees_router
from app.routers.health import router as health_router
from app.routers.history import router as history_router
from app.routers.rolls import router as rolls_router
from app.routers.sales import router as sales_router
from app.routers.stats import router as stats_router

__all__ = [
    "books_router",
    "clients_router",
    "coffees_router",
    "health_router",
    "history_router",
    "rolls_router",
    "sales_router",
    "stats_router",
]
