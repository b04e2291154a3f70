"""API routers package."""

from tradesim.api.routers.commands import router as commands_router
from tradesim.api.routers.users import router as users_router
from tradesim.api.routers.quotes import router as quotes_router

__all__ = [
    "commands_router",
    "users_router",
    "quotes_router",
]
