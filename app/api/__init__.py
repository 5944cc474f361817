"""
API module - FastAPI routers and endpoint definitions.

- api_router: REST endpoints, mounted under /api
- chat_router: the /ws real-time chat socket

Usage:
    from app.api import api_router
    app.include_router(api_router, prefix="/api")
"""

from app.api.routes import api_router
from app.api.routes.chat_routes import router as chat_router

__all__ = ["api_router", "chat_router"]
