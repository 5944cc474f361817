"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.user_routes import router as user_router
from app.api.routes.project_routes import router as project_router
from app.api.routes.bid_routes import router as bid_router
from app.api.routes.milestone_routes import router as milestone_router
from app.api.routes.ai_routes import router as ai_router

# Main API router (mounted under /api)
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(user_router)
api_router.include_router(project_router)
api_router.include_router(bid_router)
api_router.include_router(milestone_router)
api_router.include_router(ai_router)
