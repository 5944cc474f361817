"""
HR Nexus - Main Application

FastAPI backend with:
- SQLite for all marketplace data (single file)
- WebSocket chat relay with per-user rooms
- Generative text API for descriptions, bid analysis, matchmaking
- Built SPA served from /frontend/public

Run: uvicorn app.main:app --port 3000
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse, JSONResponse
from openai import OpenAIError
from sqlalchemy.exc import SQLAlchemyError

from app.api import api_router, chat_router
from app.db.sqlite import init_db, test_sqlite_connection
from app.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Get the project root directory
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
FRONTEND_DIR = os.path.join(PROJECT_ROOT, settings.frontend_dir)

# Create FastAPI app
app = FastAPI(
    title="HR Nexus",
    description="""
    A two-sided marketplace for HR consulting gigs.

    ## Features
    - **Projects**: Buyers post projects; three milestones are created automatically
    - **Bids**: Sellers submit proposals against open projects
    - **Users**: Mock login upserts the chosen buyer/seller profile
    - **AI**: Job description drafts, bid analysis, matchmaking advice
    - **Chat**: Real-time messaging over /ws

    ## Database
    - SQLite: users, projects, bids, milestones, messages
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")
app.include_router(chat_router)

# Serve static files (for the built SPA assets)
if os.path.exists(FRONTEND_DIR):
    app.mount("/static", StaticFiles(directory=FRONTEND_DIR), name="static")


# Store and AI failures surface as 500 with the raw message
@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    message = str(getattr(exc, "orig", None) or exc)
    logger.error("%s %s failed: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=500, content={"detail": message})


@app.exception_handler(OpenAIError)
async def ai_error_handler(request: Request, exc: OpenAIError):
    logger.error("%s %s AI call failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create the schema and seed rows on startup."""
    init_db()
    logger.info("Server running on http://localhost:%s", settings.port)


# Serve React frontend for root path
@app.get("/", tags=["Frontend"])
async def serve_frontend():
    """Serve the SPA entry point."""
    index_path = os.path.join(FRONTEND_DIR, "index.html")
    if os.path.exists(index_path):
        return FileResponse(index_path)
    return {"status": "healthy", "app": "HR Nexus", "message": "Frontend not found. API is running."}


@app.get("/health", tags=["Health"])
def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "sqlite": "connected" if test_sqlite_connection() else "disconnected",
        "ai": "configured" if settings.gemini_api_key else "missing api key"
    }


def run():
    """Console entry point: serve HTTP and WebSocket on the configured port."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
