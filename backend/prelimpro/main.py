"""
Prelimpro - FastAPI Application

Main entry point for the Prelimpro backend.

Flow:
- Project (state + first furnishing date) -> DeadlineEngine -> statutory deadline
- Project + company profile -> state template -> notice (HTML / PDF / sections)
- Lifecycle: draft -> pending -> sent -> delivered -> signed, every step audited
- Daily reminder run -> Expo push
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import CORS_ORIGINS, LOG_LEVEL
from .database import init_db
from .routers import (
    auth_router,
    billing_router,
    notifications_router,
    projects_router,
    scheduler_router,
    templates_router,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    logger.info("Database initialized")
    yield

# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="Prelimpro",
    description="""
    Prelimpro - Preliminary Notice Management

    Generates, tracks and delivers the preliminary notices contractors need
    to preserve mechanic's lien rights.

    ## Features
    - State notice templates and statutory deadlines
    - Notice generation as HTML, PDF or editable sections
    - Delivery, proof of service and signature tracking with an audit trail
    - Deadline reminders via push notifications
    - Stripe billing and notice entitlements
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(templates_router)
app.include_router(billing_router)
app.include_router(notifications_router)
app.include_router(scheduler_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Prelimpro",
        "version": __version__,
        "description": "Preliminary Notice Management",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# For running with: python -m prelimpro.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
