"""Prelimpro - API Routers"""
from .auth import router as auth_router
from .billing import router as billing_router
from .notifications import router as notifications_router
from .projects import router as projects_router
from .scheduler import router as scheduler_router
from .templates import router as templates_router

__all__ = [
    "auth_router",
    "billing_router",
    "notifications_router",
    "projects_router",
    "scheduler_router",
    "templates_router",
]
