"""API routes."""

from .directories import router as directories_router
from .documents import router as documents_router

__all__ = ["directories_router", "documents_router"]
