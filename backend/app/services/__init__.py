"""
Service layer for query logic.
"""
from app.services.explorer_service import DocumentNotFoundError, ExplorerService

__all__ = [
    "DocumentNotFoundError",
    "ExplorerService",
]
