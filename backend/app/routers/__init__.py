"""
API Routers module.
"""
from app.routers import databases, health

__all__ = ["databases", "health"]
