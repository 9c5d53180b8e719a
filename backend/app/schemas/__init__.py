"""
Request and response schemas for API endpoints.
"""
from app.schemas.explorer import LastUpdateResponse

__all__ = [
    "LastUpdateResponse",
]
