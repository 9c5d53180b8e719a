"""
Explorer response schemas.
"""
from datetime import datetime

from pydantic import BaseModel, Field


class LastUpdateResponse(BaseModel):
    """Last write time of a collection."""
    lastUpdateTime: datetime = Field(..., description="UTC time of the latest write")
