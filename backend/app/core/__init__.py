"""
Core module - Logging setup and BSON serialization helpers.
"""
from app.core.logging_config import configure_logging
from app.core.serialization import Document, to_jsonable

__all__ = [
    "configure_logging",
    "Document",
    "to_jsonable",
]
