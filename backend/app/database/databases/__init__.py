"""
Database definitions and collection constants.
"""
from app.database.databases import system_db

__all__ = ["system_db"]
