"""
Database module - MongoDB connection and reserved database definitions.
"""
from app.database.connections import (
    ConnectionManager,
    get_connection_manager,
    get_mongo_client,
    close_connections,
)
from app.database.databases import system_db

__all__ = [
    "ConnectionManager",
    "get_connection_manager",
    "get_mongo_client",
    "close_connections",
    "system_db",
]
