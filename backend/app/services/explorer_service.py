"""
Explorer service for read-only cluster introspection.

Provides:
- Database and collection listings
- Full collection dumps ordered by Percentile
- Last update time of a collection, from the newest _id or from the oplog
"""
from datetime import datetime
from typing import Any, Optional

from app.core.serialization import Document
from app.database.connections import ConnectionManager
from app.database.databases import system_db
from app.services.timestamps import as_embedded_timestamp

# Sort key for collection dumps
PERCENTILE_FIELD = "Percentile"


class DocumentNotFoundError(LookupError):
    """Raised when a lookup legitimately matches no document."""


class ExplorerService:
    """Service issuing one MongoDB query per gateway operation."""

    def __init__(self, connections: ConnectionManager):
        """Initialize with the shared connection manager."""
        self.connections = connections

    # ==================== Listings ====================

    async def list_databases(self) -> list[str]:
        """List database names, hiding MongoDB's own system databases."""
        client = await self.connections.acquire()
        names = await client.list_database_names()
        return [name for name in names if name not in system_db.SYSTEM_DATABASES]

    async def list_collections(self, db_name: str) -> list[str]:
        """List collection names of a database."""
        client = await self.connections.acquire()
        return await client[db_name].list_collection_names()

    # ==================== Collection Data ====================

    async def get_collection_data(self, db_name: str, collection_name: str) -> list[Document]:
        """
        Get every document of a collection, highest Percentile first.

        Documents without a Percentile field sort last, per MongoDB's
        null/missing ordering.
        """
        client = await self.connections.acquire()
        collection = client[db_name][collection_name]
        cursor = collection.find({}).sort(PERCENTILE_FIELD, -1)
        return await cursor.to_list(length=None)

    # ==================== Last Update Time ====================

    async def get_last_update_time(self, db_name: str, collection_name: str) -> datetime:
        """
        Get the creation time of the newest document, read from its _id.

        Only reflects inserts; updates to existing documents do not move it.

        Raises:
            DocumentNotFoundError: the collection is empty
            TimestampUnavailableError: the newest _id is not an ObjectId
        """
        client = await self.connections.acquire()
        collection = client[db_name][collection_name]
        latest = await self._find_latest(collection, {}, "_id")
        if latest is None:
            raise DocumentNotFoundError(f"No documents in {db_name}.{collection_name}")
        return as_embedded_timestamp(latest["_id"]).embedded_timestamp()

    async def get_last_update_time_from_oplog(self, db_name: str, collection_name: str) -> datetime:
        """
        Get the time of the last insert or update recorded in the oplog.

        Requires a replica set member exposing local.oplog.rs.

        Raises:
            DocumentNotFoundError: no insert/update entry for the namespace
        """
        client = await self.connections.acquire()
        oplog = client[system_db.OPLOG_DB_NAME][system_db.Collections.OPLOG]
        query = {
            "ns": system_db.namespace(db_name, collection_name),
            "op": {"$in": system_db.DATA_WRITE_OPS},
        }
        latest = await self._find_latest(oplog, query, "ts")
        if latest is None:
            raise DocumentNotFoundError(f"No oplog writes for {db_name}.{collection_name}")
        return as_embedded_timestamp(latest["ts"]).embedded_timestamp()

    async def _find_latest(self, collection: Any, query: dict, sort_field: str) -> Optional[Document]:
        """Get the single document with the greatest sort_field value."""
        cursor = collection.find(query).sort(sort_field, -1).limit(1)
        documents = await cursor.to_list(length=1)
        return documents[0] if documents else None
