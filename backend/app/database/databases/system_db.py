"""
Reserved MongoDB databases and system collections.
Names the gateway hides from listings or reads for replication metadata.
"""

# Databases MongoDB manages internally; never listed to clients
SYSTEM_DATABASES = frozenset({"admin", "config", "local"})

# Replication oplog (replica sets only)
OPLOG_DB_NAME = "local"


class Collections:
    """Collection names in the local database."""
    OPLOG = "oplog.rs"


class OplogOps:
    """Operation codes recorded in oplog entries."""
    INSERT = "i"
    UPDATE = "u"


# Operations that count as a write to a collection's documents
DATA_WRITE_OPS = [OplogOps.INSERT, OplogOps.UPDATE]


def namespace(db_name: str, collection_name: str) -> str:
    """Build the oplog namespace string for a collection."""
    return f"{db_name}.{collection_name}"
