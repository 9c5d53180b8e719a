"""
Databases router for read-only cluster introspection.

Endpoints for:
- Listing databases and collections
- Dumping a collection's documents
- Last update time of a collection (by _id or by oplog)

Database and collection names from the path are passed to the driver
verbatim. Failures are logged server-side and answered with a fixed
plain-text body; driver error details never reach the client.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.core.serialization import to_jsonable
from app.database.connections import get_connection_manager
from app.schemas.explorer import LastUpdateResponse
from app.services.explorer_service import DocumentNotFoundError, ExplorerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/databases", tags=["Databases"])


async def get_explorer_service() -> ExplorerService:
    """Dependency to get ExplorerService instance."""
    return ExplorerService(get_connection_manager())


def _server_error(text: str) -> PlainTextResponse:
    return PlainTextResponse(text, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _not_found(text: str) -> PlainTextResponse:
    return PlainTextResponse(text, status_code=status.HTTP_404_NOT_FOUND)


# ==================== Listings ====================


@router.get(
    "",
    response_model=list[str],
    summary="List databases",
)
async def list_databases(
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """List all databases except admin, config and local."""
    logger.info("GET /databases")
    try:
        names = await explorer.list_databases()
    except Exception:
        logger.exception("Error fetching databases")
        return _server_error("Error fetching databases")

    logger.info("Sent databases: %s", names)
    return names


@router.get(
    "/{db}/collections",
    response_model=list[str],
    summary="List collections",
)
async def list_collections(
    db: str,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """List all collections in a database."""
    logger.info("GET /databases/%s/collections", db)
    try:
        names = await explorer.list_collections(db)
    except Exception:
        logger.exception("Error fetching collections for database %s", db)
        return _server_error("Error fetching collections")

    logger.info("Sent collections: %s", names)
    return names


# ==================== Collection Data ====================


@router.get(
    "/{db}/collections/{collection}/data",
    summary="Get collection data",
)
async def get_collection_data(
    db: str,
    collection: str,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """
    Get all documents of a collection, sorted by Percentile descending.

    No pagination: the whole collection is returned.
    """
    logger.info("GET /databases/%s/collections/%s/data", db, collection)
    try:
        documents = await explorer.get_collection_data(db, collection)
        # JSONResponse renders its body here, so encoding errors stay in the try
        response = JSONResponse(content=to_jsonable(documents))
    except Exception:
        logger.exception("Error fetching data from %s in database %s", collection, db)
        return _server_error("Error fetching data")

    logger.info("Sent %d documents from %s in database %s", len(documents), collection, db)
    return response


# ==================== Last Update Time ====================


@router.get(
    "/{db}/collections/{collection}/batch-update-time",
    response_model=LastUpdateResponse,
    summary="Get last update time from document ids",
)
async def get_batch_update_time(
    db: str,
    collection: str,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """
    Get the creation time of the newest document, read from its ObjectId.

    Returns 404 when the collection is empty.
    """
    logger.info("GET /databases/%s/collections/%s/batch-update-time", db, collection)
    try:
        timestamp = await explorer.get_last_update_time(db, collection)
    except DocumentNotFoundError:
        return _not_found("No documents found in this collection")
    except Exception:
        logger.exception("Error fetching last update time from %s in database %s", collection, db)
        return _server_error("Error fetching last update time")

    logger.info("Sent last update time for %s in database %s: %s", collection, db, timestamp)
    return LastUpdateResponse(lastUpdateTime=timestamp)


@router.get(
    "/{db}/collections/{collection}/batch-update-time-oplog",
    response_model=LastUpdateResponse,
    summary="Get last update time from the oplog",
)
async def get_batch_update_time_oplog(
    db: str,
    collection: str,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """
    Get the time of the latest insert or update recorded in the oplog.

    Includes updates to existing documents. Needs a replica set; returns
    404 when the oplog holds no write for the collection.
    """
    logger.info("GET /databases/%s/collections/%s/batch-update-time-oplog", db, collection)
    try:
        timestamp = await explorer.get_last_update_time_from_oplog(db, collection)
    except DocumentNotFoundError:
        return _not_found("No updates found in this collection")
    except Exception:
        logger.exception("Error fetching oplog update time from %s in database %s", collection, db)
        return _server_error("Error fetching last update time")

    logger.info("Sent oplog update time for %s in database %s: %s", collection, db, timestamp)
    return LastUpdateResponse(lastUpdateTime=timestamp)
