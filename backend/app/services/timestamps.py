"""
Timestamps embedded in BSON values.

Both "last update" lookups end with a single BSON value that carries a
time: a document's ObjectId (creation second) or an oplog entry's
Timestamp (logical clock, seconds + increment). `HasEmbeddedTimestamp`
lets callers read that time without caring which kind of value it was.
"""
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from bson import ObjectId, Timestamp


class TimestampUnavailableError(ValueError):
    """Raised when a value carries no embedded timestamp."""


@runtime_checkable
class HasEmbeddedTimestamp(Protocol):
    """A value from which a creation/write time can be derived."""

    def embedded_timestamp(self) -> datetime:
        ...


class ObjectIdTimestamp:
    """Creation time encoded in the first 4 bytes of an ObjectId."""

    def __init__(self, object_id: ObjectId):
        self.object_id = object_id

    def embedded_timestamp(self) -> datetime:
        return self.object_id.generation_time


class OplogTimestamp:
    """Wall-clock seconds of an oplog logical timestamp."""

    def __init__(self, ts: Timestamp):
        self.ts = ts

    def embedded_timestamp(self) -> datetime:
        return self.ts.as_datetime()


def as_embedded_timestamp(value: Any) -> HasEmbeddedTimestamp:
    """
    Adapt a raw BSON value to HasEmbeddedTimestamp.

    Raises:
        TimestampUnavailableError: the value type has no embedded time
            (e.g. integer or string _id values)
    """
    if isinstance(value, HasEmbeddedTimestamp):
        return value
    if isinstance(value, ObjectId):
        return ObjectIdTimestamp(value)
    if isinstance(value, Timestamp):
        return OplogTimestamp(value)
    raise TimestampUnavailableError(
        f"Value of type {type(value).__name__} has no embedded timestamp"
    )
