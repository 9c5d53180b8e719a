"""
Conversion of raw BSON documents into JSON-compatible values.

Documents are forwarded as-is, without any schema. Only the values
that the standard JSON encoder cannot handle get converted:

- ObjectId -> 24-char hex string
- Decimal128 -> decimal string
- Timestamp -> UTC datetime (then ISO-8601)
- datetime -> ISO-8601 (FastAPI default)
- NaN / +-Infinity floats -> null
- bytes / Binary -> base64 string; UUID-subtype Binary -> UUID string
- Regex, MinKey, MaxKey, Code, DBRef -> relaxed Extended JSON
"""
import base64
import math
from typing import Any

from bson import Binary, Code, DBRef, Decimal128, MaxKey, MinKey, ObjectId, Regex, Timestamp, json_util
from bson.binary import UUID_SUBTYPE
from fastapi.encoders import jsonable_encoder

Document = dict[str, Any]


def _encode_float(value: float) -> Any:
    return value if math.isfinite(value) else None


def _encode_bytes(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _encode_binary(value: Binary) -> str:
    if value.subtype == UUID_SUBTYPE:
        return str(value.as_uuid())
    return _encode_bytes(bytes(value))


def _encode_extended_json(value: Any) -> Any:
    return to_jsonable(json_util.default(value, json_options=json_util.RELAXED_JSON_OPTIONS))


# Binary precedes bytes: the isinstance fallback follows insertion order
BSON_ENCODERS = {
    ObjectId: str,
    Decimal128: str,
    Timestamp: lambda ts: ts.as_datetime().isoformat(),
    float: _encode_float,
    Binary: _encode_binary,
    bytes: _encode_bytes,
    Code: _encode_extended_json,
    Regex: _encode_extended_json,
    MinKey: _encode_extended_json,
    MaxKey: _encode_extended_json,
    DBRef: _encode_extended_json,
}


def to_jsonable(value: Any) -> Any:
    """Convert a document (or list of documents) to JSON-compatible data."""
    return jsonable_encoder(value, custom_encoder=BSON_ENCODERS)
