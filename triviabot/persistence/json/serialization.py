"""
JSON serialization for stored documents.

Documents are wrapped in a small envelope carrying metadata so a file on disk
says when it was last written::

    {"_metadata": {"updated_at": "...", "version": "1.0"}, "data": {...}}
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from pydantic_core import to_jsonable_python

logger = logging.getLogger("JSONSerde")

DOCUMENT_VERSION = "1.0"
METADATA_KEY = "_metadata"


def serialize_for_json(obj: Any) -> Any:
    """Reduce models, datetimes and containers of them to plain JSON values."""
    return to_jsonable_python(obj)


def create_document(data: Any) -> dict[str, Any]:
    """Wrap data in the on-disk document envelope."""
    return {
        METADATA_KEY: {
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "version": DOCUMENT_VERSION,
        },
        "data": serialize_for_json(data),
    }


def extract_document(file_data: Any) -> Any | None:
    """Unwrap the document envelope.

    Bare documents (written by hand or by older deployments) are returned as is.
    """
    if isinstance(file_data, dict) and METADATA_KEY in file_data:
        return file_data.get("data")
    return file_data


def to_json_string(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2, default=to_jsonable_python)


def from_json_string(json_str: str) -> Any:
    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON: {e}")
        raise
