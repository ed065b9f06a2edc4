"""
Import/export helpers for FuelTrack backups.

Backups are JSON arrays of fuel records using the wire field names
(id, date, odometer, gallons, pricePerGallon, totalCost, notes).

Provides functions for:
- Parsing and validating an import payload
- Computing payload hashes for log correlation
- Naming export files
"""

import hashlib
import json
from datetime import date
from typing import Any, List

from ..exceptions import ImportPayloadError
from ..models import FuelRecord, RecordFieldError

EXPORT_FILENAME_TEMPLATE = "fueltrack_backup_{day}.json"


def parse_import_payload(payload: Any) -> List[FuelRecord]:
    """
    Convert a decoded JSON payload into fuel records.

    Args:
        payload: Decoded JSON (must be a list of objects)

    Returns:
        Records in payload order

    Raises:
        ImportPayloadError: if the payload is not an array, an item is not
            an object, or an item lacks an id or a valid date or has a
            non-finite amount
    """
    if not isinstance(payload, list):
        raise ImportPayloadError("Invalid format: expected a JSON array of fuel records")

    records = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ImportPayloadError("Invalid format: every item must be an object", item_index=index)
        try:
            records.append(FuelRecord.from_dict(item))
        except RecordFieldError as e:
            raise ImportPayloadError(str(e), item_index=index, field=e.field) from e

    return records


def serialize_records(records: List[FuelRecord]) -> str:
    """Serialize records as an indented JSON array."""
    return json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)


def get_payload_hash(content: bytes) -> str:
    """
    Compute SHA-256 hash of an uploaded payload.

    Logged with each import so repeated imports of the same backup can
    be correlated.

    Returns:
        str: Hex-encoded SHA-256 hash (64 characters)
    """
    return hashlib.sha256(content).hexdigest()


def build_export_filename(day: date) -> str:
    """
    Name of a backup file exported on day.

    Example:
        >>> build_export_filename(date(2024, 3, 9))
        'fueltrack_backup_2024-03-09.json'
    """
    return EXPORT_FILENAME_TEMPLATE.format(day=day.isoformat())
