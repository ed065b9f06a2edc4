"""
Export routes for FuelTrack.

Handles JSON backup export and import.
"""

import logging

from flask import Blueprint, Response, jsonify, request

from ..database import get_db
from ..exceptions import ImportPayloadError
from ..services import record_service
from ..utils.import_utils import (
    build_export_filename,
    get_payload_hash,
    parse_import_payload,
    serialize_records,
)
from ..utils.time_utils import local_today

logger = logging.getLogger(__name__)

export_bp = Blueprint('export', __name__)


@export_bp.route('/export', methods=['GET'])
def export_records() -> Response:
    """Download every record as a JSON array backup."""
    records = record_service.load_records(get_db())
    filename = build_export_filename(local_today())
    logger.info(f"Exporting {len(records)} fuel records to {filename}")
    return Response(
        serialize_records(records),
        mimetype='application/json',
        headers={'Content-Disposition': f'attachment; filename={filename}'}
    )


@export_bp.route('/import', methods=['POST'])
def import_records():
    """
    Import a JSON array backup.

    Records with new ids are appended; records whose id already exists are
    left untouched. The whole payload is rejected if any item is malformed.
    """
    raw = request.get_data()
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        raise ImportPayloadError("Error parsing JSON")

    try:
        imported = parse_import_payload(payload)
    except ImportPayloadError as e:
        logger.warning(f"Rejected import payload: {e}")
        raise

    result = record_service.import_records(get_db(), imported, payload_hash=get_payload_hash(raw))
    return jsonify(result.to_dict())
