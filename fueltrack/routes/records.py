"""
Record routes for FuelTrack.

Handles fuel record CRUD operations and the history listing.
"""

import logging
import math
import uuid

from flask import Blueprint, current_app, jsonify, request

from ..calculations.financial import calculate_fuel_cost
from ..database import get_db
from ..exceptions import RecordValidationError
from ..models import FuelRecord
from ..services import record_service
from ..utils.error_codes import ErrorCode, StructuredError
from ..utils.time_utils import parse_date

logger = logging.getLogger(__name__)

records_bp = Blueprint('records', __name__)

REQUIRED_POSITIVE_FIELDS = ('odometer', 'gallons', 'pricePerGallon')


def _as_number(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (ValueError, TypeError):
        return None
    # "nan" and "inf" parse as floats but are not usable amounts
    if not math.isfinite(number):
        return None
    return number


def validate_record_data(data):
    """
    Validate a new or edited fuel record.

    A record needs a date and positive odometer, gallons and price per
    gallon. totalCost is optional but must be a non-negative number if given.

    Returns (is_valid, errors) tuple.
    """
    errors = []

    if not data.get('date'):
        errors.append({'field': 'date', 'code': ErrorCode.E002_MISSING_REQUIRED_FIELD.value,
                       'message': 'date is required'})
    elif parse_date(data.get('date')) is None:
        errors.append({'field': 'date', 'code': ErrorCode.E003_INVALID_DATA_TYPE.value,
                       'message': 'date must be a valid calendar date (YYYY-MM-DD)'})

    for field in REQUIRED_POSITIVE_FIELDS:
        raw = data.get(field)
        if raw is None or raw == '':
            errors.append({'field': field, 'code': ErrorCode.E002_MISSING_REQUIRED_FIELD.value,
                           'message': f'{field} is required'})
            continue
        value = _as_number(raw)
        if value is None:
            errors.append({'field': field, 'code': ErrorCode.E003_INVALID_DATA_TYPE.value,
                           'message': f'{field} must be a valid number'})
        elif value <= 0:
            errors.append({'field': field, 'code': ErrorCode.E004_OUT_OF_RANGE.value,
                           'message': f'{field} must be greater than 0'})

    total_cost = data.get('totalCost')
    if total_cost is not None and total_cost != '':
        value = _as_number(total_cost)
        if value is None:
            errors.append({'field': 'totalCost', 'code': ErrorCode.E003_INVALID_DATA_TYPE.value,
                           'message': 'totalCost must be a valid number'})
        elif value < 0:
            errors.append({'field': 'totalCost', 'code': ErrorCode.E004_OUT_OF_RANGE.value,
                           'message': 'totalCost must not be negative'})

    return len(errors) == 0, errors


def record_from_payload(data, record_id):
    """Build a FuelRecord from a validated payload, filling in totalCost."""
    payload = dict(data)
    payload['id'] = record_id
    if payload.get('totalCost') in (None, ''):
        payload['totalCost'] = calculate_fuel_cost(
            float(payload['gallons']), float(payload['pricePerGallon'])
        )
    return FuelRecord.from_dict(payload)


def _no_data():
    error = StructuredError(ErrorCode.E303_JSON_DECODE_ERROR, 'No data provided')
    return jsonify({'error': error.message, 'code': error.code.value}), 400


@records_bp.route('/records', methods=['GET'])
def list_records():
    """
    History listing, newest first.

    Query params:
        q: Optional search term (date, notes or odometer)
    """
    db = get_db()
    records = record_service.search_records(record_service.load_records(db), request.args.get('q'))
    limit = current_app.config['API_MAX_HISTORY']
    return jsonify([r.to_dict() for r in records[:limit]])


@records_bp.route('/records/<record_id>', methods=['GET'])
def get_record(record_id):
    db = get_db()
    return jsonify(record_service.get_record(db, record_id).to_dict())


@records_bp.route('/records', methods=['POST'])
def create_record():
    """
    Log a refueling.

    Request body:
        date: YYYY-MM-DD
        odometer: Odometer reading
        gallons: Volume added
        pricePerGallon: Unit price
        totalCost: Optional, defaults to gallons * pricePerGallon
        notes: Optional notes
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return _no_data()

    is_valid, errors = validate_record_data(data)
    if not is_valid:
        raise RecordValidationError('Validation failed', errors=errors)

    record = record_from_payload(data, str(uuid.uuid4()))
    record_service.save_record(get_db(), record)
    return jsonify(record.to_dict()), 201


@records_bp.route('/records/<record_id>', methods=['PUT'])
def replace_record(record_id):
    """Replace a record as a whole; the id in the URL wins over the body."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return _no_data()

    is_valid, errors = validate_record_data(data)
    if not is_valid:
        raise RecordValidationError('Validation failed', errors=errors)

    record = record_service.update_record(get_db(), record_from_payload(data, record_id))
    return jsonify(record.to_dict())


@records_bp.route('/records/<record_id>', methods=['DELETE'])
def delete_record(record_id):
    record_service.delete_record(get_db(), record_id)
    return jsonify({'message': f'Fuel record {record_id} deleted successfully'})
