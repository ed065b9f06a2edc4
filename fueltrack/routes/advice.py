"""
Advice routes for FuelTrack.

Exposes the numeric summary handed to the generative-text service.
"""

from flask import Blueprint, current_app, jsonify, request

from ..database import get_db
from ..services import record_service
from ..services.advice_service import INSUFFICIENT_DATA_MESSAGES, build_advice_summary
from ..utils.formatting import normalize_language

advice_bp = Blueprint('advice', __name__)


@advice_bp.route('/advice/summary', methods=['GET'])
def get_advice_summary():
    """Pre-computed efficiency and price figures, or a message when data is insufficient."""
    default = current_app.config['DEFAULT_LANGUAGE']
    language = normalize_language(request.args.get('lang', default), default)

    summary = build_advice_summary(record_service.load_records(get_db()))
    if summary is None:
        return jsonify({'summary': None, 'message': INSUFFICIENT_DATA_MESSAGES[language]})

    return jsonify({'summary': summary.to_dict()})
