"""
Dashboard routes for FuelTrack.

Serves the range statistics, chart series and the derived sequence. Every
request reloads the record set and recomputes from scratch.
"""

import logging

from flask import Blueprint, Response, current_app, jsonify, request

from ..database import get_db
from ..services import record_service
from ..services.aggregation_service import (
    WindowKind,
    WindowSpec,
    aggregate,
    parse_bar_metric,
    parse_trend_metric,
)
from ..services.timeseries_service import derive_points
from ..utils.formatting import format_currency, normalize_language
from ..utils.time_utils import local_today
from ..utils.wide_events import track_operation

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint('dashboard', __name__)


def _request_language():
    default = current_app.config['DEFAULT_LANGUAGE']
    return normalize_language(request.args.get('lang', default), default)


@dashboard_bp.route('/status', methods=['GET'])
def get_status() -> Response:
    """Get service status and record count."""
    db = get_db()
    return jsonify({
        'status': 'online',
        'record_count': record_service.count_records(db),
        'database': 'connected',
    })


@dashboard_bp.route('/dashboard', methods=['GET'])
def get_dashboard() -> Response:
    """
    Statistics and chart series for one reporting window.

    Query params:
        range: last7days, last30days, last6months, currentCalendarYear,
               allTime or explicitRange (UI aliases week/30d/6m/year/all/custom)
        start, end: Bounds for explicitRange (YYYY-MM-DD)
        chart: cost (default) or volume
        trend: price (default) or efficiency
        lang: es or en (labels and display strings)
    """
    today = local_today()
    language = _request_language()
    window = WindowSpec.parse(
        request.args.get('range'),
        request.args.get('start'),
        request.args.get('end'),
        today=today,
        default=WindowKind(current_app.config['DEFAULT_WINDOW']),
    )
    bar_metric = parse_bar_metric(request.args.get('chart'))
    trend_metric = parse_trend_metric(request.args.get('trend'))

    with track_operation("dashboard_aggregate", window=window.kind.value, language=language) as event:
        with event.timer("load"):
            records = record_service.load_records(get_db())
        with event.timer("aggregate"):
            result = aggregate(derive_points(records), window, bar_metric, trend_metric, today, language)
        event.add_business_metric("records_total", len(records))
        event.add_business_metric("records_in_window", result.summary.record_count)

    payload = result.to_dict()
    symbol = current_app.config['CURRENCY_SYMBOL']
    payload['display'] = {
        'totalCost': format_currency(result.summary.total_cost, language, symbol),
        'avgCostPerUnit': format_currency(result.summary.avg_cost_per_unit, language, symbol),
    }
    return jsonify(payload)


@dashboard_bp.route('/derived', methods=['GET'])
def get_derived() -> Response:
    """The full chronological sequence with distance and efficiency per record."""
    points = derive_points(record_service.load_records(get_db()))
    return jsonify([p.to_dict() for p in points])
