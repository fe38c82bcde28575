"""
Flight data API endpoints.

Provides endpoints for:
- GET /api/flights?flight_iata=<code> - Look up a flight
- GET /api/flights?flight_iata=<code>&mock=true - Force synthetic data
"""

import logging
import time

from flask import Blueprint, current_app, jsonify, request

from flight_tracker.services.flight_lookup import ValidationError

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')


@flights_bp.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError):
    return jsonify({'error': {'message': str(e)}}), e.status_code


@flights_bp.route('', methods=['GET'])
def search_flight():
    """
    Look up a flight by IATA code.

    Query parameters:
    - flight_iata: string, required (e.g. UA102)
    - mock: boolean, skip the provider and return synthetic data (default false)

    Synthetic fallbacks are returned with the same body shape and status
    as live data; only input and provider errors produce error bodies.
    """
    start_time = time.perf_counter()

    flight_iata = request.args.get('flight_iata', '')
    use_mock = request.args.get('mock', 'false').lower() == 'true'

    service = current_app.config['FLIGHT_LOOKUP_SERVICE']
    result = service.lookup(flight_iata, force_synthetic=use_mock)
    body, status = result.to_response()

    query_time_ms = (time.perf_counter() - start_time) * 1000
    logger.debug(f'Lookup for {flight_iata.strip()} resolved as {result.kind} in {query_time_ms:.1f}ms')

    return jsonify(body), status
