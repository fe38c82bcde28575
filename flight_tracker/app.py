"""
Flight tracker Flask application.

Main entry point for the web backend. Initializes:
- Logging
- The flight lookup service
- API routes

Usage:
    python -m flight_tracker.app

Or with gunicorn:
    gunicorn 'flight_tracker.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from flight_tracker.config import config
from flight_tracker.api import flights_bp
from flight_tracker.services import FlightLookupService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(lookup_service: Optional[FlightLookupService] = None) -> Flask:
    """
    Application factory for Flask.

    Args:
        lookup_service: Service used by the flights endpoint. Defaults to
                        the shared instance built from configuration;
                        pass a fake for testing.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key

    if lookup_service is None:
        from flight_tracker.services import flight_lookup_service
        lookup_service = flight_lookup_service
    app.config['FLIGHT_LOOKUP_SERVICE'] = lookup_service

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    # Register API blueprints
    app.register_blueprint(flights_bp)

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {
            'status': 'ok',
            'provider_configured': lookup_service.settings.is_configured,
        }

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': {'message': 'Not found'}}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': {'message': 'Internal server error'}}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    logger.info(f'Starting flight tracker API on http://localhost:{config.port}')
    if not config.aviationstack.is_configured:
        logger.warning('AVIATIONSTACK_API_KEY not set - all lookups will return synthetic data')

    app.run(
        host='0.0.0.0',
        port=config.port,
        debug=config.debug,
    )


if __name__ == '__main__':
    run_development_server()
