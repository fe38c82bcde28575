"""
API module for the flight tracker.

Provides REST endpoints for:
- Flight lookup by IATA code (live or synthetic)
"""

from flight_tracker.api.flights import flights_bp

__all__ = ['flights_bp']
