"""
External integration services.

Handles the AviationStack flight lookup and the synthetic data that
stands in for it when the provider is unavailable or unhelpful.
"""

from flight_tracker.services.synthetic_data import SyntheticDataGenerator
from flight_tracker.services.flight_lookup import (
    FlightLookupService,
    ValidationError,
    flight_lookup_service,
)

__all__ = [
    'FlightLookupService',
    'SyntheticDataGenerator',
    'ValidationError',
    'flight_lookup_service',
]
