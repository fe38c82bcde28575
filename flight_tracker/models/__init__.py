"""
Data models for the flight tracker.

Plain dataclasses only; nothing here is persisted:
1. FlightRecord and its nested blocks, in the provider's record shape
2. LookupResult variants describing how a lookup resolved
"""

from flight_tracker.models.flight_record import (
    Aircraft,
    Airline,
    AirportTimes,
    FlightInfo,
    FlightRecord,
    LiveTelemetry,
)
from flight_tracker.models.lookup_result import (
    LookupResult,
    Pagination,
    Success,
    SyntheticFallback,
    UpstreamError,
)

__all__ = [
    'Aircraft',
    'Airline',
    'AirportTimes',
    'FlightInfo',
    'FlightRecord',
    'LiveTelemetry',
    'LookupResult',
    'Pagination',
    'Success',
    'SyntheticFallback',
    'UpstreamError',
]
