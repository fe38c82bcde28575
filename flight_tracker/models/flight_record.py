"""
Typed flight record returned by the lookup layer.

Mirrors the AviationStack `/flights` record shape field-for-field so the
serialized form is exactly what the frontend already renders. Parsing is
lenient: absent blocks become empty records rather than errors, since
repair of the fields that matter happens once, in the lookup service.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

# Status tags the frontend has a badge for; anything else renders as 'unknown'
KNOWN_STATUSES = frozenset({
    'active',
    'landed',
    'scheduled',
    'cancelled',
    'diverted',
    'delayed',
    'incident',
})


def _block(data: Any, key: str) -> Dict[str, Any]:
    """Return a nested dict block, or an empty dict if absent or malformed."""
    if not isinstance(data, dict):
        return {}
    value = data.get(key)
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class AirportTimes:
    """Departure or arrival side of a flight."""
    airport: Optional[str] = None
    timezone: Optional[str] = None
    iata: Optional[str] = None
    icao: Optional[str] = None
    terminal: Optional[str] = None
    gate: Optional[str] = None
    baggage: Optional[str] = None
    delay: Optional[int] = None  # minutes

    # ISO-8601 strings; None means the event has not happened yet
    scheduled: Optional[str] = None
    estimated: Optional[str] = None
    actual: Optional[str] = None
    estimated_runway: Optional[str] = None
    actual_runway: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AirportTimes':
        return cls(
            airport=data.get('airport'),
            timezone=data.get('timezone'),
            iata=data.get('iata'),
            icao=data.get('icao'),
            terminal=data.get('terminal'),
            gate=data.get('gate'),
            baggage=data.get('baggage'),
            delay=data.get('delay'),
            scheduled=data.get('scheduled'),
            estimated=data.get('estimated'),
            actual=data.get('actual'),
            estimated_runway=data.get('estimated_runway'),
            actual_runway=data.get('actual_runway'),
        )


@dataclass(frozen=True)
class Airline:
    name: Optional[str] = None
    iata: Optional[str] = None
    icao: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Airline':
        return cls(name=data.get('name'), iata=data.get('iata'), icao=data.get('icao'))


@dataclass(frozen=True)
class FlightInfo:
    number: Optional[str] = None
    iata: Optional[str] = None
    icao: Optional[str] = None
    codeshared: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FlightInfo':
        return cls(
            number=data.get('number'),
            iata=data.get('iata'),
            icao=data.get('icao'),
            codeshared=data.get('codeshared'),
        )


@dataclass(frozen=True)
class Aircraft:
    registration: Optional[str] = None
    iata: Optional[str] = None  # e.g., "A321"
    icao: Optional[str] = None  # e.g., "A321"
    icao24: Optional[str] = None  # 24-bit transponder address, hex

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Aircraft':
        return cls(
            registration=data.get('registration'),
            iata=data.get('iata'),
            icao=data.get('icao'),
            icao24=data.get('icao24'),
        )


@dataclass(frozen=True)
class LiveTelemetry:
    """
    In-flight position block.

    After repair, latitude/longitude/altitude/direction/speed_horizontal
    are always finite numbers.
    """
    updated: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    altitude: Optional[float] = None  # feet
    direction: Optional[float] = None  # degrees, 0=north
    speed_horizontal: Optional[float] = None
    speed_vertical: Optional[float] = None
    is_ground: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LiveTelemetry':
        return cls(
            updated=data.get('updated'),
            latitude=data.get('latitude'),
            longitude=data.get('longitude'),
            altitude=data.get('altitude'),
            direction=data.get('direction'),
            speed_horizontal=data.get('speed_horizontal'),
            speed_vertical=data.get('speed_vertical'),
            is_ground=bool(data.get('is_ground')),
        )


@dataclass(frozen=True)
class FlightRecord:
    """A single flight as returned to the rendering layer."""
    flight_date: Optional[str]
    flight_status: Optional[str]
    departure: AirportTimes
    arrival: AirportTimes
    airline: Airline
    flight: FlightInfo
    aircraft: Optional[Aircraft] = None
    live: Optional[LiveTelemetry] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FlightRecord':
        """Build a record from a provider-shaped dict."""
        if not isinstance(data, dict):
            data = {}
        aircraft = _block(data, 'aircraft')
        live = _block(data, 'live')
        return cls(
            flight_date=data.get('flight_date'),
            flight_status=data.get('flight_status'),
            departure=AirportTimes.from_dict(_block(data, 'departure')),
            arrival=AirportTimes.from_dict(_block(data, 'arrival')),
            airline=Airline.from_dict(_block(data, 'airline')),
            flight=FlightInfo.from_dict(_block(data, 'flight')),
            aircraft=Aircraft.from_dict(aircraft) if aircraft else None,
            live=LiveTelemetry.from_dict(live) if live else None,
        )

    @property
    def display_status(self) -> str:
        """Status tag for display; unrecognized values map to 'unknown'."""
        status = (self.flight_status or '').strip().lower()
        return status if status in KNOWN_STATUSES else 'unknown'

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict in the provider's shape."""
        return asdict(self)
