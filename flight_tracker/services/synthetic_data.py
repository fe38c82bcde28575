"""
Synthetic flight data for demo mode and upstream fallback.

Produces a complete, provider-shaped record for any flight code without
touching the network. Structure is fixed per template; only the live
position jitters between calls to simulate movement.
"""

import copy
import logging
import random
import re
from datetime import datetime, timezone
from typing import Callable, List, Optional

from flight_tracker.models import FlightRecord, Pagination

logger = logging.getLogger(__name__)

# Demo code with its own hand-authored route
DEMO_FLIGHT_IATA = 'UA102'

# Width of the lat/lon jitter window, centred on the template position
JITTER_DEGREES = 0.1

# Airline IATA prefix -> (name, iata, icao)
AIRLINES = {
    'UA': ('United Airlines', 'UA', 'UAL'),
    'DL': ('Delta Air Lines', 'DL', 'DAL'),
    'LH': ('Lufthansa', 'LH', 'DLH'),
    'BA': ('British Airways', 'BA', 'BAW'),
}

GENERIC_TEMPLATE = {
    'flight_date': '2023-05-13',
    'flight_status': 'active',
    'departure': {
        'airport': 'San Francisco International',
        'timezone': 'America/Los_Angeles',
        'iata': 'SFO',
        'icao': 'KSFO',
        'terminal': '2',
        'gate': 'D11',
        'delay': 13,
        'scheduled': '2023-05-13T04:20:00+00:00',
        'estimated': '2023-05-13T04:20:00+00:00',
        'actual': '2023-05-13T04:20:13+00:00',
        'estimated_runway': '2023-05-13T04:20:13+00:00',
        'actual_runway': '2023-05-13T04:20:13+00:00',
    },
    'arrival': {
        'airport': 'Dallas/Fort Worth International',
        'timezone': 'America/Chicago',
        'iata': 'DFW',
        'icao': 'KDFW',
        'terminal': 'A',
        'gate': 'A22',
        'baggage': 'A17',
        'delay': 0,
        'scheduled': '2023-05-13T10:20:00+00:00',
        'estimated': '2023-05-13T10:20:00+00:00',
        'actual': None,
        'estimated_runway': None,
        'actual_runway': None,
    },
    'airline': {
        'name': 'American Airlines',
        'iata': 'AA',
        'icao': 'AAL',
    },
    'flight': {
        'number': '1004',
        'iata': 'AA1004',
        'icao': 'AAL1004',
        'codeshared': None,
    },
    'aircraft': {
        'registration': 'N160AN',
        'iata': 'A321',
        'icao': 'A321',
        'icao24': 'A0F1BB',
    },
    'live': {
        'updated': '2023-05-13T10:00:00+00:00',
        'latitude': 36.2856,
        'longitude': -106.807,
        'altitude': 8846.82,
        'direction': 114.34,
        'speed_horizontal': 894.348,
        'speed_vertical': 1.188,
        'is_ground': False,
    },
}

DEMO_TEMPLATE = {
    'flight_date': '2023-05-13',
    'flight_status': 'active',
    'departure': {
        'airport': 'Newark Liberty International',
        'timezone': 'America/New_York',
        'iata': 'EWR',
        'icao': 'KEWR',
        'terminal': 'C',
        'gate': 'C123',
        'delay': 0,
        'scheduled': '2023-05-13T08:30:00+00:00',
        'estimated': '2023-05-13T08:30:00+00:00',
        'actual': '2023-05-13T08:30:00+00:00',
        'estimated_runway': '2023-05-13T08:45:00+00:00',
        'actual_runway': '2023-05-13T08:45:00+00:00',
    },
    'arrival': {
        'airport': 'Los Angeles International',
        'timezone': 'America/Los_Angeles',
        'iata': 'LAX',
        'icao': 'KLAX',
        'terminal': '7',
        'gate': '73',
        'baggage': '7',
        'delay': 0,
        'scheduled': '2023-05-13T11:30:00+00:00',
        'estimated': '2023-05-13T11:30:00+00:00',
        'actual': None,
        'estimated_runway': None,
        'actual_runway': None,
    },
    'airline': {
        'name': 'United Airlines',
        'iata': 'UA',
        'icao': 'UAL',
    },
    'flight': {
        'number': '102',
        'iata': 'UA102',
        'icao': 'UAL102',
        'codeshared': None,
    },
    'aircraft': {
        'registration': 'N14001',
        'iata': 'B789',
        'icao': 'B789',
        'icao24': 'A1B2C3',
    },
    'live': {
        'updated': '2023-05-13T10:00:00+00:00',
        'latitude': 40.7128,
        'longitude': -74.006,
        'altitude': 35000,
        'direction': 270,
        'speed_horizontal': 550,
        'speed_vertical': 0,
        'is_ground': False,
    },
}

SYNTHETIC_PAGINATION = Pagination(limit=100, offset=0, count=1, total=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SyntheticDataGenerator:
    """
    Generate demo flight records.

    Args:
        rng: Random source with a `random()` method. Pin it in tests to
             get exact positions.
        clock: Returns the current aware datetime for `live.updated`.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.rng = rng or random.Random()
        self.clock = clock

    def generate(self, flight_iata: str) -> dict:
        """Return a provider-shaped body: pagination plus one record."""
        return {
            'pagination': SYNTHETIC_PAGINATION.to_dict(),
            'data': [self._build_record(flight_iata)],
        }

    def records(self, flight_iata: str) -> List[FlightRecord]:
        """Return the synthetic record set as typed records."""
        return [FlightRecord.from_dict(r) for r in self.generate(flight_iata)['data']]

    def _build_record(self, flight_iata: str) -> dict:
        if flight_iata == DEMO_FLIGHT_IATA:
            logger.debug(f'Using demo template for {flight_iata}')
            record = copy.deepcopy(DEMO_TEMPLATE)
        else:
            record = copy.deepcopy(GENERIC_TEMPLATE)
            record['flight']['iata'] = flight_iata
            record['flight']['icao'] = flight_iata
            record['flight']['number'] = re.sub(r'[A-Za-z]+', '', flight_iata)

            airline = AIRLINES.get(re.sub(r'[0-9]+', '', flight_iata))
            if airline:
                name, iata, icao = airline
                record['airline'] = {'name': name, 'iata': iata, 'icao': icao}

        # Nudge the position so repeated lookups look like movement
        live = record['live']
        live['latitude'] += (self.rng.random() - 0.5) * JITTER_DEGREES
        live['longitude'] += (self.rng.random() - 0.5) * JITTER_DEGREES
        live['updated'] = self.clock().isoformat()

        return record
