"""Shared fixtures for the flight tracker tests."""

import json
import logging
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from flight_tracker.config import AviationStackConfig
from flight_tracker.services import FlightLookupService, SyntheticDataGenerator

API_KEY = 'test-access-key-123'
NOW = datetime(2026, 10, 18, 12, 30, tzinfo=timezone.utc)


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value


def fixed_clock() -> datetime:
    return NOW


def make_response(status_code=200, payload=None, text=None, content_type='application/json'):
    """Build a fake requests.Response."""
    if text is None:
        text = json.dumps(payload) if payload is not None else ''
    resp = Mock(status_code=status_code, text=text)
    resp.headers = {'Content-Type': content_type} if content_type else {}
    if payload is not None:
        resp.json.return_value = payload
    else:
        resp.json.side_effect = ValueError('No JSON object could be decoded')
    return resp


def make_flight(**overrides):
    """A well-formed provider record."""
    record = {
        'flight_date': '2024-03-02',
        'flight_status': 'active',
        'departure': {
            'airport': 'Frankfurt International Airport',
            'timezone': 'Europe/Berlin',
            'iata': 'FRA',
            'icao': 'EDDF',
            'terminal': '1',
            'gate': 'Z25',
            'baggage': None,
            'delay': 20,
            'scheduled': '2024-03-02T10:05:00+00:00',
            'estimated': '2024-03-02T10:05:00+00:00',
            'actual': '2024-03-02T10:24:00+00:00',
            'estimated_runway': '2024-03-02T10:24:00+00:00',
            'actual_runway': '2024-03-02T10:24:00+00:00',
        },
        'arrival': {
            'airport': 'Chicago O\'hare International',
            'timezone': 'America/Chicago',
            'iata': 'ORD',
            'icao': 'KORD',
            'terminal': '5',
            'gate': 'M12',
            'baggage': '6',
            'delay': None,
            'scheduled': '2024-03-02T12:55:00+00:00',
            'estimated': '2024-03-02T12:55:00+00:00',
            'actual': None,
            'estimated_runway': None,
            'actual_runway': None,
        },
        'airline': {'name': 'Lufthansa', 'iata': 'LH', 'icao': 'DLH'},
        'flight': {'number': '430', 'iata': 'LH430', 'icao': 'DLH430', 'codeshared': None},
        'aircraft': {'registration': 'D-AIXP', 'iata': 'A359', 'icao': 'A359', 'icao24': '3C4B30'},
        'live': {
            'updated': '2024-03-02T13:10:00+00:00',
            'latitude': 58.21,
            'longitude': -30.44,
            'altitude': 11582.4,
            'direction': 282.0,
            'speed_horizontal': 905.2,
            'speed_vertical': 0.0,
            'is_ground': False,
        },
    }
    record.update(overrides)
    return record


def make_payload(*records, pagination=None):
    records = records or (make_flight(),)
    return {
        'pagination': pagination or {'limit': 100, 'offset': 0, 'count': len(records), 'total': len(records)},
        'data': list(records),
    }


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def generator():
    return SyntheticDataGenerator(rng=FixedRandom(0.75), clock=fixed_clock)


@pytest.fixture
def service(session, generator):
    return FlightLookupService(
        settings=AviationStackConfig(api_key=API_KEY, base_url='https://api.example.test/v1', timeout_seconds=5),
        session=session,
        generator=generator,
        logger=logging.getLogger('tests.flight_lookup'),
        clock=fixed_clock,
    )
