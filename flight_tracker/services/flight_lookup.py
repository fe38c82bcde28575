"""
Flight lookup service - live AviationStack data with synthetic fallback.

Performs a single `/flights` request per lookup and resolves every
outcome into one of three results:

- Success: live data, with a malformed `flight_date` or `live` block
  repaired in place
- UpstreamError: a real provider error worth showing to the user
- SyntheticFallback: generated data, used for demo mode and for known
  provider quirks (free-tier HTTPS restriction, flight_date validation
  bug, HTML served with a 200, transport failures)

Only input validation and classified upstream errors ever reach the
caller as errors. No retries: the failure classes handled here are not
transient.
"""

import json
import logging
import math
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Optional
from urllib.parse import quote_plus

import requests

from flight_tracker.config import AviationStackConfig, ConfigurationError, config
from flight_tracker.models import (
    FlightRecord,
    LookupResult,
    Pagination,
    Success,
    SyntheticFallback,
    UpstreamError,
)
from flight_tracker.services.synthetic_data import SYNTHETIC_PAGINATION, SyntheticDataGenerator, utc_now

DATE_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')

# Free-tier plans reject HTTPS with one of these in the body
TIER_RESTRICTION_MARKERS = ('only https is supported', 'Invalid request')

# Embedded error code for "HTTPS requires a paid subscription"
SUBSCRIPTION_ERROR_CODE = 104

# Fallback formats for flight dates that aren't ISO-8601
DATE_FORMATS = (
    '%Y/%m/%d',
    '%m/%d/%Y',
    '%d.%m.%Y',
    '%d %b %Y',
    '%d %B %Y',
    '%b %d, %Y',
    '%B %d, %Y',
    '%Y%m%d',
)

# Replacement values for invalid fields in a live block
LIVE_DEFAULTS = {
    'latitude': 0,
    'longitude': 0,
    'altitude': 10000,
    'direction': 0,
    'speed_horizontal': 800,
    'speed_vertical': 0,
}
REQUIRED_LIVE_FIELDS = ('latitude', 'longitude', 'altitude', 'direction', 'speed_horizontal')

GENERIC_ERROR_MESSAGE = 'Failed to fetch flight data'

# Stands in for the access key in anything logged
API_KEY_PLACEHOLDER = 'API_KEY_HIDDEN'


class ValidationError(ValueError):
    """Caller supplied an unusable flight code."""
    status_code = 400


def _redact(text: str, api_key: str) -> str:
    """Mask the access key, raw or URL-encoded, in text bound for the logs."""
    if not api_key:
        return text
    for secret in (api_key, quote_plus(api_key)):
        text = text.replace(secret, API_KEY_PLACEHOLDER)
    return text


def _is_number(value: Any) -> bool:
    """True for finite ints/floats; bools don't count."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def parse_loose_date(value: str) -> Optional[datetime]:
    """
    Parse a date/time string in any of the shapes the provider has been
    seen to return. Returns None if nothing matches.
    """
    value = value.strip()
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def _is_subscription_error(error: Any) -> bool:
    if not isinstance(error, dict):
        return False
    if error.get('code') == SUBSCRIPTION_ERROR_CODE:
        return True
    text = f"{error.get('info') or ''} {error.get('message') or ''}".lower()
    return 'https' in text or 'subscription' in text


class FlightLookupService:
    """
    Look up a flight by IATA code.

    All collaborators are injectable so tests can run without network
    access or wall-clock dependence:

    Args:
        settings: AviationStack settings (API key, base URL, timeout).
                  Defaults to the application config.
        session: Object with a requests-compatible `get()`.
        generator: Source of synthetic data for fallbacks.
        logger: Where classification decisions are logged.
        clock: Returns the current aware datetime, used for repairs.
    """

    def __init__(
        self,
        settings: Optional[AviationStackConfig] = None,
        session: Optional[requests.Session] = None,
        generator: Optional[SyntheticDataGenerator] = None,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.settings = settings or config.aviationstack
        self.session = session or requests.Session()
        self.generator = generator or SyntheticDataGenerator(clock=clock)
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock

        if not self.settings.is_configured:
            self.logger.warning('AviationStack API key not configured - lookups will use synthetic data')

    def lookup(self, flight_iata: str, force_synthetic: bool = False) -> LookupResult:
        """
        Resolve a flight code to a LookupResult.

        Raises:
            ValidationError: if the code is empty or whitespace. No
                request is made in that case.
        """
        flight_iata = (flight_iata or '').strip()
        if not flight_iata:
            raise ValidationError('Flight IATA code is required')

        self.logger.info(f'Flight search request for: {flight_iata}, force_synthetic: {force_synthetic}')

        if force_synthetic:
            return self._fallback(flight_iata, 'forced')

        try:
            api_key = self.settings.require_api_key()
        except ConfigurationError as e:
            self.logger.error(f'Configuration error: {e}')
            return self._fallback(flight_iata, 'not_configured')

        try:
            return self._fetch(flight_iata, api_key)
        except requests.RequestException as e:
            # requests puts the full URL, access_key included, in its messages
            self.logger.error(
                f'Failed to fetch flight data for {flight_iata}: '
                f'{type(e).__name__}: {_redact(str(e), api_key)}'
            )
            return self._fallback(flight_iata, 'transport_error')
        except Exception as e:
            self.logger.error(
                f'Error processing flight data for {flight_iata}: '
                f'{type(e).__name__}: {_redact(str(e), api_key)}'
            )
            return self._fallback(flight_iata, 'transport_error')

    def _fallback(self, flight_iata: str, reason: str) -> SyntheticFallback:
        if reason == 'forced':
            self.logger.info(f'Returning synthetic data for flight: {flight_iata}')
        else:
            self.logger.warning(f'Falling back to synthetic data for {flight_iata} ({reason})')
        return SyntheticFallback(
            records=self.generator.records(flight_iata),
            pagination=SYNTHETIC_PAGINATION,
            reason=reason,
        )

    def _fetch(self, flight_iata: str, api_key: str) -> LookupResult:
        url = f'{self.settings.base_url.rstrip("/")}/flights'
        self.logger.debug(f'Fetching {url} for flight_iata={flight_iata}')

        response = self.session.get(
            url,
            params={'access_key': api_key, 'flight_iata': flight_iata},
            headers={'Accept': 'application/json'},
            timeout=self.settings.timeout_seconds,
        )

        if not 200 <= response.status_code < 300:
            return self._classify_error_response(flight_iata, response)

        content_type = response.headers.get('Content-Type') or ''
        if 'application/json' not in content_type:
            self.logger.error(f'Unexpected content type {content_type!r} for {flight_iata}: {response.text[:200]}')
            return self._fallback(flight_iata, 'non_json')

        payload = response.json()
        error = payload.get('error') if isinstance(payload, dict) else None

        if error:
            self.logger.error(f'AviationStack API error for {flight_iata}: {error}')
            if _is_subscription_error(error):
                return self._fallback(flight_iata, 'subscription')
            message = error.get('info') if isinstance(error, dict) else None
            return UpstreamError(
                message=message or 'API returned an error',
                status_code=500,
                details=error,
            )

        data = payload.get('data') if isinstance(payload, dict) else None
        if not isinstance(data, list):
            self.logger.error(f'Unexpected API response structure for {flight_iata}: {payload!r:.200}')
            return UpstreamError(
                message='API returned an unexpected response structure',
                status_code=500,
                details='Missing data array in response',
            )

        if data:
            data = [self._repair_record(flight_iata, data[0])] + data[1:]
        else:
            self.logger.info(f'No flight data found for {flight_iata}')

        records = [FlightRecord.from_dict(r) for r in data]
        return Success(
            records=records,
            pagination=Pagination.from_dict(payload.get('pagination'), len(records)),
        )

    def _classify_error_response(self, flight_iata: str, response: requests.Response) -> LookupResult:
        """Map a non-2xx response to a fallback or a surfaced error."""
        status = response.status_code
        text = response.text or ''
        self.logger.error(f'AviationStack returned HTTP {status} for {flight_iata}: {text[:200]}')

        if any(marker in text for marker in TIER_RESTRICTION_MARKERS):
            return self._fallback(flight_iata, 'tier_restricted')

        try:
            payload = json.loads(text)
        except ValueError:
            return UpstreamError(message=GENERIC_ERROR_MESSAGE, status_code=status, details=text)

        error = payload.get('error') if isinstance(payload, dict) else None
        if not isinstance(error, dict):
            return UpstreamError(message=GENERIC_ERROR_MESSAGE, status_code=status, details=payload)

        if error.get('code') == 'validation_error':
            context = error.get('context')
            if isinstance(context, dict) and context.get('flight_date'):
                return self._fallback(flight_iata, 'date_validation')

        return UpstreamError(
            message=error.get('info') or error.get('message') or GENERIC_ERROR_MESSAGE,
            status_code=status,
            details=payload,
        )

    def _repair_record(self, flight_iata: str, record: Any) -> Any:
        if not isinstance(record, dict):
            return record
        record = dict(record)
        record['flight_date'] = self._repair_flight_date(flight_iata, record.get('flight_date'))
        if record.get('live') is not None:
            record['live'] = self._repair_live(flight_iata, record['live'])
        return record

    def _repair_flight_date(self, flight_iata: str, value: Any) -> str:
        if isinstance(value, str) and DATE_PATTERN.fullmatch(value):
            return value

        self.logger.error(f'Invalid flight_date format for {flight_iata}: {value!r}')
        parsed = parse_loose_date(value) if isinstance(value, str) else None
        if parsed is not None and parsed.tzinfo is not None:
            # Offset-bearing timestamps are reported by their UTC calendar date
            try:
                parsed = parsed.astimezone(timezone.utc)
            except OverflowError:
                parsed = None
        if parsed is not None:
            fixed = parsed.date().isoformat()
            self.logger.info(f'Fixed flight_date to: {fixed}')
        else:
            fixed = self.clock().date().isoformat()
            self.logger.warning(f"Could not fix flight_date, using today's date: {fixed}")
        return fixed

    def _repair_live(self, flight_iata: str, live: Any) -> dict:
        """
        Rebuild the whole live block if any required field is unusable.

        A valid block is returned as-is. Otherwise each valid numeric
        field is kept and everything else takes its default.
        """
        if not isinstance(live, dict):
            live = {}

        invalid = [f for f in REQUIRED_LIVE_FIELDS if not _is_number(live.get(f))]
        if not invalid:
            return live

        self.logger.error(f'Invalid live fields for {flight_iata}: {", ".join(invalid)}')
        repaired = {'updated': live.get('updated') or self.clock().isoformat()}
        for name, default in LIVE_DEFAULTS.items():
            value = live.get(name)
            repaired[name] = value if _is_number(value) else default
        repaired['is_ground'] = bool(live.get('is_ground'))
        return repaired


# Singleton instance
flight_lookup_service = FlightLookupService()
