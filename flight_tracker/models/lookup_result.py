"""
Outcome types for a flight lookup.

A lookup resolves to exactly one of Success, UpstreamError or
SyntheticFallback. Callers branch on `kind` (or `is_error`) before
touching records; only Success and SyntheticFallback carry any.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from flight_tracker.models.flight_record import FlightRecord


@dataclass(frozen=True)
class Pagination:
    limit: int = 100
    offset: int = 0
    count: int = 0
    total: int = 0

    @classmethod
    def from_dict(cls, data: Any, record_count: int) -> 'Pagination':
        """Parse provider pagination, defaulting counts to the records seen."""
        if not isinstance(data, dict):
            data = {}
        return cls(
            limit=data.get('limit', 100),
            offset=data.get('offset', 0),
            count=data.get('count', record_count),
            total=data.get('total', record_count),
        )

    def to_dict(self) -> dict:
        return {
            'limit': self.limit,
            'offset': self.offset,
            'count': self.count,
            'total': self.total,
        }


def _records_body(records: List[FlightRecord], pagination: Pagination) -> dict:
    return {
        'pagination': pagination.to_dict(),
        'data': [r.to_dict() for r in records],
    }


@dataclass(frozen=True)
class Success:
    """Live provider data, possibly repaired."""
    records: List[FlightRecord]
    pagination: Pagination

    kind = 'success'
    is_error = False

    def to_response(self) -> Tuple[dict, int]:
        return _records_body(self.records, self.pagination), 200


@dataclass(frozen=True)
class SyntheticFallback:
    """
    Generated data served in place of live data.

    `reason` is for logs and tests only; the response body is
    indistinguishable in shape from a Success.
    """
    records: List[FlightRecord]
    pagination: Pagination
    reason: str

    kind = 'synthetic'
    is_error = False

    def to_response(self) -> Tuple[dict, int]:
        return _records_body(self.records, self.pagination), 200


@dataclass(frozen=True)
class UpstreamError:
    """An actionable provider error surfaced to the caller."""
    message: str
    status_code: int = 500
    details: Optional[Any] = field(default=None)

    kind = 'upstream_error'
    is_error = True

    def to_response(self) -> Tuple[dict, int]:
        error: Dict[str, Any] = {'message': self.message}
        if self.details is not None:
            error['details'] = self.details
        return {'error': error}, self.status_code


LookupResult = Union[Success, UpstreamError, SyntheticFallback]
