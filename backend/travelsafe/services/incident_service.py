# backend/travelsafe/services/incident_service.py
"""
Incident data access.

Reads try the incidents table first and fall back to synthetic data
(generator + advisory refresh) when the table errors or has nothing,
so callers always get something to render. Writes hand back a
WriteResult instead of raising.
"""
from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from botocore.exceptions import ClientError
from pydantic import ValidationError

from travelsafe.db.dynamo import IncidentStore
from travelsafe.models.common import WriteResult, format_timestamp, parse_timestamp
from travelsafe.models.incident import (
    IncidentFilter,
    IncidentIn,
    IncidentRecord,
    IncidentUpdate,
)
from travelsafe.services.advisory import AdvisoryRefresher
from travelsafe.services.generator import IncidentGenerator

log = logging.getLogger(__name__)

FALLBACK_COUNT = int(os.getenv("FALLBACK_INCIDENT_COUNT", "200"))
FILTERED_FALLBACK_COUNT = int(os.getenv("FILTERED_FALLBACK_INCIDENT_COUNT", "300"))
TRIP_FALLBACK_COUNT = int(os.getenv("TRIP_FALLBACK_INCIDENT_COUNT", "300"))
# below this many stored rows a trip briefing is topped up with synthetic data
MIN_TRIP_ROWS = 5
REFRESH_INTERVAL = timedelta(hours=24)

TripBound = Union[date, datetime, str]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class QueryOutcome:
    """Result of one store read: ok (rows), empty, or error."""

    rows: List[IncidentRecord] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def status(self) -> str:
        if self.error is not None:
            return "error"
        return "ok" if self.rows else "empty"

    @classmethod
    def run(cls, query: Callable[[], Iterable[Dict[str, Any]]]) -> "QueryOutcome":
        try:
            raw = list(query() or [])
        except Exception as e:
            return cls(error=e)
        return cls(rows=_parse_rows(raw))


def _parse_rows(raw: Iterable[Dict[str, Any]]) -> List[IncidentRecord]:
    rows: List[IncidentRecord] = []
    for item in raw:
        try:
            rows.append(IncidentRecord.model_validate(item))
        except (ValidationError, ValueError, TypeError) as e:
            log.warning("Skipping malformed incident row %s: %s", item.get("id"), e)
    return rows


def _bound(value: TripBound, *, end_of_day: bool) -> datetime:
    """Trip dates given as plain dates (or "YYYY-MM-DD") cover the whole day."""
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            value = date.fromisoformat(value.strip())
        except ValueError:
            pass
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.max if end_of_day else time.min, tzinfo=timezone.utc)
    parsed = parse_timestamp(value)
    if parsed is None:
        raise ValueError(f"Invalid trip date: {value!r}")
    return parsed


def is_relevant_for_trip(record: IncidentRecord, arrival: TripBound, departure: TripBound) -> bool:
    """
    Undated incidents always apply. Open-ended ones apply if they started by
    departure. Bounded ones apply if the windows overlap (inclusive).
    """
    if record.start_date is None:
        return True
    departure_at = _bound(departure, end_of_day=True)
    if record.start_date > departure_at:
        return False
    if record.end_date is None:
        return True
    return record.end_date >= _bound(arrival, end_of_day=False)


def _is_missing(error: Exception) -> bool:
    """Store signals for "no such row" (conditional update on a missing key)."""
    if isinstance(error, KeyError):
        return True
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"
    return False


def _to_item(record: IncidentRecord) -> Dict[str, Any]:
    return record.model_dump(mode="json", exclude_none=True)


class IncidentService:
    def __init__(
        self,
        store=None,
        generator: Optional[IncidentGenerator] = None,
        refresher: Optional[AdvisoryRefresher] = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
        refresh_interval: timedelta = REFRESH_INTERVAL,
    ) -> None:
        self.store = store if store is not None else IncidentStore()
        self.generator = generator or IncidentGenerator(clock=clock)
        self.refresher = refresher or AdvisoryRefresher(clock=clock)
        self.clock = clock
        self.refresh_interval = refresh_interval
        # advisory only; the refresh itself runs on every synthesize()
        self.last_refresh_at: Optional[datetime] = None

    # ---------- synthetic data ----------
    def synthesize(self, count: int) -> List[IncidentRecord]:
        now = self.clock()
        if self.last_refresh_at is None or now - self.last_refresh_at > self.refresh_interval:
            log.info("Simulating advisory refresh of synthetic incident data")
            self.last_refresh_at = now
        return self.refresher.refresh(self.generator.generate(count))

    def sample_incidents(self, count: int = 10) -> List[IncidentRecord]:
        return self.generator.generate(count)

    def with_fallback(
        self,
        query: Callable[[], Iterable[Dict[str, Any]]],
        predicate: Callable[[IncidentRecord], bool],
        fallback_count: int,
        *,
        label: str,
        min_rows: int = 1,
    ) -> List[IncidentRecord]:
        """
        Run `query` against the store. With at least `min_rows` rows, return
        them (filtered by `predicate`). Otherwise top up with synthesized
        records and apply the same predicate to the combined list.
        """
        outcome = QueryOutcome.run(query)
        if outcome.status == "ok" and len(outcome.rows) >= min_rows:
            return [r for r in outcome.rows if predicate(r)]

        if outcome.status == "error":
            log.warning("Error fetching %s from store: %s; using synthetic data", label, outcome.error)
        elif outcome.status == "empty":
            log.info("No %s found in store, using synthetic data", label)
        else:
            log.info("Insufficient %s in store (%d), supplementing with synthetic data",
                     label, len(outcome.rows))

        combined = outcome.rows + self.synthesize(fallback_count)
        return [r for r in combined if predicate(r)]

    # ---------- reads (never raise) ----------
    def get_incidents(self, filters: Optional[IncidentFilter] = None) -> List[IncidentRecord]:
        flt = filters or IncidentFilter()
        return self.with_fallback(
            lambda: self.store.query(
                location=flt.location,
                categories=flt.categories,
                verified=True if flt.verified_only else None,
            ),
            flt.matches,
            FALLBACK_COUNT if flt.is_empty() else FILTERED_FALLBACK_COUNT,
            label="scam events",
        )

    def get_all(self) -> List[IncidentRecord]:
        return self.get_incidents()

    def get_by_location(self, location: str) -> List[IncidentRecord]:
        return self.get_incidents(IncidentFilter(location=location))

    def get_by_category(self, category: str) -> List[IncidentRecord]:
        return self.get_incidents(IncidentFilter(categories=[category]))

    def get_verified(self) -> List[IncidentRecord]:
        return self.get_incidents(IncidentFilter(verified_only=True))

    def get_for_trip(
        self, destination: str, arrival: TripBound, departure: TripBound
    ) -> List[IncidentRecord]:
        # fail fast on bad dates rather than inside the predicate
        _bound(arrival, end_of_day=False)
        _bound(departure, end_of_day=True)
        flt = IncidentFilter(location=destination)
        return self.with_fallback(
            lambda: self.store.query(location=destination),
            lambda r: flt.matches(r) and is_relevant_for_trip(r, arrival, departure),
            TRIP_FALLBACK_COUNT,
            label=f'scam events for trip to "{destination}"',
            min_rows=MIN_TRIP_ROWS,
        )

    def get_user_incidents(self, user_id: str) -> List[IncidentRecord]:
        """A user's own reports; store only, no synthetic fallback."""
        outcome = QueryOutcome.run(lambda: self.store.query(user_id=user_id))
        if outcome.error is not None:
            log.warning("Error fetching user scam events: %s", outcome.error)
        return outcome.rows

    def get_incident(self, incident_id: str) -> Optional[IncidentRecord]:
        """One stored row, or None when it is missing, unreadable or malformed."""
        try:
            item = self.store.get(incident_id)
        except Exception as e:
            log.warning("Error fetching scam event %s: %s", incident_id, e)
            return None
        if not item:
            return None
        try:
            return IncidentRecord.model_validate(item)
        except (ValidationError, ValueError, TypeError) as e:
            log.warning("Skipping malformed incident row %s: %s", incident_id, e)
            return None

    # ---------- writes ----------
    def create_incident(self, payload: IncidentIn, user_id: Optional[str] = None) -> WriteResult:
        now = self.clock().replace(microsecond=0)
        record = IncidentRecord(
            id=str(uuid.uuid4()),
            **payload.model_dump(),
            is_scam_related=True,
            verified=False,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        try:
            saved = self.store.put(_to_item(record))
        except Exception as e:
            log.exception("Error adding scam event")
            return WriteResult.failure(e)
        return WriteResult.success(IncidentRecord.model_validate(saved))

    def update_incident(self, incident_id: str, updates: IncidentUpdate) -> WriteResult:
        changes = updates.model_dump(mode="json", exclude_unset=True)
        changes["updated_at"] = format_timestamp(self.clock())
        try:
            saved = self.store.update(incident_id, changes)
        except Exception as e:
            if _is_missing(e):
                log.info("Scam event %s not found for update", incident_id)
                return WriteResult.missing(f"Incident {incident_id} not found")
            log.exception("Error updating scam event %s", incident_id)
            return WriteResult.failure(e)
        return WriteResult.success(IncidentRecord.model_validate(saved))

    def delete_incident(self, incident_id: str) -> WriteResult:
        try:
            self.store.delete(incident_id)
        except Exception as e:
            log.exception("Error deleting scam event %s", incident_id)
            return WriteResult.failure(e)
        return WriteResult.success(None)


@lru_cache(maxsize=1)
def get_incident_service() -> IncidentService:
    """Process-wide instance used by the routers (overridable in tests)."""
    return IncidentService()
