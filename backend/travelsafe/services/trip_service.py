# backend/travelsafe/services/trip_service.py
from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from travelsafe.db.dynamo import TripStore
from travelsafe.models.common import WriteResult
from travelsafe.models.trip import NotificationPreferences, Trip, TripIn, TripUpdate

log = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(timezone.utc).date()


class TripService:
    """
    A traveller's trips. Reads degrade to []/None on store errors,
    writes return a WriteResult.
    """

    def __init__(self, store=None, *, today: Callable[[], date] = _today) -> None:
        self.store = store if store is not None else TripStore()
        self.today = today

    def _load(self, user_id: str) -> List[Trip]:
        trips: List[Trip] = []
        for item in self.store.query_by_user(user_id):
            try:
                trips.append(Trip.model_validate(item))
            except ValidationError as e:
                log.warning("Skipping malformed trip row %s: %s", item.get("id"), e)
        return trips

    def _safe_load(self, user_id: str, what: str) -> List[Trip]:
        try:
            return self._load(user_id)
        except Exception as e:
            log.warning("Error fetching %s for user %s: %s", what, user_id, e)
            return []

    # ---------- reads ----------
    def get_user_trips(self, user_id: str) -> List[Trip]:
        return sorted(self._safe_load(user_id, "trips"), key=lambda t: t.arrival_date)

    def get_trip(self, trip_id: str) -> Optional[Trip]:
        try:
            item = self.store.get(trip_id)
        except Exception as e:
            log.warning("Error fetching trip %s: %s", trip_id, e)
            return None
        if not item:
            return None
        try:
            return Trip.model_validate(item)
        except ValidationError as e:
            log.warning("Skipping malformed trip row %s: %s", trip_id, e)
            return None

    def get_ongoing_trips(self, user_id: str) -> List[Trip]:
        today = self.today()
        return [t for t in self.get_user_trips(user_id)
                if t.arrival_date <= today <= t.departure_date]

    def get_upcoming_trips(self, user_id: str) -> List[Trip]:
        today = self.today()
        return [t for t in self.get_user_trips(user_id) if t.arrival_date > today]

    def get_past_trips(self, user_id: str) -> List[Trip]:
        today = self.today()
        past = [t for t in self._safe_load(user_id, "past trips") if t.departure_date < today]
        return sorted(past, key=lambda t: t.departure_date, reverse=True)

    # ---------- writes ----------
    def _write(self, action: str, fn: Callable[[], Any]) -> WriteResult:
        try:
            out = fn()
        except Exception as e:
            log.exception("Error %s", action)
            return WriteResult.failure(e)
        return WriteResult.success(Trip.model_validate(out) if out else None)

    def add_trip(self, trip: TripIn, user_id: str) -> WriteResult:
        item: Dict[str, Any] = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "created_at": datetime.now(timezone.utc).replace(microsecond=0),
            **trip.model_dump(mode="json", exclude_none=True),
        }
        return self._write("adding trip", lambda: self.store.put(item))

    def update_trip(self, trip_id: str, updates: TripUpdate) -> WriteResult:
        changes = updates.model_dump(mode="json", exclude_unset=True)
        return self._write("updating trip", lambda: self.store.update(trip_id, changes))

    def update_notification_preferences(
        self, trip_id: str, preferences: NotificationPreferences
    ) -> WriteResult:
        changes = {"notification_preferences": preferences.model_dump()}
        return self._write(
            "updating trip notification preferences",
            lambda: self.store.update(trip_id, changes),
        )

    def delete_trip(self, trip_id: str) -> WriteResult:
        return self._write("deleting trip", lambda: self.store.delete(trip_id))


@lru_cache(maxsize=1)
def get_trip_service() -> TripService:
    return TripService()
