from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from travelsafe.models.common import WriteResult
from travelsafe.models.incident import IncidentRecord
from travelsafe.models.trip import NotificationPreferences, Trip, TripIn, TripUpdate
from travelsafe.services.auth import require_user
from travelsafe.services.incident_service import IncidentService, get_incident_service
from travelsafe.services.trip_service import TripService, get_trip_service

router = APIRouter(prefix="/trips", tags=["trip"])


def _unwrap(result: WriteResult):
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)
    return result.data


def _owned_trip(trip_id: str, user_id: str, trips: TripService) -> Trip:
    trip = trips.get_trip(trip_id)
    # someone else's trip looks the same as a missing one
    if trip is None or trip.user_id != user_id:
        raise HTTPException(status_code=404, detail="Trip not found")
    return trip


@router.get("", response_model=List[Trip])
def list_trips(user_id: str = Depends(require_user), trips: TripService = Depends(get_trip_service)):
    return trips.get_user_trips(user_id)


@router.post("", status_code=201, response_model=Trip)
def add_trip(
    trip: TripIn,
    user_id: str = Depends(require_user),
    trips: TripService = Depends(get_trip_service),
):
    return _unwrap(trips.add_trip(trip, user_id))


@router.get("/ongoing", response_model=List[Trip])
def ongoing_trips(user_id: str = Depends(require_user), trips: TripService = Depends(get_trip_service)):
    return trips.get_ongoing_trips(user_id)


@router.get("/upcoming", response_model=List[Trip])
def upcoming_trips(user_id: str = Depends(require_user), trips: TripService = Depends(get_trip_service)):
    return trips.get_upcoming_trips(user_id)


@router.get("/past", response_model=List[Trip])
def past_trips(user_id: str = Depends(require_user), trips: TripService = Depends(get_trip_service)):
    return trips.get_past_trips(user_id)


@router.get("/{trip_id}", response_model=Trip)
def get_trip(trip_id: str, user_id: str = Depends(require_user), trips: TripService = Depends(get_trip_service)):
    return _owned_trip(trip_id, user_id, trips)


@router.put("/{trip_id}", response_model=Trip)
def update_trip(
    trip_id: str,
    updates: TripUpdate,
    user_id: str = Depends(require_user),
    trips: TripService = Depends(get_trip_service),
):
    current = _owned_trip(trip_id, user_id, trips)
    arrival = updates.arrival_date or current.arrival_date
    departure = updates.departure_date or current.departure_date
    if departure < arrival:
        raise HTTPException(status_code=400, detail="Departure date must be on or after the arrival date.")
    return _unwrap(trips.update_trip(trip_id, updates))


@router.put("/{trip_id}/preferences", response_model=Trip)
def update_preferences(
    trip_id: str,
    preferences: NotificationPreferences,
    user_id: str = Depends(require_user),
    trips: TripService = Depends(get_trip_service),
):
    _owned_trip(trip_id, user_id, trips)
    return _unwrap(trips.update_notification_preferences(trip_id, preferences))


@router.delete("/{trip_id}", status_code=204)
def delete_trip(trip_id: str, user_id: str = Depends(require_user), trips: TripService = Depends(get_trip_service)):
    _owned_trip(trip_id, user_id, trips)
    _unwrap(trips.delete_trip(trip_id))


@router.get("/{trip_id}/incidents", response_model=List[IncidentRecord])
def trip_incidents(
    trip_id: str,
    user_id: str = Depends(require_user),
    trips: TripService = Depends(get_trip_service),
    incidents: IncidentService = Depends(get_incident_service),
):
    """Safety briefing: incidents at the destination overlapping the trip dates."""
    trip = _owned_trip(trip_id, user_id, trips)
    return incidents.get_for_trip(trip.destination, trip.arrival_date, trip.departure_date)
