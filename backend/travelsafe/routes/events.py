from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from travelsafe.models.event import EventCategory, EventListing
from travelsafe.services.events import EventsClient, get_events_client

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=List[EventListing])
def list_events(
    location: str = Query(..., min_length=1, description='Destination, e.g. "London, United Kingdom"'),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    radius: int = Query(10, ge=1, le=100, description="Miles"),
    category: Optional[List[str]] = Query(None),
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    limit: int = Query(10, ge=1, le=50),
    client: EventsClient = Depends(get_events_client),
):
    """Live listings when the events API answers, generated ones otherwise."""
    return client.find_events(
        location, lat, lng,
        radius=radius, categories=category, start=start, end=end, limit=limit,
    )


@router.get("/categories", response_model=List[EventCategory])
def event_categories(client: EventsClient = Depends(get_events_client)):
    return client.get_event_categories()


@router.get("/venues/{venue_id}", response_model=List[EventListing])
def venue_events(venue_id: str, client: EventsClient = Depends(get_events_client)):
    return client.get_events_by_venue(venue_id)
