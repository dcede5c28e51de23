# backend/travelsafe/services/events.py
"""
Local events for a destination (Eventbrite v3 API).

Same shape as the incident facade: try the remote API, and when there is
no key, an error, or no results, generate plausible listings instead.
"""
from __future__ import annotations

import logging
import os
import random
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

from travelsafe.models.event import EventCategory, EventListing, EventVenue
from travelsafe.models.common import parse_timestamp
from travelsafe.services import taxonomy

log = logging.getLogger(__name__)

API_BASE_URL = os.getenv("EVENTBRITE_API_URL", "https://www.eventbriteapi.com/v3").rstrip("/")
EVENTBRITE_KEY = os.getenv("EVENTBRITE_API_KEY", "").strip()
TIMEOUT_SECONDS = 12

_EVENT_TYPES = (
    "Music Festival", "Food Fair", "Art Exhibition",
    "Cultural Festival", "Tech Conference", "Sports Event",
    "Comedy Show", "Theater Performance", "Workshop",
)
_VENUES = (
    "City Hall", "Convention Center", "Main Square",
    "Grand Theater", "Stadium", "Museum",
    "Park", "University", "Beach",
)


class EventsError(RuntimeError):
    pass


def _iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _parse_event(raw: Dict[str, Any]) -> EventListing:
    venue_raw = raw.get("venue") or {}
    venue = None
    if venue_raw:
        address = venue_raw.get("address") or {}
        lat = address.get("latitude")
        lng = address.get("longitude")
        venue = EventVenue(
            id=str(venue_raw.get("id", "")),
            name=venue_raw.get("name") or "",
            city=address.get("city"),
            country=address.get("country"),
            address=address.get("address_1"),
            latitude=float(lat) if lat not in (None, "") else None,
            longitude=float(lng) if lng not in (None, "") else None,
        )
    start = raw.get("start") or {}
    end = raw.get("end") or {}
    return EventListing(
        id=str(raw["id"]),
        name=(raw.get("name") or {}).get("text") or "",
        description=(raw.get("description") or {}).get("text"),
        url=raw.get("url") or "",
        start=parse_timestamp(start.get("utc")),
        end=parse_timestamp(end.get("utc")),
        timezone=start.get("timezone") or "UTC",
        is_free=bool(raw.get("is_free")),
        category_id=raw.get("category_id"),
        logo_url=(raw.get("logo") or {}).get("url"),
        venue=venue,
    )


class EventsClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.api_key = EVENTBRITE_KEY if api_key is None else api_key
        self.session = session or requests.Session()
        self.rng = rng or random.Random()

    def _get(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        if not self.api_key:
            raise EventsError("EVENTBRITE_API_KEY is not set")
        r = self.session.get(
            f"{API_BASE_URL}{endpoint}",
            params=params or {},
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=TIMEOUT_SECONDS,
        )
        if not r.ok:
            try:
                detail = r.json().get("error_description")
            except ValueError:
                detail = None
            raise EventsError(f"Eventbrite API error: {detail or r.reason}")
        return r.json()

    def get_events_by_location(
        self,
        latitude: float,
        longitude: float,
        radius: int = 10,  # miles
        categories: Optional[Sequence[str]] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 10,
    ) -> List[EventListing]:
        params = {
            "location.latitude": str(latitude),
            "location.longitude": str(longitude),
            "location.within": f"{radius}mi",
            "expand": "venue",
            "page_size": str(limit),
        }
        if categories:
            params["categories"] = ",".join(categories)
        if start:
            params["start_date.range_start"] = _iso(start)
        if end:
            params["start_date.range_end"] = _iso(end)
        try:
            data = self._get("/events/search/", params)
            return [_parse_event(e) for e in data.get("events", [])]
        except (EventsError, requests.RequestException, KeyError, ValueError) as e:
            log.warning("Error fetching events from Eventbrite: %s", e)
            return []

    def get_event_categories(self) -> List[EventCategory]:
        try:
            data = self._get("/categories/")
            return [
                EventCategory(id=str(c["id"]), name=c.get("name", ""), short_name=c.get("short_name"))
                for c in data.get("categories", [])
            ]
        except (EventsError, requests.RequestException, KeyError, TypeError, ValueError) as e:
            log.warning("Error fetching event categories from Eventbrite: %s", e)
            return []

    def get_events_by_venue(self, venue_id: str) -> List[EventListing]:
        try:
            data = self._get(f"/venues/{venue_id}/events/")
            return [_parse_event(e) for e in data.get("events", [])]
        except (EventsError, requests.RequestException, KeyError, ValueError) as e:
            log.warning("Error fetching venue events from Eventbrite: %s", e)
            return []

    # ---------- generated listings ----------
    def get_mock_events(self, location: str, limit: int = 5, *, now: Optional[datetime] = None) -> List[EventListing]:
        """Plausible listings around the first known city named in `location`."""
        now = (now or datetime.now(timezone.utc)).replace(microsecond=0)
        center = _center_for(location)
        rng = self.rng
        events: List[EventListing] = []
        for i in range(limit):
            start = now + timedelta(days=rng.randrange(30))
            end = start + timedelta(hours=2 + rng.randrange(4))
            events.append(EventListing(
                id=f"mock-event-{i}",
                name=f"{rng.choice(_EVENT_TYPES)} in {location}",
                description=f"A great event happening in {location}. Don't miss it!",
                url="https://www.eventbrite.com",
                start=start,
                end=end,
                is_free=rng.random() < 0.5,
                category_id=str(rng.randint(101, 120)),
                logo_url=f"https://picsum.photos/seed/{i}/200/200",
                venue=EventVenue(
                    id=f"mock-venue-{i}",
                    name=f"{rng.choice(_VENUES)} {location}",
                    city=location,
                    address="123 Main St",
                    latitude=center[0] + rng.uniform(-0.025, 0.025),
                    longitude=center[1] + rng.uniform(-0.025, 0.025),
                ),
                source="generated",
            ))
        return events

    def find_events(
        self,
        location: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        *,
        radius: int = 10,
        categories: Optional[Sequence[str]] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 10,
    ) -> List[EventListing]:
        if latitude is None or longitude is None:
            latitude, longitude = _center_for(location)
        if self.api_key:
            events = self.get_events_by_location(
                latitude, longitude, radius, categories, start, end, limit
            )
            if events:
                return events
        log.info('No live events for "%s", using generated listings', location)
        return self.get_mock_events(location, limit)


def _center_for(location: str) -> Tuple[float, float]:
    """City named before the first comma, else the longest known city name inside `location`."""
    head = location.split(",", 1)[0].strip().casefold()
    for city, coords in taxonomy.CITY_COORDINATES.items():
        if city.casefold() == head:
            return coords
    needle = location.casefold()
    matches = [city for city in taxonomy.CITY_COORDINATES if city.casefold() in needle]
    if matches:
        return taxonomy.CITY_COORDINATES[max(matches, key=len)]
    return (0.0, 0.0)


@lru_cache(maxsize=1)
def get_events_client() -> EventsClient:
    return EventsClient()
