from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class EventVenue(BaseModel):
    id: str
    name: str
    city: Optional[str] = None
    country: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class EventListing(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    url: str
    start: datetime
    end: Optional[datetime] = None
    timezone: str = "UTC"
    is_free: bool = False
    category_id: Optional[str] = None
    logo_url: Optional[str] = None
    venue: Optional[EventVenue] = None
    source: str = "eventbrite"


class EventCategory(BaseModel):
    id: str
    name: str
    short_name: Optional[str] = None
