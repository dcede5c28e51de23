from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NotificationPreferences(BaseModel):
    weather: bool = False
    events: bool = False
    customs: bool = False
    phrases: bool = False
    safety: bool = True
    transport: bool = False
    attractions: bool = False
    restaurants: bool = False
    exchange: bool = False


class TripIn(BaseModel):
    destination: str = Field(..., min_length=1, max_length=200)
    arrival_date: date
    departure_date: date
    notification_preferences: Optional[NotificationPreferences] = None

    @model_validator(mode="after")
    def _departure_after_arrival(self) -> "TripIn":
        if self.departure_date < self.arrival_date:
            raise ValueError("Departure date must be on or after the arrival date.")
        return self


class Trip(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    destination: str
    arrival_date: date
    departure_date: date
    notification_preferences: Optional[NotificationPreferences] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None


class TripUpdate(BaseModel):
    destination: Optional[str] = Field(None, min_length=1, max_length=200)
    arrival_date: Optional[date] = None
    departure_date: Optional[date] = None
    notification_preferences: Optional[NotificationPreferences] = None

    @model_validator(mode="after")
    def _departure_after_arrival(self) -> "TripUpdate":
        if self.arrival_date and self.departure_date and self.departure_date < self.arrival_date:
            raise ValueError("Departure date must be on or after the arrival date.")
        return self
