from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional, get_args

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from travelsafe.models.common import parse_timestamp

ScamCategory = Literal[
    "Tourist Trap",
    "Overcharging",
    "Fake Products",
    "Pickpocketing",
    "Taxi Scam",
    "Fake Officials",
    "Counterfeit Currency",
    "Accommodation Scam",
    "ATM Fraud",
    "Distraction Theft",
    "Other",
]
SafetyLevel = Literal["Very Low", "Low", "Medium", "High", "Very High"]

SCAM_CATEGORIES: tuple = get_args(ScamCategory)
SAFETY_LEVELS: tuple = get_args(SafetyLevel)


def normalize_category(value: Any) -> str:
    """Anything that is not one of the 11 categories becomes "Other"."""
    if isinstance(value, str) and value.strip() in SCAM_CATEGORIES:
        return value.strip()
    return "Other"


def normalize_safety_level(value: Any) -> str:
    if isinstance(value, str) and value.strip() in SAFETY_LEVELS:
        return value.strip()
    return "Medium"


def _coerce_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    parsed = parse_timestamp(value)
    if parsed is None:
        raise ValueError(f"Invalid timestamp: {value!r}")
    return parsed


class IncidentRecord(BaseModel):
    """
    A reported or synthesized scam/safety incident.

    Every record handed to a caller is built through this model, which is
    where a missing or unknown category is resolved to "Other".
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    title: str
    description: Optional[str] = None
    location: str = Field(..., description='Free text "<city>, <country>"')
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_scam_related: bool = True
    category: ScamCategory = Field(
        "Other", validation_alias=AliasChoices("category", "scam_type")
    )
    safety_level: SafetyLevel = "Medium"
    verified: bool = False
    source: Optional[str] = None
    external_id: Optional[str] = None
    external_url: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("category", mode="before")
    @classmethod
    def _category_or_other(cls, v: Any) -> str:
        return normalize_category(v)

    @field_validator("safety_level", mode="before")
    @classmethod
    def _safety_level_or_medium(cls, v: Any) -> str:
        return normalize_safety_level(v)

    @field_validator("start_date", "end_date", "created_at", "updated_at", mode="before")
    @classmethod
    def _utc_timestamps(cls, v: Any) -> Optional[datetime]:
        return _coerce_timestamp(v)


# Payload coming FROM the report form
class IncidentIn(BaseModel):
    title: str = Field(..., max_length=200)
    description: Optional[str] = Field(None, max_length=4000)
    location: str = Field(..., max_length=200, description='e.g. "Paris, France"')
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    category: ScamCategory = "Other"
    safety_level: SafetyLevel = "Medium"
    source: str = "user_reported"
    external_id: Optional[str] = None
    external_url: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please provide a title for the report")
        return v

    @field_validator("location")
    @classmethod
    def _location_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please specify a location")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def _category_or_other(cls, v: Any) -> str:
        return normalize_category(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _utc_timestamps(cls, v: Any) -> Optional[datetime]:
        return _coerce_timestamp(v)


class IncidentUpdate(BaseModel):
    """Fields a reporter may change. `verified` is not one of them; unknown keys are ignored."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=4000)
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    category: Optional[ScamCategory] = None
    safety_level: Optional[SafetyLevel] = None
    external_url: Optional[str] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _utc_timestamps(cls, v: Any) -> Optional[datetime]:
        return _coerce_timestamp(v)


class IncidentFilter(BaseModel):
    location: Optional[str] = Field(None, description="Case-insensitive substring of location")
    categories: Optional[List[ScamCategory]] = None
    verified_only: bool = False

    def is_empty(self) -> bool:
        return not (self.location or self.categories or self.verified_only)

    def matches(self, record: IncidentRecord) -> bool:
        if self.location and self.location.casefold() not in record.location.casefold():
            return False
        if self.categories and record.category not in self.categories:
            return False
        if self.verified_only and not record.verified:
            return False
        return True
