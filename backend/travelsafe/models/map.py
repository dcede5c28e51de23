from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from travelsafe.models.incident import ScamCategory


class MapMarker(BaseModel):
    """What the map component needs to draw one pin."""

    id: str
    latitude: float
    longitude: float
    color: str = Field(..., description="Hex colour for the category")
    popup_content: str
    category: ScamCategory
    verified: bool
    zone_id: Optional[str] = Field(None, description="H3 cell containing the point")


class ZoneCluster(BaseModel):
    """Incidents grouped into one H3 cell (heat map layer)."""

    zone_id: str
    latitude: float
    longitude: float
    count: int
    verified_count: int
    dominant_category: ScamCategory
    color: str
    boundary: List[Tuple[float, float]] = Field(default_factory=list, description="Cell outline as (lat, lng)")
