# backend/travelsafe/services/markers.py
from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional

from shapely.geometry import Point, box as make_bbox

from travelsafe.models.incident import IncidentRecord
from travelsafe.models.map import MapMarker, ZoneCluster
from travelsafe.services import h3_utils, taxonomy


def _has_point(record: IncidentRecord) -> bool:
    return record.latitude is not None and record.longitude is not None


def popup_content(record: IncidentRecord) -> str:
    """Plain-text popup: title, location, description, verification."""
    parts = [record.title, record.location]
    if record.description:
        parts.append(record.description)
    parts.append("Verified" if record.verified else "Unverified")
    return "\n".join(parts)


def to_marker(record: IncidentRecord, *, resolution: Optional[int] = None) -> Optional[MapMarker]:
    """Marker descriptor for one incident; None when it has no coordinates."""
    if not _has_point(record):
        return None
    zone_id = None
    if resolution is not None:
        zone_id = h3_utils.point_to_hex(record.latitude, record.longitude, resolution)
    return MapMarker(
        id=record.id,
        latitude=record.latitude,
        longitude=record.longitude,
        color=taxonomy.color_for(record.category),
        popup_content=popup_content(record),
        category=record.category,
        verified=record.verified,
        zone_id=zone_id,
    )


def to_markers(records: Iterable[IncidentRecord], *, resolution: Optional[int] = None) -> List[MapMarker]:
    markers = (to_marker(r, resolution=resolution) for r in records)
    return [m for m in markers if m is not None]


def cluster_by_cell(
    records: Iterable[IncidentRecord], resolution: int = h3_utils.DEFAULT_RESOLUTION
) -> List[ZoneCluster]:
    """
    Group located incidents by H3 cell. Busiest cells first; ties keep
    first-seen order.
    """
    cells: Dict[str, List[IncidentRecord]] = defaultdict(list)
    for r in records:
        if _has_point(r):
            cells[h3_utils.point_to_hex(r.latitude, r.longitude, resolution)].append(r)

    clusters: List[ZoneCluster] = []
    for zone_id, members in cells.items():
        lat, lng = h3_utils.hex_to_center(zone_id)
        dominant = Counter(m.category for m in members).most_common(1)[0][0]
        clusters.append(ZoneCluster(
            zone_id=zone_id,
            latitude=lat,
            longitude=lng,
            count=len(members),
            verified_count=sum(1 for m in members if m.verified),
            dominant_category=dominant,
            color=taxonomy.color_for(dominant),
            boundary=h3_utils.hex_boundary(zone_id),
        ))
    clusters.sort(key=lambda c: c.count, reverse=True)
    return clusters


def within_bbox(
    records: Iterable[IncidentRecord],
    min_lat: float,
    max_lat: float,
    min_lng: float,
    max_lng: float,
) -> List[IncidentRecord]:
    """Incidents whose point lies inside (or on the edge of) the viewport."""
    bb = make_bbox(min_lng, min_lat, max_lng, max_lat)  # shapely is (x=lng, y=lat)
    return [r for r in records if _has_point(r) and bb.covers(Point(r.longitude, r.latitude))]
