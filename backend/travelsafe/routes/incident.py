from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from travelsafe.models.common import WriteResult
from travelsafe.models.incident import (
    IncidentFilter,
    IncidentIn,
    IncidentRecord,
    IncidentUpdate,
    ScamCategory,
)
from travelsafe.models.map import MapMarker, ZoneCluster
from travelsafe.services import markers
from travelsafe.services.auth import require_user
from travelsafe.services.h3_utils import DEFAULT_RESOLUTION
from travelsafe.services.incident_service import IncidentService, get_incident_service

router = APIRouter(tags=["incident"])


def _unwrap(result: WriteResult):
    if result.not_found:
        raise HTTPException(status_code=404, detail="Incident not found")
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)
    return result.data


def _owned_incident(incident_id: str, user_id: str, service: IncidentService) -> IncidentRecord:
    """Another user's report is reported as missing."""
    record = service.get_incident(incident_id)
    if record is None or record.user_id != user_id:
        raise HTTPException(status_code=404, detail="Incident not found")
    return record


def _filters(
    location: Optional[str] = Query(None, description='Substring of "<city>, <country>"'),
    category: Optional[List[ScamCategory]] = Query(None, description="Repeat to match any of several"),
    verified_only: bool = Query(False),
) -> IncidentFilter:
    return IncidentFilter(location=location, categories=category, verified_only=verified_only)


@router.get("/incidents", response_model=List[IncidentRecord])
def list_incidents(
    filters: IncidentFilter = Depends(_filters),
    service: IncidentService = Depends(get_incident_service),
):
    """Stored incidents matching the filters, or synthetic ones when the store has none."""
    return service.get_incidents(filters)


@router.get("/incidents/trip", response_model=List[IncidentRecord])
def incidents_for_trip(
    destination: str = Query(..., min_length=1),
    arrival: str = Query(..., description="ISO date or datetime"),
    departure: str = Query(..., description="ISO date or datetime"),
    service: IncidentService = Depends(get_incident_service),
):
    try:
        return service.get_for_trip(destination, arrival, departure)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/incidents/user/{user_id}", response_model=List[IncidentRecord])
def incidents_for_user(user_id: str, service: IncidentService = Depends(get_incident_service)):
    return service.get_user_incidents(user_id)


@router.get("/incidents/sample", response_model=List[IncidentRecord])
def sample_incidents(
    count: int = Query(10, ge=1, le=500),
    service: IncidentService = Depends(get_incident_service),
):
    return service.sample_incidents(count)


@router.get("/incidents/markers", response_model=List[MapMarker])
def incident_markers(
    filters: IncidentFilter = Depends(_filters),
    resolution: Optional[int] = Query(None, ge=0, le=15, description="Attach the H3 cell at this resolution"),
    service: IncidentService = Depends(get_incident_service),
):
    return markers.to_markers(service.get_incidents(filters), resolution=resolution)


@router.get("/incidents/clusters", response_model=List[ZoneCluster])
def incident_clusters(
    filters: IncidentFilter = Depends(_filters),
    resolution: int = Query(DEFAULT_RESOLUTION, ge=0, le=15),
    service: IncidentService = Depends(get_incident_service),
):
    """Incidents bucketed into H3 cells for the heat-map layer."""
    return markers.cluster_by_cell(service.get_incidents(filters), resolution)


@router.get("/incidents/bbox", response_model=List[MapMarker])
def incidents_in_bbox(
    min_lat: float = Query(..., ge=-90, le=90),
    max_lat: float = Query(..., ge=-90, le=90),
    min_lng: float = Query(..., ge=-180, le=180),
    max_lng: float = Query(..., ge=-180, le=180),
    filters: IncidentFilter = Depends(_filters),
    service: IncidentService = Depends(get_incident_service),
):
    if min_lat > max_lat or min_lng > max_lng:
        raise HTTPException(status_code=400, detail="min bounds must not exceed max bounds")
    inside = markers.within_bbox(service.get_incidents(filters), min_lat, max_lat, min_lng, max_lng)
    return markers.to_markers(inside)


@router.post("/report_incident", status_code=201, response_model=IncidentRecord)
def report_incident(
    data: IncidentIn,
    user_id: str = Depends(require_user),
    service: IncidentService = Depends(get_incident_service),
):
    """Store a traveller's report. Reports start unverified."""
    return _unwrap(service.create_incident(data, user_id))


@router.put("/incidents/{incident_id}", response_model=IncidentRecord)
def update_incident(
    incident_id: str,
    updates: IncidentUpdate,
    user_id: str = Depends(require_user),
    service: IncidentService = Depends(get_incident_service),
):
    _owned_incident(incident_id, user_id, service)
    return _unwrap(service.update_incident(incident_id, updates))


@router.delete("/incidents/{incident_id}", status_code=204)
def delete_incident(
    incident_id: str,
    user_id: str = Depends(require_user),
    service: IncidentService = Depends(get_incident_service),
):
    _owned_incident(incident_id, user_id, service)
    _unwrap(service.delete_incident(incident_id))
