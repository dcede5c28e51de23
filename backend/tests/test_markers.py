"""Tests for map markers, H3 clusters and viewport filtering."""

from fakes import make_incident
from travelsafe.models.incident import IncidentRecord
from travelsafe.services import h3_utils, markers, taxonomy


def _rec(**kw):
    return IncidentRecord.model_validate(make_incident(**kw))


def test_marker_fields():
    marker = markers.to_marker(_rec(), resolution=7)
    assert marker.color == taxonomy.color_for("Taxi Scam")
    assert marker.latitude == 48.8566
    assert "Taxi Scam in Paris, France" in marker.popup_content
    assert "Verified" in marker.popup_content
    assert marker.zone_id == h3_utils.point_to_hex(48.8566, 2.3522, 7)


def test_records_without_coordinates_are_skipped():
    recs = [_rec(id="a"), _rec(id="b", latitude=None, longitude=None)]
    assert [m.id for m in markers.to_markers(recs)] == ["a"]
    assert markers.to_marker(recs[1]) is None


def test_clusters_group_by_cell():
    recs = [
        _rec(id="a", category="Taxi Scam", verified=True),
        _rec(id="b", category="Taxi Scam", verified=False),
        _rec(id="c", category="Pickpocketing"),
        _rec(id="far", latitude=35.6762, longitude=139.6503, location="Tokyo, Japan"),
    ]
    clusters = markers.cluster_by_cell(recs, resolution=7)
    assert [c.count for c in clusters] == [3, 1]
    paris = clusters[0]
    assert paris.dominant_category == "Taxi Scam"
    assert paris.verified_count == 2
    assert paris.color == taxonomy.color_for("Taxi Scam")
    assert paris.zone_id == h3_utils.point_to_hex(48.8566, 2.3522, 7)
    assert len(paris.boundary) == 6


def test_within_bbox_includes_edges():
    recs = [_rec(id="paris"), _rec(id="tokyo", latitude=35.6762, longitude=139.6503)]
    inside = markers.within_bbox(recs, 48.0, 49.0, 2.0, 3.0)
    assert [r.id for r in inside] == ["paris"]
    edge = markers.within_bbox(recs, 48.8566, 49.0, 2.0, 2.3522)
    assert [r.id for r in edge] == ["paris"]
