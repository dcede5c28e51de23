"""Tests for the incident data-access facade and its synthetic fallback."""

from datetime import date, datetime, timezone

import pytest
from botocore.exceptions import ClientError

from fakes import FakeIncidentStore, make_incident
from travelsafe.models.common import parse_timestamp
from travelsafe.models.incident import IncidentFilter, IncidentIn, IncidentRecord, IncidentUpdate
from travelsafe.services.incident_service import (
    MIN_TRIP_ROWS,
    QueryOutcome,
    is_relevant_for_trip,
)


def _stored(n, **overrides):
    return [make_incident(id=f"inc-{i}", **overrides) for i in range(n)]


# ---------- QueryOutcome ----------

def test_outcome_statuses():
    assert QueryOutcome.run(lambda: [make_incident()]).status == "ok"
    assert QueryOutcome.run(lambda: []).status == "empty"
    assert QueryOutcome.run(lambda: None).status == "empty"

    def broken():
        raise RuntimeError("down")

    outcome = QueryOutcome.run(broken)
    assert outcome.status == "error"
    assert str(outcome.error) == "down"


def test_malformed_rows_are_skipped():
    outcome = QueryOutcome.run(lambda: [make_incident(), {"id": "bad"}])
    assert [r.id for r in outcome.rows] == ["inc-1"]


def test_out_of_range_epochs_parse_to_none():
    assert parse_timestamp(1e20) is None
    assert parse_timestamp(-1e20) is None
    assert parse_timestamp(1718452800) == datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def test_row_with_out_of_range_epoch_is_skipped(incident_service, incident_store):
    incident_store.items = {
        "good": make_incident(id="good"),
        "far": make_incident(id="far", created_at=1e20),
    }
    assert [r.id for r in incident_service.get_all()] == ["good"]


def test_legacy_scam_type_and_unknown_category():
    row = make_incident()
    del row["category"]
    row["scam_type"] = "Pickpocketing"
    outcome = QueryOutcome.run(lambda: [row, make_incident(id="inc-2", category="Weird")])
    assert [r.category for r in outcome.rows] == ["Pickpocketing", "Other"]


# ---------- reads with fallback ----------

def test_store_rows_returned_when_present(incident_service, incident_store):
    incident_store.items = {it["id"]: it for it in _stored(3)}
    rows = incident_service.get_all()
    assert sorted(r.id for r in rows) == ["inc-0", "inc-1", "inc-2"]
    assert incident_service.last_refresh_at is None


def test_empty_store_falls_back_to_synthetic(incident_service):
    rows = incident_service.get_all()
    assert rows
    assert all(r.id.startswith("global-scam-") for r in rows)
    assert len(rows) <= 200
    assert incident_service.last_refresh_at is not None


def test_store_error_falls_back_to_synthetic(incident_service):
    incident_service.store = FakeIncidentStore(fail=True)
    rows = incident_service.get_all()
    assert rows
    assert all(isinstance(r, IncidentRecord) for r in rows)


def test_location_filter_is_case_insensitive_on_fallback(incident_service):
    rows = incident_service.get_by_location("paris")
    assert rows
    assert all("paris" in r.location.casefold() for r in rows)


def test_category_filter_on_fallback(incident_service):
    rows = incident_service.get_by_category("Pickpocketing")
    assert all(r.category == "Pickpocketing" for r in rows)


def test_verified_filter_on_fallback(incident_service):
    rows = incident_service.get_verified()
    assert rows
    assert all(r.verified for r in rows)


def test_filters_apply_to_store_rows(incident_service, incident_store):
    incident_store.items = {
        "a": make_incident(id="a", location="Paris, France"),
        "b": make_incident(id="b", location="Rome, Italy"),
    }
    rows = incident_service.get_incidents(IncidentFilter(location="PARIS"))
    assert [r.id for r in rows] == ["a"]


def test_refresh_marker_only_moves_after_interval(incident_service):
    incident_service.get_all()
    first = incident_service.last_refresh_at
    incident_service.get_all()
    assert incident_service.last_refresh_at == first


def test_sample_has_no_advisory_notes(incident_service):
    rows = incident_service.sample_incidents(10)
    assert 1 <= len(rows) <= 10
    assert not any("[UPDATED" in (r.description or "") for r in rows)


# ---------- trips ----------

@pytest.mark.parametrize(
    "arrival, departure, expected",
    [
        ("2024-06-05", "2024-06-20", True),
        ("2024-07-01", "2024-07-10", False),
        ("2024-05-01", "2024-05-31", False),
        ("2024-06-10", "2024-06-10", True),
        ("2024-05-20", "2024-06-01", True),
    ],
)
def test_trip_overlap(arrival, departure, expected):
    record = IncidentRecord.model_validate(make_incident())  # 06-01 .. 06-10
    assert is_relevant_for_trip(record, arrival, departure) is expected


def test_open_ended_incident_applies_once_started():
    record = IncidentRecord.model_validate(make_incident(end_date=None))
    assert is_relevant_for_trip(record, date(2024, 8, 1), date(2024, 8, 5))
    assert not is_relevant_for_trip(record, date(2024, 5, 1), date(2024, 5, 5))


def test_undated_incident_always_applies():
    record = IncidentRecord.model_validate(make_incident(start_date=None, end_date=None))
    assert is_relevant_for_trip(record, "2030-01-01", "2030-01-02")


def test_trip_uses_store_rows_at_threshold(incident_service, incident_store):
    incident_store.items = {it["id"]: it for it in _stored(MIN_TRIP_ROWS)}
    rows = incident_service.get_for_trip("Paris", "2024-06-05", "2024-06-20")
    assert len(rows) == MIN_TRIP_ROWS
    assert incident_service.last_refresh_at is None


def test_trip_below_threshold_is_supplemented(incident_service, incident_store):
    incident_store.items = {it["id"]: it for it in _stored(2)}
    rows = incident_service.get_for_trip("paris", "2024-06-05", "2024-06-20")
    ids = {r.id for r in rows}
    assert {"inc-0", "inc-1"} <= ids
    assert incident_service.last_refresh_at is not None
    assert all("paris" in r.location.casefold() for r in rows)


def test_trip_excludes_non_overlapping_store_rows(incident_service, incident_store):
    incident_store.items = {it["id"]: it for it in _stored(MIN_TRIP_ROWS)}
    assert incident_service.get_for_trip("Paris", "2024-07-01", "2024-07-10") == []


def test_trip_with_bad_dates_raises(incident_service):
    with pytest.raises(ValueError):
        incident_service.get_for_trip("Paris", "not-a-date", "2024-06-10")


def test_user_incidents_never_synthesized(incident_service, incident_store):
    incident_store.items = {"mine": make_incident(id="mine", user_id="u1"),
                            "other": make_incident(id="other", user_id="u2")}
    assert [r.id for r in incident_service.get_user_incidents("u1")] == ["mine"]
    assert incident_service.get_user_incidents("nobody") == []
    incident_service.store = FakeIncidentStore(fail=True)
    assert incident_service.get_user_incidents("u1") == []


# ---------- writes ----------

def test_create_incident(incident_service, incident_store, clock):
    result = incident_service.create_incident(
        IncidentIn(title=" Fake police ", location="Rome, Italy", category="Fake Officials"),
        user_id="u1",
    )
    assert result.ok
    saved = result.data
    assert saved.title == "Fake police"
    assert saved.verified is False
    assert saved.user_id == "u1"
    assert saved.source == "user_reported"
    assert saved.created_at == clock().replace(microsecond=0)
    assert saved.id in incident_store.items


def test_create_incident_store_failure(incident_service):
    incident_service.store = FakeIncidentStore(fail=True)
    result = incident_service.create_incident(IncidentIn(title="t", location="Rome, Italy"))
    assert not result.ok
    assert result.error == "boom"
    assert result.data is None


def test_update_incident_stamps_updated_at(incident_service, incident_store):
    incident_store.items = {"inc-1": make_incident()}
    result = incident_service.update_incident("inc-1", IncidentUpdate(title="Renamed"))
    assert result.ok
    assert result.data.title == "Renamed"
    assert result.data.verified is True
    assert result.data.updated_at == datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def test_update_missing_incident_is_an_error(incident_service):
    result = incident_service.update_incident("nope", IncidentUpdate(title="x"))
    assert not result.ok
    assert "nope" in result.error
    assert result.not_found


def test_conditional_check_failure_is_not_found(incident_service):
    class MissingRowStore(FakeIncidentStore):
        def update(self, key, updates):
            raise ClientError(
                {"Error": {"Code": "ConditionalCheckFailedException", "Message": "The conditional request failed"}},
                "UpdateItem",
            )

    incident_service.store = MissingRowStore()
    result = incident_service.update_incident("gone", IncidentUpdate(title="x"))
    assert result.not_found


def test_update_store_failure_is_not_a_missing_row(incident_service):
    incident_service.store = FakeIncidentStore(fail=True)
    result = incident_service.update_incident("inc-1", IncidentUpdate(title="x"))
    assert result.error == "boom"
    assert not result.not_found


def test_verified_is_not_an_update_field():
    assert "verified" not in IncidentUpdate.model_fields
    assert IncidentUpdate.model_validate({"verified": True}).model_dump(exclude_unset=True) == {}


def test_get_incident(incident_service, incident_store):
    incident_store.items = {"inc-1": make_incident(), "bad": {"id": "bad"}}
    assert incident_service.get_incident("inc-1").id == "inc-1"
    assert incident_service.get_incident("bad") is None
    assert incident_service.get_incident("nope") is None
    incident_service.store = FakeIncidentStore(fail=True)
    assert incident_service.get_incident("inc-1") is None


def test_delete_incident(incident_service, incident_store):
    incident_store.items = {"inc-1": make_incident()}
    assert incident_service.delete_incident("inc-1").ok
    assert incident_store.items == {}
    incident_service.store = FakeIncidentStore(fail=True)
    assert incident_service.delete_incident("inc-1").error == "boom"
