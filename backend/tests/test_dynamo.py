"""Tests for the DynamoDB store helpers against a mocked table."""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from travelsafe.db.dynamo import IncidentStore, TripStore, from_dynamo, to_dynamo


def test_to_dynamo_converts_floats_and_dates():
    out = to_dynamo({
        "lat": 48.8566,
        "n": 3,
        "when": datetime(2024, 6, 1, tzinfo=timezone.utc),
        "day": date(2024, 6, 1),
        "nested": [{"x": 1.5}],
    })
    assert out["lat"] == Decimal("48.8566")
    assert out["n"] == 3
    assert out["when"] == "2024-06-01T00:00:00+00:00"
    assert out["day"] == "2024-06-01"
    assert out["nested"] == [{"x": Decimal("1.5")}]


def test_from_dynamo_restores_numbers():
    out = from_dynamo({"lat": Decimal("48.8566"), "count": Decimal("4"), "tags": [Decimal("1.5")]})
    assert out == {"lat": 48.8566, "count": 4, "tags": [1.5]}
    assert isinstance(out["count"], int)


def test_scan_follows_pagination():
    table = MagicMock()
    table.scan.side_effect = [
        {"Items": [{"id": "a", "created_at": "2024-01-01T00:00:00Z"}], "LastEvaluatedKey": {"id": "a"}},
        {"Items": [{"id": "b", "created_at": "2024-02-01T00:00:00Z"}]},
    ]
    rows = IncidentStore(table).query(location="Paris")
    assert [r["id"] for r in rows] == ["b", "a"]  # newest first
    assert table.scan.call_count == 2
    assert table.scan.call_args_list[1].kwargs["ExclusiveStartKey"] == {"id": "a"}


def test_put_adds_search_field_and_drops_none():
    table = MagicMock()
    saved = IncidentStore(table).put({"id": "x", "location": "Paris, France", "latitude": 1.25, "description": None})
    item = table.put_item.call_args.kwargs["Item"]
    assert item["location_search"] == "paris, france"
    assert item["latitude"] == Decimal("1.25")
    assert "description" not in item
    assert saved["latitude"] == 1.25


def test_update_builds_set_expression():
    table = MagicMock()
    table.update_item.return_value = {"Attributes": {"id": "x", "verified": True, "latitude": Decimal("2.5")}}
    out = IncidentStore(table).update("x", {"verified": True, "location": "Rome, Italy", "id": "ignored"})

    kwargs = table.update_item.call_args.kwargs
    assert kwargs["Key"] == {"id": "x"}
    assert kwargs["UpdateExpression"] == "SET #f0 = :v0, #f1 = :v1, #f2 = :v2"
    assert kwargs["ExpressionAttributeNames"] == {"#f0": "verified", "#f1": "location", "#f2": "location_search"}
    assert kwargs["ExpressionAttributeValues"][":v2"] == "rome, italy"
    assert kwargs["ReturnValues"] == "ALL_NEW"
    assert out == {"id": "x", "verified": True, "latitude": 2.5}


def test_empty_update_of_missing_item_raises():
    table = MagicMock()
    table.get_item.return_value = {}
    with pytest.raises(KeyError):
        IncidentStore(table).update("missing", {})


def test_trips_by_user_uses_index_then_scan():
    table = MagicMock()
    table.query.return_value = {"Items": [{"id": "t1", "user_id": "u"}]}
    assert TripStore(table).query_by_user("u") == [{"id": "t1", "user_id": "u"}]
    assert table.query.call_args.kwargs["IndexName"] == "user-index"

    table = MagicMock()
    table.query.side_effect = ClientError({"Error": {"Code": "ValidationException", "Message": "no index"}}, "Query")
    table.scan.return_value = {"Items": [{"id": "t2", "user_id": "u"}]}
    assert TripStore(table).query_by_user("u") == [{"id": "t2", "user_id": "u"}]
