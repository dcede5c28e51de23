# backend/travelsafe/db/dynamo.py
import os
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError


REGION = os.getenv("AWS_REGION", "eu-north-1")
INCIDENTS_TABLE = os.getenv("INCIDENTS_TABLE", "Incidents")
TRIPS_TABLE = os.getenv("TRIPS_TABLE", "Trips")
TRIPS_USER_INDEX = os.getenv("TRIPS_USER_INDEX", "user-index")

dynamodb = boto3.resource("dynamodb", region_name=REGION)


def to_dynamo(obj: Any) -> Any:
    """
    Recursively convert float values in a dict/list to Decimal
    so that DynamoDB accepts them. Dates become ISO strings.
    """
    if isinstance(obj, list):
        return [to_dynamo(i) for i in obj]
    if isinstance(obj, dict):
        return {k: to_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, float):
        return Decimal(str(obj))  # float -> string -> Decimal
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, date):
        return obj.isoformat()
    return obj


def from_dynamo(obj: Any) -> Any:
    """Inverse of to_dynamo for what boto3 hands back (Decimal -> int/float)."""
    if isinstance(obj, list):
        return [from_dynamo(i) for i in obj]
    if isinstance(obj, dict):
        return {k: from_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    return obj


class DynamoStore:
    """Table-scoped CRUD by primary key plus paged scans."""

    key_name = "id"

    def __init__(self, table) -> None:
        self.table = table

    def _collect(self, operation, **kwargs) -> List[Dict[str, Any]]:
        """Run query/scan, transparently auto-paginating on LastEvaluatedKey."""
        items: List[Dict[str, Any]] = []
        lek: Optional[Dict[str, Any]] = None
        while True:
            if lek:
                kwargs["ExclusiveStartKey"] = lek
            resp = operation(**kwargs)
            items.extend(resp.get("Items", []))
            lek = resp.get("LastEvaluatedKey")
            if not lek:
                break
        return [from_dynamo(it) for it in items]

    def scan(self, **kwargs) -> List[Dict[str, Any]]:
        return self._collect(self.table.scan, **kwargs)

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        resp = self.table.get_item(Key={self.key_name: key})
        item = resp.get("Item")
        return from_dynamo(item) if item else None

    def put(self, item: Dict[str, Any]) -> Dict[str, Any]:
        clean = {k: v for k, v in item.items() if v is not None}
        self.table.put_item(Item=to_dynamo(clean))
        return clean

    def update(self, key: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """SET the given attributes on an existing item; returns the full new item."""
        updates = {k: v for k, v in updates.items() if k != self.key_name}
        if not updates:
            current = self.get(key)
            if current is None:
                raise KeyError(f"{self.key_name}={key} not found")
            return current

        names = {f"#f{i}": name for i, name in enumerate(updates)}
        values = {f":v{i}": to_dynamo(value) for i, value in enumerate(updates.values())}
        expression = "SET " + ", ".join(f"#f{i} = :v{i}" for i in range(len(updates)))

        resp = self.table.update_item(
            Key={self.key_name: key},
            UpdateExpression=expression,
            ExpressionAttributeNames=names,
            ExpressionAttributeValues=values,
            ConditionExpression=Attr(self.key_name).exists(),
            ReturnValues="ALL_NEW",
        )
        return from_dynamo(resp.get("Attributes", {}))

    def delete(self, key: str) -> None:
        self.table.delete_item(Key={self.key_name: key})


class IncidentStore(DynamoStore):
    """
    Incidents table. Each row carries a lower-cased `location_search`
    copy of `location` so substring filters are case-insensitive.
    """

    def __init__(self, table=None) -> None:
        super().__init__(table if table is not None else dynamodb.Table(INCIDENTS_TABLE))

    def query(
        self,
        *,
        location: Optional[str] = None,
        categories: Optional[Iterable[str]] = None,
        verified: Optional[bool] = None,
        user_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        condition = Attr("is_scam_related").eq(True)
        if location:
            condition = condition & Attr("location_search").contains(location.casefold())
        cats = list(categories or [])
        if len(cats) == 1:
            condition = condition & Attr("category").eq(cats[0])
        elif cats:
            condition = condition & Attr("category").is_in(cats)
        if verified is not None:
            condition = condition & Attr("verified").eq(verified)
        if user_id:
            condition = condition & Attr("user_id").eq(user_id)

        items = self.scan(FilterExpression=condition)
        # newest first
        items.sort(key=lambda it: str(it.get("created_at") or ""), reverse=True)
        return items

    def put(self, item: Dict[str, Any]) -> Dict[str, Any]:
        item = dict(item)
        item["location_search"] = str(item.get("location", "")).casefold()
        return super().put(item)

    def update(self, key: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        updates = dict(updates)
        if updates.get("location"):
            updates["location_search"] = str(updates["location"]).casefold()
        return super().update(key, updates)


class TripStore(DynamoStore):
    def __init__(self, table=None) -> None:
        super().__init__(table if table is not None else dynamodb.Table(TRIPS_TABLE))

    def query_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Return all trips for a user. Prefer GSI query; fall back to scan if needed.
        """
        try:
            items = self._collect(
                self.table.query,
                IndexName=TRIPS_USER_INDEX,
                KeyConditionExpression=Key("user_id").eq(user_id),
            )
        except ClientError:
            items = self.scan(FilterExpression=Attr("user_id").eq(user_id))
        return items
