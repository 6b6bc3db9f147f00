"""
Event store clients: put and scan against a single table of event records.

Two backends share the same interface:
- DynamoEventStore: the "Events" DynamoDB table (deployed target).
- PostgresEventStore: an `events` table in PostgreSQL (local development).
"""

import json
import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Attr

from announcer import config
from announcer.database.db_connection import get_db


def to_dynamo(record: Dict[str, Any]) -> Dict[str, Any]:
    """boto3 refuses floats; JSON numbers with a fraction become Decimal."""
    return json.loads(json.dumps(record), parse_float=Decimal)


def from_dynamo(value: Any) -> Any:
    """Decimals read back from DynamoDB become int or float again."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamo(v) for v in value]
    return value


class DynamoEventStore:
    """Event records kept in a DynamoDB table keyed by `id`."""

    def __init__(self, table) -> None:
        self.table = table

    def put(self, record: Dict[str, Any]) -> None:
        self.table.put_item(Item=to_dynamo(record))

    def scan(self, from_date: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Read every record, optionally keeping only `date >= from_date`.

        The comparison runs inside DynamoDB and is a string comparison.
        Follows LastEvaluatedKey until the whole table has been read.
        """
        params: Dict[str, Any] = {}
        if from_date:
            # Attr() routes `date` through ExpressionAttributeNames (reserved word)
            params["FilterExpression"] = Attr("date").gte(from_date)

        items: List[Dict[str, Any]] = []
        while True:
            resp = self.table.scan(**params)
            items.extend(from_dynamo(item) for item in resp.get("Items", []))
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                break
            params["ExclusiveStartKey"] = last_key

        logging.debug(f"[Store] Scanned {len(items)} events from {self.table.name}")
        return items


class PostgresEventStore:
    """Event records kept in a PostgreSQL `events` table."""

    def __init__(self, connect: Callable = get_db, table_name: str = "events") -> None:
        self.connect = connect
        self.table_name = table_name

    def put(self, record: Dict[str, Any]) -> None:
        sql = f"""
            INSERT INTO {self.table_name} (id, title, description, "date", location, organizer, created_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s);
        """
        conn = self.connect()
        try:
            with conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (
                        record["id"],
                        record["title"],
                        record["description"],
                        record["date"],
                        record["location"],
                        record["organizer"],
                        record["createdAt"],
                    ))
        finally:
            conn.close()

    def scan(self, from_date: Optional[str] = None) -> List[Dict[str, Any]]:
        sql = f"""
            SELECT id, title, description, "date", location, organizer, created_at AS "createdAt"
            FROM {self.table_name}
        """
        params: List[Any] = []
        if from_date:
            sql += ' WHERE "date" >= %s'
            params.append(from_date)

        conn = self.connect()
        try:
            with conn:
                with conn.cursor() as cur:
                    cur.execute(sql, params)
                    return [dict(row) for row in cur.fetchall()]
        finally:
            conn.close()


def build_event_store(backend: Optional[str] = None):
    """
    Construct the store client named by STORE_BACKEND.

    Raises:
        ValueError: If the backend name is not recognised.
    """
    backend = (backend or config.STORE_BACKEND).lower()

    if backend == "dynamodb":
        table = boto3.resource("dynamodb", region_name=config.AWS_REGION).Table(config.EVENTS_TABLE)
        return DynamoEventStore(table)
    if backend == "postgres":
        return PostgresEventStore()

    raise ValueError(f"Unknown STORE_BACKEND '{backend}'. Use 'dynamodb' or 'postgres'.")
