"""
Create the events table for the configured store backend.

Run once before starting the gateway:
    python -m announcer.database.init_db
"""

import logging
import sys

import boto3
from botocore.exceptions import ClientError

from announcer import config
from announcer.database.db_connection import get_db

EVENTS_DDL = """
    CREATE TABLE IF NOT EXISTS events (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT NOT NULL,
        "date" TEXT NOT NULL,
        location TEXT NOT NULL,
        organizer TEXT NOT NULL DEFAULT 'Anonymous',
        created_at TEXT NOT NULL
    );
"""


def init_postgres(connect=get_db) -> None:
    conn = connect()
    try:
        with conn:
            with conn.cursor() as cur:
                cur.execute(EVENTS_DDL)
    finally:
        conn.close()
    logging.info("Postgres table 'events' is ready.")


def init_dynamodb(client=None) -> None:
    """
    Create the DynamoDB table with `id` as its partition key.
    An existing table is left untouched.
    """
    client = client or boto3.client("dynamodb", region_name=config.AWS_REGION)
    try:
        client.create_table(
            TableName=config.EVENTS_TABLE,
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            BillingMode="PAY_PER_REQUEST",
        )
    except ClientError as e:
        if e.response["Error"]["Code"] != "ResourceInUseException":
            raise
        logging.info(f"DynamoDB table '{config.EVENTS_TABLE}' already exists.")
        return

    client.get_waiter("table_exists").wait(TableName=config.EVENTS_TABLE)
    logging.info(f"DynamoDB table '{config.EVENTS_TABLE}' created.")


def init_db(backend=None) -> None:
    backend = (backend or config.STORE_BACKEND).lower()
    if backend == "dynamodb":
        init_dynamodb()
    elif backend == "postgres":
        init_postgres()
    else:
        raise ValueError(f"Unknown STORE_BACKEND '{backend}'. Use 'dynamodb' or 'postgres'.")


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    try:
        init_db()
    except Exception as e:
        logging.error(f"Table setup FAILED: {e}")
        sys.exit(1)
