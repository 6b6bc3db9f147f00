"""
PostgreSQL connection helper.
Provides get_db() for the postgres event store backend.
"""

import logging
from typing import Optional

import psycopg2
from psycopg2.extras import RealDictCursor

from announcer import config


def get_db(database_url: Optional[str] = None):
    """
    Returns a new psycopg2 connection with dictionary-based row access.

    Usage:
        with get_db() as conn:
            with conn.cursor() as cur:
                cur.execute(...)

    Args:
        database_url (str, optional): Overrides DATABASE_URL from the environment.

    Returns:
        psycopg2.extensions.connection: A connection object with RealDictCursor factory.

    Raises:
        RuntimeError: If no database URL is configured.
        psycopg2.Error: If connection fails.
    """
    url = database_url or config.DATABASE_URL
    if not url:
        raise RuntimeError("DATABASE_URL is not set. Please set the environment variable.")

    try:
        conn = psycopg2.connect(url)
        # Rows come back as plain dicts keyed by column name
        conn.cursor_factory = RealDictCursor
        return conn
    except Exception as e:
        logging.error(f"Error connecting to database: {e}")
        # Re-raise the exception so the caller knows the connection failed
        raise
