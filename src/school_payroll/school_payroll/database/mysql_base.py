from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import parse_time_of_day
from ..common.money import to_decimal
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); everything executed inside is one transaction.

    Commits when the block exits normally, rolls back when it raises.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns arrive as time, timedelta (the connector default) or 'HH:MM:SS' strings."""
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, (seconds % 3600) // 60, seconds % 60)
    return parse_time_of_day(value)


def optional_decimal(value: Any) -> Optional[Decimal]:
    return None if value is None else to_decimal(value)


def decode_json(value: Any, default: Any) -> Any:
    """JSON columns come back as str/bytes with mysql-connector; NULL means default."""
    if value is None or value == "":
        return default
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value)
    return value
