from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sized

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
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
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_placeholders(values: Sized) -> str:
    """``%s,%s,...`` for an IN (...) clause; callers must not pass an empty list."""
    if not len(values):
        raise ValueError("IN clause needs at least one value")
    return ",".join(["%s"] * len(values))
