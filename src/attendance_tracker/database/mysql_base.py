from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, TypeVar

from .connection import DatabaseConnection

Row = Dict[str, Any]
T = TypeVar("T")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """One connection, one transaction: commit when the block exits cleanly, else roll back."""
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


def fetch_one(cur, mapper: Callable[[Row], T]) -> Optional[T]:
    row = cur.fetchone()
    return mapper(row) if row else None


def fetch_all(cur, mapper: Callable[[Row], T]) -> List[T]:
    return [mapper(row) for row in cur.fetchall() or []]


def _seconds_of_day(value: Any) -> int:
    # mysql-connector hands TIME columns back as timedelta; other drivers use time or str.
    if isinstance(value, timedelta):
        return int(value.total_seconds()) % 86400
    if isinstance(value, (time, datetime)):
        return value.hour * 3600 + value.minute * 60 + value.second
    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid TIME value: {value!r}")
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return int(parts[0]) * 3600 + int(parts[1]) * 60 + seconds
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def time_column(value: Any, *, with_seconds: bool = False) -> Optional[str]:
    """TIME column -> "HH:mm" (shift definitions) or "HH:mm:ss" (punch times)."""
    if value is None:
        return None
    total = _seconds_of_day(value)
    hh, mm = divmod(total // 60, 60)
    if with_seconds:
        return f"{hh:02d}:{mm:02d}:{total % 60:02d}"
    return f"{hh:02d}:{mm:02d}"
