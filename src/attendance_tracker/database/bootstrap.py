from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


# The target database comes from settings, so any CREATE DATABASE / USE in the file is dropped.
_SKIPPED = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)
_QUOTES = {"'", '"', "`"}


def split_sql_statements(sql: str) -> List[str]:
    """Split a schema script on ';', ignoring '--' comments and quoted text."""
    statements: List[str] = []
    buf: List[str] = []
    quote: Optional[str] = None
    i = 0

    while i < len(sql):
        ch = sql[i]
        if quote:
            buf.append(ch)
            if ch == "\\" and i + 1 < len(sql):
                buf.append(sql[i + 1])
                i += 1
            elif ch == quote:
                quote = None
        elif sql.startswith("--", i):
            newline = sql.find("\n", i)
            i = len(sql) if newline < 0 else newline
            continue
        elif ch in _QUOTES:
            quote = ch
            buf.append(ch)
        elif ch == ";":
            statements.append("".join(buf).strip())
            buf.clear()
        else:
            buf.append(ch)
        i += 1

    statements.append("".join(buf).strip())
    return [s for s in statements if s and not _SKIPPED.match(s)]


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    statements = split_sql_statements(Path(schema_path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to database %s", conn_factory.database)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
