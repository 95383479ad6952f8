from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Mapping

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql stays usable whatever the configured database name is.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings."""
    buf: list[str] = []
    quote: str | None = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: Mapping) -> None:
    config = DBConfig.from_mapping(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping, *, schema_path: str | Path = SCHEMA_PATH) -> int:
    """Create the database if needed and run every statement of schema.sql.

    Returns the number of statements executed.
    """
    ensure_database_exists(db_config)
    sql = _strip_line_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    executed = 0
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            executed += 1
        conn.commit()
    finally:
        conn.close()

    logger.info("Applied %d schema statements from %s", executed, schema_path)
    return executed


def list_tables(db_config: Mapping) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
