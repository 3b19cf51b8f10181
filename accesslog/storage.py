"""Log Inserter: persists LogEntry records into the SQLite access_logs table."""

import logging
import sqlite3
from operator import attrgetter
from typing import Iterable

from accesslog.errors import StorageError
from accesslog.models import LogEntry

logger = logging.getLogger(__name__)

TABLE_NAME = "access_logs"

# (column, SQLite type, LogEntry attribute) in table order. Only these
# attributes are persisted; everything else on LogEntry is dropped.
COLUMNS = (
    ("BackendName", "TEXT", "backend_name"),
    ("BackendURLScheme", "TEXT", "backend_url.scheme"),
    ("BackendURLHost", "TEXT", "backend_url.host"),
    ("ClientAddr", "TEXT", "client_addr"),
    ("ClientHost", "TEXT", "client_host"),
    ("ClientPort", "TEXT", "client_port"),
    ("ClientUsername", "TEXT", "client_username"),
    ("DownstreamStatus", "INTEGER", "downstream_status"),
    ("DownstreamContentSize", "INTEGER", "downstream_content_size"),
    ("Duration", "INTEGER", "duration"),
    ("FrontendName", "TEXT", "frontend_name"),
    ("OriginContentSize", "INTEGER", "origin_content_size"),
    ("OriginDuration", "INTEGER", "origin_duration"),
    ("RequestAddr", "TEXT", "request_addr"),
    ("RequestContentSize", "INTEGER", "request_content_size"),
    ("RequestCount", "INTEGER", "request_count"),
    ("RequestHost", "TEXT", "request_host"),
    ("RequestMethod", "TEXT", "request_method"),
    ("RequestPath", "TEXT", "request_path"),
    ("RequestPort", "TEXT", "request_port"),
    ("RequestProtocol", "TEXT", "request_protocol"),
    ("StartUTC", "TEXT", "start_utc"),
    ("RequestReferer", "TEXT", "request_referer"),
    ("RequestUserAgent", "TEXT", "request_user_agent"),
    ("Time", "TEXT", "time"),
)

CREATE_TABLE_SQL = "CREATE TABLE IF NOT EXISTS {table} (id INTEGER PRIMARY KEY, {columns})".format(
    table=TABLE_NAME,
    columns=", ".join(f"{name} {kind}" for name, kind, _ in COLUMNS),
)

INSERT_SQL = "INSERT INTO {table} ({columns}) VALUES ({placeholders})".format(
    table=TABLE_NAME,
    columns=", ".join(name for name, _, _ in COLUMNS),
    placeholders=", ".join("?" for _ in COLUMNS),
)

_project = attrgetter(*(attr for _, _, attr in COLUMNS))


def project(entry: LogEntry) -> tuple:
    """Return the row values for *entry* in column order."""
    return _project(entry)


def connect(db_path: str) -> sqlite3.Connection:
    """Open (creating if absent) the database at *db_path*."""
    try:
        return sqlite3.connect(db_path)
    except sqlite3.Error as err:
        raise StorageError(f"unable to open sqlite database {db_path}: {err}") from err


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Create the access_logs table unless it already exists."""
    try:
        conn.execute(CREATE_TABLE_SQL)
        conn.commit()
    except sqlite3.Error as err:
        raise StorageError(f"unable to create table {TABLE_NAME}: {err}") from err
    logger.debug("Schema ready for table %s", TABLE_NAME)


def insert_logs(logs: Iterable[LogEntry], db_path: str) -> int:
    """Insert one row per entry, in order. Returns the number of rows inserted.

    Rows are not wrapped in a single transaction: when a row fails, the rows
    before it stay committed and StorageError reports the failing position.
    """
    conn = connect(db_path)
    inserted = 0
    try:
        ensure_schema(conn)
        for position, entry in enumerate(logs):
            try:
                conn.execute(INSERT_SQL, project(entry))
            except (sqlite3.Error, ValueError, OverflowError) as err:
                conn.commit()
                raise StorageError(
                    f"unable to insert row {position}: {err}", position=position
                ) from err
            inserted += 1
        conn.commit()
    except sqlite3.Error as err:
        raise StorageError(f"unable to commit to {db_path}: {err}") from err
    finally:
        conn.close()

    logger.info("Inserted %d rows into %s", inserted, TABLE_NAME)
    return inserted
