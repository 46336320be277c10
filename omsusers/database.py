"""SQLite-backed storage: connection, schema, transactions and a generic
table gateway shared by the repositories."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Generic, TypeVar

from .access import Permission, Role, RolePermission, UserPermission, UserRole
from .entities import BrokerAdmin, Employee, Health, Investor, Trader, User
from .organisation import (
    AuditLog,
    Branch,
    BrokerHouse,
    TraderTeam,
    TraderTeamMember,
    TraderTws,
    Tws,
)

log = logging.getLogger(__name__)

_RECORD_TYPES = (
    Health,
    User,
    Trader,
    Investor,
    Employee,
    BrokerAdmin,
    BrokerHouse,
    Branch,
    Tws,
    TraderTws,
    TraderTeam,
    TraderTeamMember,
    Role,
    Permission,
    RolePermission,
    UserRole,
    UserPermission,
    AuditLog,
)

sqlite3.register_adapter(datetime, lambda value: value.isoformat(sep=" "))
sqlite3.register_converter("DATETIME", lambda raw: datetime.fromisoformat(raw.decode()))
sqlite3.register_converter("BOOLEAN", lambda raw: raw not in (b"0", b""))

R = TypeVar("R")


class StoreError(Exception):
    """A storage operation failed."""


class RecordNotFoundError(StoreError):
    """No record matched the lookup."""


class FetchError(StoreError):
    """A record could not be fetched."""


@dataclass(frozen=True)
class Page:
    """A page request: one-based page token and page size (0 means no limit)."""

    page_token: int = 0
    page_size: int = 0

    def offset(self) -> int:
        """Number of rows to skip before this page."""
        return (self.page_token - 1) * self.page_size


def _column_sql(name: str, default: Any) -> str:
    """Column definition derived from the field's name and zero-value default."""
    if name == "id":
        return "id INTEGER PRIMARY KEY AUTOINCREMENT"
    if isinstance(default, bool):
        kind, literal = "BOOLEAN", str(int(default))
    elif isinstance(default, int):
        kind, literal = "INTEGER", str(default)
    elif isinstance(default, str):
        kind, literal = "TEXT", "'" + default.replace("'", "''") + "'"
    elif name == "created_at":
        return "created_at DATETIME DEFAULT CURRENT_TIMESTAMP"
    else:
        return f"{name} DATETIME"
    return f"{name} {kind} NOT NULL DEFAULT {literal}"


def _table_sql(record_type: type) -> str:
    record_fields = fields(record_type)
    columns = [_column_sql(f.name, f.default) for f in record_fields]
    if "deleted_at" not in {f.name for f in record_fields}:
        columns.append("deleted_at DATETIME")
    return f"CREATE TABLE IF NOT EXISTS {record_type.table} ({', '.join(columns)})"


class Database:
    """A connection to an SQLite database holding the user-management tables."""

    def __init__(self, path: str = ":memory:") -> None:
        self.path = str(path)
        try:
            self._conn = sqlite3.connect(
                self.path,
                detect_types=sqlite3.PARSE_DECLTYPES,
                isolation_level=None,
            )
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        self._conn.row_factory = sqlite3.Row
        self._depth = 0
        log.info("db initialization done")

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def create_schema(self) -> None:
        """Create every table that does not exist yet."""
        for record_type in _RECORD_TYPES:
            self.execute(_table_sql(record_type))

    def execute(self, sql: str, params: Any = ()) -> sqlite3.Cursor:
        """Run one statement and return its cursor."""
        bound = params if isinstance(params, Mapping) else tuple(params)
        try:
            return self._conn.execute(sql, bound)
        except sqlite3.Error as exc:
            log.error("%s", exc)
            raise StoreError(str(exc)) from exc

    def query(self, sql: str, params: Any = ()) -> list[dict[str, Any]]:
        """Run a query and return its rows as dictionaries."""
        cursor = self.execute(sql, params)
        try:
            return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as exc:
            log.error("%s", exc)
            raise StoreError(str(exc)) from exc

    @contextmanager
    def transaction(self) -> Iterator[Database]:
        """Run the block in a transaction; nested blocks use savepoints."""
        savepoint = f"sp{self._depth}"
        self.execute("BEGIN" if self._depth == 0 else f"SAVEPOINT {savepoint}")
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self.execute("ROLLBACK")
            else:
                self.execute(f"ROLLBACK TO {savepoint}")
                self.execute(f"RELEASE {savepoint}")
            raise
        self._depth -= 1
        self.execute("COMMIT" if self._depth == 0 else f"RELEASE {savepoint}")

    def close(self) -> None:
        """Close the connection."""
        self._conn.close()


class HealthRepository:
    """Checks that the database answers."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def ping(self) -> None:
        """Run a trivial query; raise StoreError if the database does not answer."""
        self.db.query("SELECT 1 AS result")


class TableGateway(Generic[R]):
    """Generic row access for one record type and its table."""

    def __init__(self, db: Database, record_type: type[R]) -> None:
        self.db = db
        self.record_type = record_type
        self.table: str = record_type.table  # type: ignore[attr-defined]
        self._columns = tuple(f.name for f in fields(record_type))  # type: ignore[arg-type]

    def _values(self, record: R) -> dict[str, Any]:
        return {name: getattr(record, name) for name in self._columns}

    def _to_record(self, row: Mapping[str, Any]) -> R:
        return self.record_type(**{k: v for k, v in row.items() if k in self._columns})

    def insert(self, record: R) -> None:
        """Insert the record, filling in its id and default creation time."""
        values = self._values(record)
        if not values.get("id"):
            values.pop("id", None)
        if "created_at" in values and values["created_at"] is None:
            del values["created_at"]
        names = ", ".join(values)
        marks = ", ".join("?" for _ in values)
        cursor = self.db.execute(
            f"INSERT INTO {self.table} ({names}) VALUES ({marks})", list(values.values())
        )
        record.id = cursor.lastrowid  # type: ignore[attr-defined]
        if "created_at" in self._columns and record.created_at is None:  # type: ignore[attr-defined]
            rows = self.db.query(
                f"SELECT created_at FROM {self.table} WHERE id = ?", (record.id,)  # type: ignore[attr-defined]
            )
            record.created_at = rows[0]["created_at"]  # type: ignore[attr-defined]

    def insert_returning_id(self, record: R) -> int:
        """Insert the record and return its new id."""
        self.insert(record)
        return record.id  # type: ignore[attr-defined]

    def update_where(self, record: R, where: str, params: Any = ()) -> int:
        """Write every column but id and created_at to matching rows; return the row count."""
        values = {
            name: value
            for name, value in self._values(record).items()
            if name not in ("id", "created_at")
        }
        assignments = ", ".join(f"{name} = ?" for name in values)
        cursor = self.db.execute(
            f"UPDATE {self.table} SET {assignments} WHERE {where}",
            [*values.values(), *params],
        )
        return cursor.rowcount

    def soft_delete_where(self, record: R, where: str, params: Any = ()) -> int:
        """Stamp deleted_at on the record and matching rows; return the row count."""
        record.deleted_at = datetime.now()  # type: ignore[attr-defined]
        cursor = self.db.execute(
            f"UPDATE {self.table} SET deleted_at = ? WHERE {where}",
            [record.deleted_at, *params],  # type: ignore[attr-defined]
        )
        return cursor.rowcount

    def list_page(self, page: Page) -> tuple[list[R], int]:
        """Return one page of live rows, newest first, and the count of all live rows."""
        if page.page_size < 0:
            raise StoreError("LIMIT must not be negative")
        offset = page.offset()
        if offset < 0:
            raise StoreError("OFFSET must not be negative")
        limit = page.page_size or -1
        rows = self.db.query(
            f"SELECT * FROM {self.table} WHERE deleted_at IS NULL "
            "ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?",
            (limit, offset),
        )
        count = self.db.query(
            f"SELECT COUNT(*) AS total FROM {self.table} WHERE deleted_at IS NULL"
        )[0]["total"]
        return [self._to_record(row) for row in rows], count

    def fetch_one(self, where: str, params: Any = ()) -> R:
        """Return the first row matching the condition."""
        rows = self.db.query(f"SELECT * FROM {self.table} WHERE {where} LIMIT 1", params)
        if not rows:
            raise RecordNotFoundError(f"no {self.table} record matches")
        return self._to_record(rows[0])

    def exists(self, where: str, params: Any = ()) -> bool:
        """Tell whether any row matches the condition."""
        rows = self.db.query(
            f"SELECT EXISTS(SELECT 1 FROM {self.table} WHERE {where}) AS found", params
        )
        return bool(rows[0]["found"])