"""SQLite implementation of the member repository."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, date, datetime
from enum import Enum
from pathlib import Path
from typing import TypeVar

from household_profiler.domain.encoding import (
    decode_income_sources,
    decode_strings,
    encode_sequence,
)
from household_profiler.domain.members import HouseholdMember, MemberPayload
from household_profiler.domain.value_objects import (
    ACTIVITY_LEVEL_ALIASES,
    ActivityLevel,
    Role,
    Sex,
)
from household_profiler.exceptions import MemberNotFoundError, PersistenceError
from household_profiler.logging_config import get_logger
from household_profiler.repositories.interfaces import MemberRepository

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)

# Same layout as SQLite's datetime('now') plus microseconds, so text order
# is time order across rows stamped by the column default and by the app.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _short_details(error: Exception) -> str:
    first_line = str(error).splitlines()[0] if str(error) else ""
    return f"{type(error).__name__}: {first_line}"[:200]


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime(TIMESTAMP_FORMAT)


def _parse_timestamp(value: str) -> datetime:
    # Stored timestamps are UTC, with or without an explicit offset.
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class SQLiteDatabase:
    """SQLite database connection manager.

    One connection is shared by every caller; ``transaction()`` serialises
    units of work on it so one caller's rollback never discards another's
    pending writes.
    """

    def __init__(
        self, path: str | Path = ":memory:", check_same_thread: bool = True
    ) -> None:
        self._path = str(path)
        self._check_same_thread = check_same_thread
        self._connection: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    @property
    def path(self) -> str:
        return self._path

    def get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        with self._lock:
            if self._connection is None:
                self._connection = sqlite3.connect(
                    self._path, check_same_thread=self._check_same_thread
                )
                self._connection.row_factory = sqlite3.Row
            return self._connection

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run one unit of work with exclusive use of the connection.

        Commits when the block exits normally and rolls back on any
        exception, which is re-raised.
        """
        with self._lock:
            conn = self.get_connection()
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise
            else:
                conn.commit()

    def initialize(self) -> None:
        """Create the member table."""
        with self.transaction() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS household_members (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    role TEXT NOT NULL,
                    photo TEXT,
                    date_of_birth TEXT,
                    sex TEXT NOT NULL,
                    height REAL,
                    weight REAL,
                    activity_level TEXT NOT NULL,
                    allergens TEXT,
                    exclusions TEXT,
                    likes TEXT,
                    dislikes TEXT,
                    medications TEXT,
                    income_sources TEXT,
                    medical_notes TEXT,
                    created_at TEXT NOT NULL DEFAULT (datetime('now')),
                    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
                );
                CREATE INDEX IF NOT EXISTS idx_household_members_created
                    ON household_members(created_at);
                """
            )

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None


class SQLiteMemberRepository(MemberRepository):
    """Member rows in the ``household_members`` table.

    Sequence fields are stored as JSON text; decoding a corrupted column
    yields an empty list rather than failing the read. Unknown enum values
    and unparseable dates in stored rows fall back to defaults.
    """

    def __init__(
        self,
        database: SQLiteDatabase,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._db = database
        self._clock = clock

    def list_members(self) -> list[HouseholdMember]:
        try:
            with self._db.transaction() as conn:
                rows = conn.execute(
                    "SELECT * FROM household_members ORDER BY created_at ASC, id ASC"
                ).fetchall()
        except sqlite3.Error as e:
            raise self._persistence_error("list", "Failed to fetch members", e) from e
        return [self._row_to_member(row) for row in rows]

    def get_member(self, member_id: int) -> HouseholdMember | None:
        try:
            with self._db.transaction() as conn:
                row = self._select(conn, member_id)
        except sqlite3.Error as e:
            raise self._persistence_error("get", "Failed to fetch member", e) from e
        if row is None:
            return None
        return self._row_to_member(row)

    def create_member(self, payload: MemberPayload) -> HouseholdMember:
        now = _format_timestamp(self._clock())
        try:
            with self._db.transaction() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO household_members (
                        name, role, photo, date_of_birth, sex, height, weight,
                        activity_level, allergens, exclusions, likes, dislikes,
                        medications, income_sources, medical_notes,
                        created_at, updated_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (*self._payload_params(payload), now, now),
                )
                row = self._select(conn, cursor.lastrowid)
        except sqlite3.Error as e:
            raise self._persistence_error("create", "Failed to create member", e) from e

        if row is None:
            raise PersistenceError(
                "Failed to create member", details="inserted row not readable"
            )
        return self._row_to_member(row)

    def update_member(self, member_id: int, payload: MemberPayload) -> HouseholdMember:
        try:
            with self._db.transaction() as conn:
                cursor = conn.execute(
                    """
                    UPDATE household_members SET
                        name = ?,
                        role = ?,
                        photo = ?,
                        date_of_birth = ?,
                        sex = ?,
                        height = ?,
                        weight = ?,
                        activity_level = ?,
                        allergens = ?,
                        exclusions = ?,
                        likes = ?,
                        dislikes = ?,
                        medications = ?,
                        income_sources = ?,
                        medical_notes = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        *self._payload_params(payload),
                        _format_timestamp(self._clock()),
                        member_id,
                    ),
                )
                if cursor.rowcount == 0:
                    raise MemberNotFoundError(member_id)
                row = self._select(conn, member_id)
        except sqlite3.Error as e:
            raise self._persistence_error("update", "Failed to update member", e) from e

        if row is None:
            raise MemberNotFoundError(member_id)
        return self._row_to_member(row)

    def delete_member(self, member_id: int) -> HouseholdMember:
        try:
            with self._db.transaction() as conn:
                row = self._select(conn, member_id)
                if row is None:
                    raise MemberNotFoundError(member_id)
                conn.execute("DELETE FROM household_members WHERE id = ?", (member_id,))
        except sqlite3.Error as e:
            raise self._persistence_error("delete", "Failed to delete member", e) from e
        return self._row_to_member(row)

    def count_members(self) -> int:
        try:
            with self._db.transaction() as conn:
                row = conn.execute("SELECT COUNT(*) FROM household_members").fetchone()
        except sqlite3.Error as e:
            raise self._persistence_error("count", "Failed to count members", e) from e
        return int(row[0])

    def _select(self, conn: sqlite3.Connection, member_id: int | None) -> sqlite3.Row | None:
        return conn.execute(
            "SELECT * FROM household_members WHERE id = ?", (member_id,)
        ).fetchone()

    def _persistence_error(
        self, operation: str, message: str, error: Exception
    ) -> PersistenceError:
        logger.error(
            "persistence_error",
            operation=operation,
            database=self._db.path,
            error=str(error),
            exc_info=error,
        )
        return PersistenceError(message, details=_short_details(error))

    def _payload_params(self, payload: MemberPayload) -> tuple[object, ...]:
        return (
            payload.name,
            payload.role.value,
            payload.photo,
            payload.date_of_birth.isoformat() if payload.date_of_birth else None,
            payload.sex.value,
            payload.height,
            payload.weight,
            payload.activity_level.value,
            encode_sequence(payload.allergens),
            encode_sequence(payload.exclusions),
            encode_sequence(payload.likes),
            encode_sequence(payload.dislikes),
            encode_sequence(payload.medications),
            encode_sequence(payload.income_sources),
            payload.medical_notes,
        )

    def _stored_enum(
        self,
        row: sqlite3.Row,
        column: str,
        enum_type: type[E],
        default: E,
        aliases: dict[str, E] | None = None,
    ) -> E:
        value = row[column]
        if aliases and value in aliases:
            return aliases[value]
        try:
            return enum_type(value)
        except ValueError:
            logger.warning(
                "stored_value_invalid",
                member_id=row["id"],
                column=column,
                fallback=default.value,
            )
            return default

    def _stored_date(self, row: sqlite3.Row) -> date | None:
        value = row["date_of_birth"]
        if not value:
            return None
        try:
            return date.fromisoformat(value)
        except (TypeError, ValueError):
            logger.warning(
                "stored_value_invalid", member_id=row["id"], column="date_of_birth"
            )
            return None

    def _stored_timestamps(self, row: sqlite3.Row) -> tuple[datetime, datetime]:
        try:
            return (
                _parse_timestamp(row["created_at"]),
                _parse_timestamp(row["updated_at"]),
            )
        except (TypeError, ValueError) as e:
            raise self._persistence_error(
                "read", "Stored member row is unreadable", e
            ) from e

    def _row_to_member(self, row: sqlite3.Row) -> HouseholdMember:
        created_at, updated_at = self._stored_timestamps(row)
        return HouseholdMember(
            id=row["id"],
            name=row["name"],
            role=self._stored_enum(row, "role", Role, Role.OTHER),
            photo=row["photo"],
            date_of_birth=self._stored_date(row),
            sex=self._stored_enum(row, "sex", Sex, Sex.OTHER),
            height=row["height"],
            weight=row["weight"],
            activity_level=self._stored_enum(
                row,
                "activity_level",
                ActivityLevel,
                ActivityLevel.SEDENTARY,
                aliases=ACTIVITY_LEVEL_ALIASES,
            ),
            allergens=decode_strings(row["allergens"]),
            exclusions=decode_strings(row["exclusions"]),
            likes=decode_strings(row["likes"]),
            dislikes=decode_strings(row["dislikes"]),
            medications=decode_strings(row["medications"]),
            income_sources=decode_income_sources(row["income_sources"]),
            medical_notes=row["medical_notes"],
            created_at=created_at,
            updated_at=updated_at,
        )
