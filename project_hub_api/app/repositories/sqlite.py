"""
SQLite-backed implementations of the repository contracts.

Every method opens its own connection via ``get_connection`` and
closes it before returning, so repositories hold no state between
calls.  Constraint violations reported by SQLite (missing required
values, values outside a vocabulary, unknown project) are raised as
``PersistenceError``.
"""

import json
import sqlite3
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..core.db import from_db_datetime, get_connection, to_db_datetime, utcnow
from ..core.errors import PersistenceError
from ..schemas.event import EventRead, EventStatus
from ..schemas.incident import IncidentRead
from ..schemas.message import Attachment, MessageRead
from ..schemas.project import ProjectRead
from .base import EventRepository, IncidentRepository, MessageRepository, ProjectRepository


def _placeholders(values: List[Any]) -> str:
    return ", ".join("?" for _ in values)


def _execute_write(cursor: sqlite3.Cursor, sql: str, params: tuple) -> sqlite3.Cursor:
    try:
        return cursor.execute(sql, params)
    except sqlite3.DatabaseError as exc:
        # release the write lock before the error leaves the connection
        cursor.connection.rollback()
        raise PersistenceError(f"Store rejected write: {exc}") from exc


def _update_assignments(payload: Dict[str, Any]) -> tuple[list[str], list[Any]]:
    fields: list[str] = []
    values: list[Any] = []
    for key, value in payload.items():
        fields.append(f"{key} = ?")
        values.append(value)
    fields.append("updated_at = ?")
    values.append(to_db_datetime(utcnow()))
    return fields, values


class SQLiteEventRepository(EventRepository):
    _columns = "id, project_id, title, description, date, status, created_by, created_at, updated_at"

    @staticmethod
    def _to_entity(row: sqlite3.Row) -> EventRead:
        return EventRead(
            id=row["id"],
            project_id=row["project_id"],
            title=row["title"],
            description=row["description"],
            date=from_db_datetime(row["date"]),
            status=row["status"],
            created_by=row["created_by"],
            created_at=from_db_datetime(row["created_at"]),
            updated_at=from_db_datetime(row["updated_at"]),
        )

    def _fetch(self, cursor: sqlite3.Cursor, event_id: int) -> Optional[EventRead]:
        row = cursor.execute(
            f"SELECT {self._columns} FROM events WHERE id = ?", (event_id,)
        ).fetchone()
        return self._to_entity(row) if row else None

    async def create(self, payload: Dict[str, Any]) -> EventRead:
        now = to_db_datetime(utcnow())
        conn = get_connection()
        try:
            cursor = conn.cursor()
            _execute_write(
                cursor,
                """
                INSERT INTO events (project_id, title, description, date, status, created_by, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payload["project_id"],
                    payload["title"],
                    payload.get("description"),
                    to_db_datetime(payload["date"]),
                    payload.get("status") or EventStatus.PENDING.value,
                    payload["created_by"],
                    now,
                    now,
                ),
            )
            conn.commit()
            return self._fetch(cursor, cursor.lastrowid)
        finally:
            conn.close()

    async def find_by_id(self, event_id: int) -> Optional[EventRead]:
        conn = get_connection()
        try:
            return self._fetch(conn.cursor(), event_id)
        finally:
            conn.close()

    async def find_by_project(self, project_id: int) -> List[EventRead]:
        return await self.find_by_projects([project_id])

    async def find_by_projects(self, project_ids: List[int]) -> List[EventRead]:
        if not project_ids:
            return []
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {self._columns} FROM events WHERE project_id IN ({_placeholders(project_ids)})"
                " ORDER BY date ASC, id ASC",
                tuple(project_ids),
            ).fetchall()
            return [self._to_entity(row) for row in rows]
        finally:
            conn.close()

    async def mark_events_as_realized_up_to(self, cutoff: datetime) -> int:
        conn = get_connection()
        try:
            cursor = _execute_write(
                conn.cursor(),
                "UPDATE events SET status = ?, updated_at = ? WHERE status = ? AND date <= ?",
                (
                    EventStatus.REALIZED.value,
                    to_db_datetime(utcnow()),
                    EventStatus.PENDING.value,
                    to_db_datetime(cutoff),
                ),
            )
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()

    async def update(self, event_id: int, payload: Dict[str, Any]) -> Optional[EventRead]:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if payload:
                values = dict(payload)
                if values.get("date") is not None:
                    values["date"] = to_db_datetime(values["date"])
                fields, params = _update_assignments(values)
                params.append(event_id)
                _execute_write(cursor, f"UPDATE events SET {', '.join(fields)} WHERE id = ?", tuple(params))
                conn.commit()
            return self._fetch(cursor, event_id)
        finally:
            conn.close()

    async def delete(self, event_id: int) -> bool:
        conn = get_connection()
        try:
            cursor = _execute_write(conn.cursor(), "DELETE FROM events WHERE id = ?", (event_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()


class SQLiteIncidentRepository(IncidentRepository):
    _columns = (
        "id, project_id, task_id, title, description, type, priority, status,"
        " assigned_to, evidence, created_by, created_at, updated_at"
    )

    @staticmethod
    def _to_entity(row: sqlite3.Row) -> IncidentRead:
        return IncidentRead(
            id=row["id"],
            project_id=row["project_id"],
            task_id=row["task_id"],
            title=row["title"],
            description=row["description"],
            type=row["type"],
            priority=row["priority"],
            status=row["status"],
            assigned_to=row["assigned_to"],
            evidence=json.loads(row["evidence"]) if row["evidence"] else [],
            created_by=row["created_by"],
            created_at=from_db_datetime(row["created_at"]),
            updated_at=from_db_datetime(row["updated_at"]),
        )

    def _fetch(self, cursor: sqlite3.Cursor, incident_id: int) -> Optional[IncidentRead]:
        row = cursor.execute(
            f"SELECT {self._columns} FROM incidents WHERE id = ?", (incident_id,)
        ).fetchone()
        return self._to_entity(row) if row else None

    async def create(self, payload: Dict[str, Any]) -> IncidentRead:
        now = to_db_datetime(utcnow())
        conn = get_connection()
        try:
            cursor = conn.cursor()
            _execute_write(
                cursor,
                """
                INSERT INTO incidents (project_id, task_id, title, description, type, priority, status,
                                       assigned_to, evidence, created_by, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payload["project_id"],
                    payload.get("task_id"),
                    payload["title"],
                    payload.get("description"),
                    payload["type"],
                    payload["priority"],
                    payload["status"],
                    payload.get("assigned_to"),
                    json.dumps(payload.get("evidence") or []),
                    payload["created_by"],
                    now,
                    now,
                ),
            )
            conn.commit()
            return self._fetch(cursor, cursor.lastrowid)
        finally:
            conn.close()

    async def find_by_id(self, incident_id: int) -> Optional[IncidentRead]:
        conn = get_connection()
        try:
            return self._fetch(conn.cursor(), incident_id)
        finally:
            conn.close()

    async def find_by_project(self, project_id: int) -> List[IncidentRead]:
        return await self.find_by_projects([project_id])

    async def find_by_projects(self, project_ids: List[int]) -> List[IncidentRead]:
        if not project_ids:
            return []
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {self._columns} FROM incidents WHERE project_id IN ({_placeholders(project_ids)})"
                " ORDER BY created_at DESC, id DESC",
                tuple(project_ids),
            ).fetchall()
            return [self._to_entity(row) for row in rows]
        finally:
            conn.close()

    async def update(self, incident_id: int, payload: Dict[str, Any]) -> Optional[IncidentRead]:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if payload:
                values = dict(payload)
                if "evidence" in values:
                    values["evidence"] = json.dumps(values["evidence"] or [])
                fields, params = _update_assignments(values)
                params.append(incident_id)
                _execute_write(cursor, f"UPDATE incidents SET {', '.join(fields)} WHERE id = ?", tuple(params))
                conn.commit()
            return self._fetch(cursor, incident_id)
        finally:
            conn.close()

    async def delete(self, incident_id: int) -> bool:
        conn = get_connection()
        try:
            cursor = _execute_write(conn.cursor(), "DELETE FROM incidents WHERE id = ?", (incident_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()


class SQLiteMessageRepository(MessageRepository):
    _columns = "id, chat_id, sender_id, recipient_id, text, attachments, type, status, created_at, updated_at"

    @staticmethod
    def _to_entity(row: sqlite3.Row) -> MessageRead:
        attachments = json.loads(row["attachments"]) if row["attachments"] else []
        return MessageRead(
            id=row["id"],
            chat_id=row["chat_id"],
            sender_id=row["sender_id"],
            recipient_id=row["recipient_id"],
            text=row["text"],
            attachments=[Attachment(**item) for item in attachments],
            type=row["type"],
            status=row["status"],
            created_at=from_db_datetime(row["created_at"]),
            updated_at=from_db_datetime(row["updated_at"]),
        )

    def _fetch(self, cursor: sqlite3.Cursor, message_id: int) -> Optional[MessageRead]:
        row = cursor.execute(
            f"SELECT {self._columns} FROM messages WHERE id = ?", (message_id,)
        ).fetchone()
        return self._to_entity(row) if row else None

    async def create(self, payload: Dict[str, Any]) -> MessageRead:
        now = to_db_datetime(utcnow())
        attachments = [
            item.model_dump() if isinstance(item, Attachment) else dict(item)
            for item in payload.get("attachments") or []
        ]
        conn = get_connection()
        try:
            cursor = conn.cursor()
            _execute_write(
                cursor,
                """
                INSERT INTO messages (chat_id, sender_id, recipient_id, text, attachments, type, status, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payload["chat_id"],
                    payload["sender_id"],
                    payload.get("recipient_id"),
                    payload.get("text"),
                    json.dumps(attachments),
                    payload.get("type") or "text",
                    payload.get("status") or "sent",
                    now,
                    now,
                ),
            )
            conn.commit()
            return self._fetch(cursor, cursor.lastrowid)
        finally:
            conn.close()

    async def find_by_id(self, message_id: int) -> Optional[MessageRead]:
        conn = get_connection()
        try:
            return self._fetch(conn.cursor(), message_id)
        finally:
            conn.close()

    async def list_by_chat(self, chat_id: int, limit: int = 50, offset: int = 0) -> List[MessageRead]:
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {self._columns} FROM messages WHERE chat_id = ?"
                " ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?",
                (chat_id, limit, offset),
            ).fetchall()
            return [self._to_entity(row) for row in rows]
        finally:
            conn.close()

    async def count_by_chat(self, chat_id: int) -> int:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT COUNT(*) AS total FROM messages WHERE chat_id = ?", (chat_id,)
            ).fetchone()
            return row["total"]
        finally:
            conn.close()


class SQLiteProjectRepository(ProjectRepository):
    @staticmethod
    def _to_entity(cursor: sqlite3.Cursor, row: sqlite3.Row) -> ProjectRead:
        members = cursor.execute(
            "SELECT user_id FROM project_members WHERE project_id = ? ORDER BY user_id",
            (row["id"],),
        ).fetchall()
        return ProjectRead(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            owner_id=row["owner_id"],
            member_ids=[m["user_id"] for m in members],
            created_at=from_db_datetime(row["created_at"]),
            updated_at=from_db_datetime(row["updated_at"]),
        )

    def _fetch(self, cursor: sqlite3.Cursor, project_id: int) -> Optional[ProjectRead]:
        row = cursor.execute(
            "SELECT id, name, description, owner_id, created_at, updated_at FROM projects WHERE id = ?",
            (project_id,),
        ).fetchone()
        return self._to_entity(cursor, row) if row else None

    async def create(self, name: str, owner_id: int, description: Optional[str] = None) -> ProjectRead:
        now = to_db_datetime(utcnow())
        conn = get_connection()
        try:
            cursor = conn.cursor()
            _execute_write(
                cursor,
                "INSERT INTO projects (name, description, owner_id, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
                (name, description, owner_id, now, now),
            )
            project_id = cursor.lastrowid
            _execute_write(
                cursor,
                "INSERT INTO project_members (project_id, user_id) VALUES (?, ?)",
                (project_id, owner_id),
            )
            conn.commit()
            return self._fetch(cursor, project_id)
        finally:
            conn.close()

    async def find_by_id(self, project_id: int) -> Optional[ProjectRead]:
        conn = get_connection()
        try:
            return self._fetch(conn.cursor(), project_id)
        finally:
            conn.close()

    async def find_by_user(self, user_id: int) -> List[ProjectRead]:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            rows = cursor.execute(
                """
                SELECT id, name, description, owner_id, created_at, updated_at FROM projects
                WHERE owner_id = ?
                   OR id IN (SELECT project_id FROM project_members WHERE user_id = ?)
                ORDER BY id
                """,
                (user_id, user_id),
            ).fetchall()
            return [self._to_entity(cursor, row) for row in rows]
        finally:
            conn.close()

    async def add_member(self, project_id: int, user_id: int) -> Optional[ProjectRead]:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not cursor.execute("SELECT id FROM projects WHERE id = ?", (project_id,)).fetchone():
                return None
            _execute_write(
                cursor,
                "INSERT OR IGNORE INTO project_members (project_id, user_id) VALUES (?, ?)",
                (project_id, user_id),
            )
            conn.commit()
            return self._fetch(cursor, project_id)
        finally:
            conn.close()
