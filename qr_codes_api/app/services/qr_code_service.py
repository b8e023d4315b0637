"""
Service layer for QR code definitions.

Every operation first resolves the signed-in user from the request
context.  Records are owner-scoped: a QR code belonging to another user
is reported exactly like a missing one (``NOT_FOUND``) so that callers
cannot probe for other users' ids.

Each call opens its own connection and performs its reads and writes as
separate round-trips; nothing is held between calls.  All queries use
parameterized statements.  Column names in generated SQL only ever come
from ``MUTABLE_FIELDS``.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from typing import List

from ..core.db import get_connection
from ..core.errors import NOT_FOUND, VALIDATION, ActionError
from ..core.security import RequestContext, require_user
from ..core.timestamps import next_timestamp, to_db_timestamp, utc_now
from ..schemas.qr_code import (
    MUTABLE_FIELDS,
    QrCodeCreate,
    QrCodeData,
    QrCodeListData,
    QrCodeListResult,
    QrCodeRead,
    QrCodeResult,
    QrCodeUpdate,
)


class QrCodeService:
    """Service class for creating, updating and listing QR codes."""

    @classmethod
    async def get_owned_qr_code(cls, qr_code_id: str, user_id: str) -> QrCodeRead:
        """Fetch a QR code that matches both ``qr_code_id`` and ``user_id``.

        Raises
        ------
        ActionError
            ``NOT_FOUND`` if the record does not exist or belongs to
            someone else.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM qr_codes WHERE id = ? AND user_id = ?",
                (qr_code_id, user_id),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            logging.getLogger(__name__).info(
                "QR code %s not found for user %s", qr_code_id, user_id
            )
            raise ActionError(NOT_FOUND, "QR code not found.")
        return cls._row_to_qr_code(row)

    @classmethod
    async def create_qr_code(cls, data: QrCodeCreate, context: RequestContext) -> QrCodeResult:
        """Insert a new QR code owned by the current user.

        The id is a fresh UUID4, ``created_at`` and ``updated_at`` share
        the same timestamp, and the favourite/archived flags default to
        ``False``.
        """
        logger = logging.getLogger(__name__)
        user = require_user(context)
        now = to_db_timestamp(utc_now())
        record = {field: getattr(data, field) for field in MUTABLE_FIELDS}
        record["is_favorite"] = bool(data.is_favorite)
        record["is_archived"] = bool(data.is_archived)
        record.update(
            id=str(uuid.uuid4()),
            user_id=user.id,
            created_at=now,
            updated_at=now,
        )
        columns = ", ".join(record)
        placeholders = ", ".join("?" for _ in record)
        conn = get_connection()
        try:
            conn.execute(
                f"INSERT INTO qr_codes ({columns}) VALUES ({placeholders})",
                tuple(record.values()),
            )
            conn.commit()
            row = conn.execute("SELECT * FROM qr_codes WHERE id = ?", (record["id"],)).fetchone()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to create QR code for user %s: %s", user.id, e)
            raise
        finally:
            conn.close()
        logger.info("User %s created QR code %s", user.id, record["id"])
        return QrCodeResult(data=QrCodeData(qr_code=cls._row_to_qr_code(row)))

    @classmethod
    async def update_qr_code(
        cls,
        qr_code_id: str,
        data: QrCodeUpdate,
        context: RequestContext,
    ) -> QrCodeResult:
        """Apply a sparse update to a QR code owned by the current user.

        Only the fields present in ``data`` are written; everything else
        keeps its stored value.  ``updated_at`` always moves forward,
        even when two updates land within the same clock tick.

        Raises
        ------
        ActionError
            ``VALIDATION`` when ``data`` sets no field (checked before
            the database is touched), ``NOT_FOUND`` when the QR code is
            missing or not owned by the caller.
        """
        logger = logging.getLogger(__name__)
        user = require_user(context)
        changes = data.changes()
        if not changes:
            raise ActionError(VALIDATION, "At least one field must be provided to update.")
        current = await cls.get_owned_qr_code(qr_code_id, user.id)

        changes["updated_at"] = to_db_timestamp(next_timestamp(current.updated_at))
        assignments = ", ".join(f"{column} = ?" for column in changes)
        conn = get_connection()
        try:
            cursor = conn.execute(
                f"UPDATE qr_codes SET {assignments} WHERE id = ? AND user_id = ?",
                (*changes.values(), qr_code_id, user.id),
            )
            if cursor.rowcount == 0:
                raise ActionError(NOT_FOUND, "QR code not found.")
            conn.commit()
            row = conn.execute("SELECT * FROM qr_codes WHERE id = ?", (qr_code_id,)).fetchone()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to update QR code %s: %s", qr_code_id, e)
            raise
        finally:
            conn.close()
        logger.info(
            "User %s updated QR code %s (%s)",
            user.id,
            qr_code_id,
            ", ".join(sorted(data.changes())),
        )
        return QrCodeResult(data=QrCodeData(qr_code=cls._row_to_qr_code(row)))

    @classmethod
    async def list_qr_codes(
        cls,
        context: RequestContext,
        include_archived: bool = False,
        favorites_only: bool = False,
    ) -> QrCodeListResult:
        """Return the current user's QR codes.

        Archived codes are hidden unless ``include_archived`` is set;
        ``favorites_only`` narrows the result to favourites.  Both
        filters apply together.  Ordered by creation time.
        """
        user = require_user(context)
        where_clauses: List[str] = ["user_id = ?"]
        params: list = [user.id]
        if not include_archived:
            where_clauses.append("is_archived = 0")
        if favorites_only:
            where_clauses.append("is_favorite = 1")
        query = (
            "SELECT * FROM qr_codes WHERE "
            + " AND ".join(where_clauses)
            + " ORDER BY created_at ASC, id ASC"
        )
        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
        finally:
            conn.close()
        items = [cls._row_to_qr_code(row) for row in rows]
        logging.getLogger(__name__).debug("User %s listed %s QR codes", user.id, len(items))
        return QrCodeListResult(data=QrCodeListData(items=items, total=len(items)))

    @staticmethod
    def _row_to_qr_code(row: sqlite3.Row) -> QrCodeRead:
        return QrCodeRead.model_validate(dict(row))
