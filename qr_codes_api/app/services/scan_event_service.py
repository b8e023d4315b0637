"""
Service layer for scan events.

Scan events are only reachable through the QR code they belong to, so
both operations resolve ownership of that QR code first and fail with
``NOT_FOUND`` before touching the events table otherwise.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid

from ..core.db import get_connection
from ..core.security import RequestContext, require_user
from ..core.timestamps import to_db_timestamp, utc_now
from ..schemas.scan_event import (
    ScanEventCreate,
    ScanEventData,
    ScanEventListData,
    ScanEventListResult,
    ScanEventRead,
    ScanEventResult,
)
from .qr_code_service import QrCodeService


class ScanEventService:
    """Service for recording and listing scans of a QR code."""

    @classmethod
    async def add_scan_event(cls, data: ScanEventCreate, context: RequestContext) -> ScanEventResult:
        """Record a scan of a QR code owned by the current user.

        ``scanned_at`` defaults to now when the caller does not supply it.
        """
        logger = logging.getLogger(__name__)
        user = require_user(context)
        await QrCodeService.get_owned_qr_code(data.qr_code_id, user.id)

        event_id = str(uuid.uuid4())
        scanned_at = data.scanned_at if data.scanned_at is not None else utc_now()
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO qr_scan_events (id, qr_code_id, scanned_at, user_agent, ip_hash, location_hint)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    event_id,
                    data.qr_code_id,
                    to_db_timestamp(scanned_at),
                    data.user_agent,
                    data.ip_hash,
                    data.location_hint,
                ),
            )
            conn.commit()
            row = conn.execute("SELECT * FROM qr_scan_events WHERE id = ?", (event_id,)).fetchone()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to record scan for QR code %s: %s", data.qr_code_id, e)
            raise
        finally:
            conn.close()
        logger.info("User %s recorded scan %s for QR code %s", user.id, event_id, data.qr_code_id)
        return ScanEventResult(data=ScanEventData(event=ScanEventRead.model_validate(dict(row))))

    @classmethod
    async def list_scan_events(cls, qr_code_id: str, context: RequestContext) -> ScanEventListResult:
        """Return every scan event of a QR code owned by the current user, oldest first."""
        user = require_user(context)
        await QrCodeService.get_owned_qr_code(qr_code_id, user.id)

        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM qr_scan_events WHERE qr_code_id = ? ORDER BY scanned_at ASC, id ASC",
                (qr_code_id,),
            ).fetchall()
        finally:
            conn.close()
        items = [ScanEventRead.model_validate(dict(row)) for row in rows]
        return ScanEventListResult(data=ScanEventListData(items=items, total=len(items)))
