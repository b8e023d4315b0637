"""
Scan event endpoints for API v1.

Scan events are nested under the QR code they belong to.  Only the
owner of the QR code may record or read its scans.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from qr_codes_api.app.core.security import RequestContext, get_request_context
from qr_codes_api.app.schemas.scan_event import (
    ScanEventBody,
    ScanEventCreate,
    ScanEventListResult,
    ScanEventResult,
)
from qr_codes_api.app.services.scan_event_service import ScanEventService

router = APIRouter()


@router.post(
    "/{qr_code_id}/scan-events",
    response_model=ScanEventResult,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Record a scan of a QR code",
)
async def add_scan_event(
    qr_code_id: str,
    event_in: Optional[ScanEventBody] = None,
    context: RequestContext = Depends(get_request_context),
) -> ScanEventResult:
    """Record a scan.  The body is optional; ``scannedAt`` defaults to now."""
    fields = event_in.model_dump(exclude_unset=True) if event_in is not None else {}
    data = ScanEventCreate(qr_code_id=qr_code_id, **fields)
    return await ScanEventService.add_scan_event(data, context)


@router.get(
    "/{qr_code_id}/scan-events",
    response_model=ScanEventListResult,
    response_model_exclude_none=True,
    summary="List scans of a QR code",
)
async def list_scan_events(
    qr_code_id: str,
    context: RequestContext = Depends(get_request_context),
) -> ScanEventListResult:
    return await ScanEventService.list_scan_events(qr_code_id, context)
