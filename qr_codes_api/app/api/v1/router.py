"""
Top-level router for version 1 of the API.

Scan events live under their QR code, so both routers share the
``/qr-codes`` prefix.
"""

from fastapi import APIRouter

from .endpoints import qr_codes, scan_events

router = APIRouter()

router.include_router(qr_codes.router, prefix="/qr-codes", tags=["qr-codes"])
router.include_router(scan_events.router, prefix="/qr-codes", tags=["scan-events"])
