"""
Pydantic schemas for scan events.

A scan event records one scan of a QR code.  Events are append-only:
there is no update or delete schema.  ``ip_hash`` must already be
hashed by the caller; raw addresses are never stored.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ..core.timestamps import as_utc
from .common import ApiModel, InputModel


class ScanEventBody(InputModel):
    """Request body for recording a scan; the QR code id comes from the path."""

    scanned_at: Optional[datetime] = Field(None, description="Defaults to the time of the request")
    user_agent: Optional[str] = Field(None, description="Browser/OS of the scanning device")
    ip_hash: Optional[str] = Field(None, description="Pre-hashed client address")
    location_hint: Optional[str] = Field(None, description="Rough location, e.g. city or country")

    @field_validator("scanned_at")
    @classmethod
    def normalise_scanned_at(cls, value: datetime) -> datetime:
        return as_utc(value)


class ScanEventCreate(ScanEventBody):
    """Schema for adding a scan event to a QR code."""

    qr_code_id: str = Field(..., min_length=1)


class ScanEventRead(ApiModel):
    """Schema for reading a scan event."""

    id: str
    qr_code_id: str
    scanned_at: datetime
    user_agent: Optional[str] = None
    ip_hash: Optional[str] = None
    location_hint: Optional[str] = None


class ScanEventData(ApiModel):
    event: ScanEventRead


class ScanEventResult(ApiModel):
    success: bool = True
    data: ScanEventData


class ScanEventListData(ApiModel):
    items: List[ScanEventRead]
    total: int


class ScanEventListResult(ApiModel):
    success: bool = True
    data: ScanEventListData
