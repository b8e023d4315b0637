"""
Pydantic schemas for QR code definitions.

A QR code record stores what is encoded (``content_value`` and an
optional free-form ``content_type`` tag such as ``url``, ``text`` or
``wifi``) together with the design settings needed to regenerate the
image.  The image itself is produced elsewhere; ``image_url`` is just a
reference to it.  None of the design fields are validated here.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, StrictBool, StrictFloat, StrictInt, model_validator

from .common import ApiModel, InputModel


# Fields a client may set on create and change on update.  They map
# one-to-one onto columns of the ``qr_codes`` table.
MUTABLE_FIELDS = (
    "label",
    "content_type",
    "content_value",
    "size",
    "error_correction_level",
    "foreground_color",
    "background_color",
    "logo_url",
    "style_json",
    "image_url",
    "is_favorite",
    "is_archived",
)

# Numbers and booleans in request bodies are taken strictly, so "yes"
# or 1 for a flag is rejected instead of coerced.
PixelSize = Union[StrictInt, StrictFloat]


class QrCodeCreate(InputModel):
    """Schema for creating a new QR code."""

    label: Optional[str] = Field(None, description="Display name, e.g. 'Wi-Fi at home'")
    content_type: Optional[str] = Field(None, description="Free-form tag: url, text, wifi, vcard...")
    content_value: str = Field(..., min_length=1, description="Encoded payload")
    size: Optional[PixelSize] = Field(None, description="Pixel size")
    error_correction_level: Optional[str] = Field(None, description="L, M, Q or H")
    foreground_color: Optional[str] = None
    background_color: Optional[str] = None
    logo_url: Optional[str] = None
    style_json: Optional[str] = Field(None, description="Extra design configuration, stored as is")
    image_url: Optional[str] = Field(None, description="Reference to an externally generated image")
    is_favorite: Optional[StrictBool] = None
    is_archived: Optional[StrictBool] = None


class QrCodeUpdate(InputModel):
    """Schema for a sparse update of an existing QR code.

    Only fields present in the request are written.  Presence is read
    from ``model_fields_set`` so an omitted field and a field equal to
    its default are never confused.  A request that sets nothing is
    rejected.
    """

    label: Optional[str] = None
    content_type: Optional[str] = None
    content_value: Optional[str] = Field(None, min_length=1)
    size: Optional[PixelSize] = None
    error_correction_level: Optional[str] = None
    foreground_color: Optional[str] = None
    background_color: Optional[str] = None
    logo_url: Optional[str] = None
    style_json: Optional[str] = None
    image_url: Optional[str] = None
    is_favorite: Optional[StrictBool] = None
    is_archived: Optional[StrictBool] = None

    @model_validator(mode="after")
    def require_some_field(self) -> "QrCodeUpdate":
        if not self.changes():
            raise ValueError("At least one field must be provided to update.")
        return self

    def changes(self) -> Dict[str, Any]:
        """Return ``{column: value}`` for the fields explicitly supplied."""
        return {name: getattr(self, name) for name in MUTABLE_FIELDS if name in self.model_fields_set}


class QrCodeRead(ApiModel):
    """Schema for reading a QR code."""

    id: str
    user_id: str
    label: Optional[str] = None
    content_type: Optional[str] = None
    content_value: str
    size: Optional[Union[int, float]] = None
    error_correction_level: Optional[str] = None
    foreground_color: Optional[str] = None
    background_color: Optional[str] = None
    logo_url: Optional[str] = None
    style_json: Optional[str] = None
    image_url: Optional[str] = None
    is_favorite: bool = False
    is_archived: bool = False
    created_at: datetime
    updated_at: datetime


class QrCodeData(ApiModel):
    qr_code: QrCodeRead


class QrCodeResult(ApiModel):
    """Envelope returned by create and update."""

    success: bool = True
    data: QrCodeData


class QrCodeListData(ApiModel):
    items: List[QrCodeRead]
    total: int


class QrCodeListResult(ApiModel):
    """Envelope returned by the list operation."""

    success: bool = True
    data: QrCodeListData
