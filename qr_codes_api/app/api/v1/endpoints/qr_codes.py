"""
QR code endpoints for API v1.

Authenticated users create, update and list their own QR codes.  There
is no delete endpoint: codes are archived instead.  Responses omit
fields that have no value.
"""

from fastapi import APIRouter, Depends, Query, status

from qr_codes_api.app.core.security import RequestContext, get_request_context
from qr_codes_api.app.schemas.qr_code import (
    QrCodeCreate,
    QrCodeListResult,
    QrCodeResult,
    QrCodeUpdate,
)
from qr_codes_api.app.services.qr_code_service import QrCodeService

router = APIRouter()


@router.post(
    "",
    response_model=QrCodeResult,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a QR code",
)
async def create_qr_code(
    qr_code_in: QrCodeCreate,
    context: RequestContext = Depends(get_request_context),
) -> QrCodeResult:
    return await QrCodeService.create_qr_code(qr_code_in, context)


@router.get(
    "",
    response_model=QrCodeListResult,
    response_model_exclude_none=True,
    summary="List the caller's QR codes",
)
async def list_qr_codes(
    include_archived: bool = Query(False, alias="includeArchived"),
    favorites_only: bool = Query(False, alias="favoritesOnly"),
    context: RequestContext = Depends(get_request_context),
) -> QrCodeListResult:
    """Return the caller's QR codes.

    Archived codes are excluded unless ``includeArchived=true``;
    ``favoritesOnly=true`` keeps only favourites.
    """
    return await QrCodeService.list_qr_codes(
        context,
        include_archived=include_archived,
        favorites_only=favorites_only,
    )


@router.patch(
    "/{qr_code_id}",
    response_model=QrCodeResult,
    response_model_exclude_none=True,
    summary="Update some fields of a QR code",
)
async def update_qr_code(
    qr_code_id: str,
    qr_code_in: QrCodeUpdate,
    context: RequestContext = Depends(get_request_context),
) -> QrCodeResult:
    """Apply a sparse update.

    Only the fields present in the body change.  A body without any
    known field is rejected with a validation error.  Returns 404 when
    the code does not exist or belongs to another user.
    """
    return await QrCodeService.update_qr_code(qr_code_id, qr_code_in, context)
