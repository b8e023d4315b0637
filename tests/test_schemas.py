"""Tests for request schema validation."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from qr_codes_api.app.schemas.qr_code import QrCodeCreate, QrCodeRead, QrCodeUpdate
from qr_codes_api.app.schemas.scan_event import ScanEventCreate


def test_create_accepts_camel_case_payload():
    data = QrCodeCreate.model_validate(
        {"contentValue": "https://example.com", "contentType": "url", "isFavorite": True, "size": 256}
    )
    assert data.content_value == "https://example.com"
    assert data.content_type == "url"
    assert data.is_favorite is True
    assert data.size == 256


def test_create_requires_non_empty_content_value():
    with pytest.raises(ValidationError):
        QrCodeCreate.model_validate({})
    with pytest.raises(ValidationError):
        QrCodeCreate(content_value="")


def test_create_rejects_explicit_null():
    with pytest.raises(ValidationError):
        QrCodeCreate.model_validate({"contentValue": "x", "label": None})


def test_update_without_fields_is_rejected():
    with pytest.raises(ValidationError, match="At least one field must be provided"):
        QrCodeUpdate.model_validate({})


def test_update_ignores_unknown_keys_when_counting_fields():
    with pytest.raises(ValidationError, match="At least one field must be provided"):
        QrCodeUpdate.model_validate({"id": "abc", "colour": "red"})


def test_update_changes_only_contains_supplied_fields():
    update = QrCodeUpdate.model_validate({"isFavorite": False, "label": "Home"})
    assert update.changes() == {"label": "Home", "is_favorite": False}


def test_update_rejects_empty_content_value():
    with pytest.raises(ValidationError):
        QrCodeUpdate(content_value="")


def test_update_rejects_null_instead_of_clearing():
    with pytest.raises(ValidationError):
        QrCodeUpdate.model_validate({"logoUrl": None})


def test_read_model_serializes_with_camel_case_keys():
    now = datetime.now(timezone.utc)
    record = QrCodeRead(id="1", user_id="u", content_value="x", created_at=now, updated_at=now)
    dumped = record.model_dump(by_alias=True, exclude_none=True)
    assert dumped["contentValue"] == "x"
    assert dumped["isFavorite"] is False
    assert "imageUrl" not in dumped


def test_scan_event_normalises_scanned_at_to_utc():
    local = datetime(2025, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=3)))
    event = ScanEventCreate(qr_code_id="q", scanned_at=local)
    assert event.scanned_at == datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
    assert event.scanned_at.tzinfo == timezone.utc


def test_scan_event_requires_qr_code_id():
    with pytest.raises(ValidationError):
        ScanEventCreate(qr_code_id="")


@pytest.mark.parametrize(
    "payload",
    [
        {"isFavorite": "yes"},
        {"isFavorite": "true"},
        {"isArchived": 1},
        {"size": True},
        {"size": "256"},
    ],
)
def test_update_rejects_wrongly_typed_values(payload):
    with pytest.raises(ValidationError):
        QrCodeUpdate.model_validate(payload)


def test_create_keeps_integer_and_float_sizes_apart():
    assert isinstance(QrCodeCreate(content_value="x", size=300).size, int)
    assert QrCodeCreate(content_value="x", size=300.5).size == 300.5
