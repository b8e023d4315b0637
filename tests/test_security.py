"""Tests for access tokens and the authentication guard."""

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from qr_codes_api.app.core import security
from qr_codes_api.app.core.config import settings
from qr_codes_api.app.core.errors import UNAUTHORIZED, ActionError
from qr_codes_api.app.core.security import (
    RequestContext,
    create_access_token,
    decode_access_token,
    get_request_context,
    require_user,
)


def _bearer(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_token_round_trip_carries_subject():
    claims = decode_access_token(create_access_token("user-1"))
    assert claims["sub"] == "user-1"
    assert isinstance(claims["exp"], int)


def test_tampered_token_is_rejected():
    header, payload, signature = create_access_token("user-1").split(".")
    forged = create_access_token("user-2").split(".")[1]
    assert decode_access_token(f"{header}.{forged}.{signature}") is None


def test_token_signed_with_other_key_is_rejected(monkeypatch):
    token = create_access_token("user-1")
    monkeypatch.setattr(settings, "secret_key", "another-secret")
    assert decode_access_token(token) is None


def test_expired_token_is_rejected(monkeypatch):
    token = create_access_token("user-1", expires_delta=60)
    real_time = security.time.time
    monkeypatch.setattr(security.time, "time", lambda: real_time() + 3600)
    assert decode_access_token(token) is None


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c", "!!.??.**"])
def test_malformed_tokens_are_rejected(token):
    assert decode_access_token(token) is None


def test_request_context_from_valid_token():
    context = get_request_context(_bearer(create_access_token("user-9")))
    assert context.user is not None
    assert context.user.id == "user-9"


def test_request_context_without_credentials_is_anonymous():
    assert get_request_context(None).user is None
    assert get_request_context(_bearer("garbage")).user is None


def test_require_user_returns_user():
    assert require_user(RequestContext.for_user("u")).id == "u"


def test_require_user_rejects_anonymous_context():
    with pytest.raises(ActionError) as excinfo:
        require_user(RequestContext())
    assert excinfo.value.code == UNAUTHORIZED
    assert excinfo.value.status_code == 401
