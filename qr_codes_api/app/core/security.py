"""
Authentication helpers: signed access tokens and the request context.

Tokens are JWT-style strings (``header.payload.signature``) signed with
HMAC-SHA256 and base64url encoded.  The ``sub`` claim holds the user id
and ``exp`` the expiry as a UNIX timestamp.  The secret key comes from
the application settings.

Identity is resolved once per request into a :class:`RequestContext`,
which is passed explicitly into every service call.  The context may
carry no user at all; :func:`require_user` is the guard each operation
runs first.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .errors import UNAUTHORIZED, ActionError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated user as seen by the service layer."""

    id: str


@dataclass(frozen=True)
class RequestContext:
    """Per-request state handed to service operations.

    ``user`` is ``None`` for anonymous requests.  Tests build contexts
    directly instead of going through a token.
    """

    user: Optional[CurrentUser] = None

    @classmethod
    def for_user(cls, user_id: str) -> "RequestContext":
        return cls(user=CurrentUser(id=user_id))


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(user_id: str, expires_delta: Optional[int] = None) -> str:
    """Create a signed token whose subject is ``user_id``.

    Parameters
    ----------
    user_id : str
        Stable identifier of the user; becomes the ``sub`` claim.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        A token to send as ``Authorization: Bearer <token>``.
    """
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    claims = {"sub": user_id, "exp": int(time.time()) + exp_seconds}
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a token and return its claims.

    Returns ``None`` when the token is malformed, the signature does
    not match, or the token has expired.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(_sign(signing_input, settings.secret_key), actual_sig):
            return None
        claims = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except ValueError:
        # covers binascii.Error, UnicodeDecodeError and json.JSONDecodeError
        return None
    if not isinstance(claims, dict):
        return None
    exp = claims.get("exp")
    if not isinstance(exp, int) or exp < int(time.time()):
        return None
    return claims


security = HTTPBearer(auto_error=False)


def get_request_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> RequestContext:
    """FastAPI dependency building the request context from the bearer token.

    A missing or invalid token produces an anonymous context; rejecting
    it is left to :func:`require_user` inside the operation.
    """
    if credentials is None:
        return RequestContext()
    claims = decode_access_token(credentials.credentials)
    if not claims:
        logger.info("Rejected invalid or expired access token")
        return RequestContext()
    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        return RequestContext()
    return RequestContext.for_user(subject)


def require_user(context: RequestContext) -> CurrentUser:
    """Return the signed-in user or raise ``UNAUTHORIZED``."""
    if context.user is None:
        raise ActionError(UNAUTHORIZED, "You must be signed in to perform this action.")
    return context.user
