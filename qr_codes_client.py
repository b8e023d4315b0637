"""QR Codes API client.

A thin wrapper around the HTTP API served by ``qr_codes_api``.  It uses
the ``requests`` library and exposes one method per operation:

* :meth:`QrCodesAPI.create_qr_code` – create a QR code definition.
* :meth:`QrCodesAPI.update_qr_code` – change some fields of a QR code.
* :meth:`QrCodesAPI.list_qr_codes` – list the caller's QR codes.
* :meth:`QrCodesAPI.add_scan_event` – record a scan of a QR code.
* :meth:`QrCodesAPI.list_scan_events` – list the scans of a QR code.

Every method returns a ``(data, error)`` tuple.  On success ``data`` is
the ``data`` member of the response envelope and ``error`` is ``None``.
On failure ``data`` is ``None`` and ``error`` is a dictionary with keys
``status_code``, ``code`` and ``message``.

Payload dictionaries use the API's camelCase keys, e.g.
``{"contentValue": "https://example.com", "isFavorite": True}``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]


class QrCodesAPI:
    """Client for the QR codes API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Root URL of the API including the version prefix,
                e.g. ``https://example.com/api/v1``.
            api_key: Access token.  If set, it is sent as
                ``Authorization: Bearer <api_key>`` with every request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
    ) -> Result:
        """Perform an HTTP request and unwrap the response envelope."""
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            error = self._error_from_response(exc)
            logger.error("API request failed (%s): %s", error["status_code"], error["message"])
            return None, error
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "code": None, "message": str(exc)}
        try:
            payload = response.json()
        except ValueError:
            return None, {
                "status_code": response.status_code,
                "code": None,
                "message": "Response body is not valid JSON",
            }
        if not isinstance(payload, dict):
            return None, {
                "status_code": response.status_code,
                "code": None,
                "message": "Response body is not a JSON object",
            }
        return payload.get("data"), None

    @staticmethod
    def _error_from_response(exc: requests.HTTPError) -> Dict[str, Any]:
        response = exc.response
        if response is None:
            return {"status_code": None, "code": None, "message": str(exc)}
        code = None
        message = ""
        try:
            body = response.json()
        except ValueError:
            message = response.text
        else:
            error = body.get("error") if isinstance(body, dict) else None
            if isinstance(error, dict):
                code = error.get("code")
                message = error.get("message") or ""
            elif isinstance(body, dict):
                message = str(body.get("detail") or body)
        return {"status_code": response.status_code, "code": code, "message": message or str(exc)}

    # ------------------------------------------------------------------
    # QR code operations
    # ------------------------------------------------------------------
    def create_qr_code(self, payload: Dict[str, Any]) -> Result:
        """Create a QR code.  ``payload`` must contain ``contentValue``.

        Returns:
            A tuple ``(data, error)`` where ``data["qrCode"]`` is the
            created record.
        """
        return self._request("POST", "/qr-codes", json_body=payload)

    def update_qr_code(self, qr_code_id: str, changes: Dict[str, Any]) -> Result:
        """Update only the fields present in ``changes``."""
        return self._request("PATCH", f"/qr-codes/{qr_code_id}", json_body=changes)

    def list_qr_codes(self, *, include_archived: bool = False, favorites_only: bool = False) -> Result:
        """List QR codes.  ``data`` contains ``items`` and ``total``."""
        params = {
            "includeArchived": str(include_archived).lower(),
            "favoritesOnly": str(favorites_only).lower(),
        }
        return self._request("GET", "/qr-codes", params=params)

    # ------------------------------------------------------------------
    # Scan event operations
    # ------------------------------------------------------------------
    def add_scan_event(
        self,
        qr_code_id: str,
        *,
        scanned_at: Optional[datetime] = None,
        user_agent: Optional[str] = None,
        ip_hash: Optional[str] = None,
        location_hint: Optional[str] = None,
    ) -> Result:
        """Record a scan.  Arguments left as ``None`` are not sent."""
        body: Dict[str, Any] = {}
        if scanned_at is not None:
            body["scannedAt"] = scanned_at.isoformat()
        if user_agent is not None:
            body["userAgent"] = user_agent
        if ip_hash is not None:
            body["ipHash"] = ip_hash
        if location_hint is not None:
            body["locationHint"] = location_hint
        return self._request("POST", f"/qr-codes/{qr_code_id}/scan-events", json_body=body)

    def list_scan_events(self, qr_code_id: str) -> Result:
        """List scans of a QR code.  ``data`` contains ``items`` and ``total``."""
        return self._request("GET", f"/qr-codes/{qr_code_id}/scan-events")
