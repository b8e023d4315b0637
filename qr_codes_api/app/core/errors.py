"""
Typed errors raised by the service layer.

Services raise :class:`ActionError` at the point where a problem is
detected and never catch it themselves.  The FastAPI application turns
it into an error envelope with the matching HTTP status (see
``main.create_app``).
"""

from typing import Any, Dict

from fastapi import status


UNAUTHORIZED = "UNAUTHORIZED"
NOT_FOUND = "NOT_FOUND"
VALIDATION = "VALIDATION"

STATUS_CODES: Dict[str, int] = {
    UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    NOT_FOUND: status.HTTP_404_NOT_FOUND,
    VALIDATION: status.HTTP_400_BAD_REQUEST,
}


class ActionError(Exception):
    """A per-call failure with a machine readable ``code``."""

    def __init__(self, code: str, message: str) -> None:
        if code not in STATUS_CODES:
            raise ValueError(f"Unknown error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.code]

    def to_dict(self) -> Dict[str, Any]:
        """Render the error envelope returned to API clients."""
        return {"success": False, "error": {"code": self.code, "message": self.message}}

    def __repr__(self) -> str:
        return f"ActionError(code={self.code!r}, message={self.message!r})"
