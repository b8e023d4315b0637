"""
Main entrypoint for the QR Codes API.

This module assembles the FastAPI application, sets up logging,
registers error rendering and includes versioned routers.  The app is
instantiated at import time as ``app`` so it can be served with::

    uvicorn qr_codes_api.app.main:app --reload
"""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import VALIDATION, ActionError
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


def _format_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """Join pydantic error entries into one human readable message."""
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid input."


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI instance ready to be served.
    """
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.include_router(v1_router, prefix="/api/v1")

    @app.exception_handler(ActionError)
    async def action_error_handler(request: Request, exc: ActionError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ActionError(VALIDATION, _format_validation_errors(exc.errors()))
        logger.info("Rejected %s %s: %s", request.method, request.url.path, error.message)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(ValidationError)
    async def model_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        error = ActionError(VALIDATION, _format_validation_errors(exc.errors()))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies pending migrations.
        init_db()

    return app


app = create_app()
