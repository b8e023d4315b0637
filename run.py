"""Entry point that serves the QR Codes API with uvicorn.

Host and port are read from the ``API_HOST`` and ``API_PORT``
environment variables (defaults ``0.0.0.0`` and ``8000``).

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server

from qr_codes_api.app.core.config import settings
from qr_codes_api.app.main import app


def build_server() -> Server:
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    return Server(config)


async def main() -> None:
    await build_server().serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
