"""Entry point serving the Notes API.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables; defaults are ``127.0.0.1`` and ``8000``.  The store location
and log level come from ``notes_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from notes_api.app.core.config import settings
from notes_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Serving %s on %s:%s", settings.project_name, host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
