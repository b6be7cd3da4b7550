"""Entry point that serves the Project Hub API with uvicorn.

Host, port and log level are read from the ``API_HOST``, ``API_PORT``
and ``LOG_LEVEL`` environment variables.  Defaults are ``0.0.0.0``,
``8000`` and ``info``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server


async def main() -> None:
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(
        app="project_hub_api.app.main:app",
        host=host,
        port=port,
        reload=False,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
    await Server(config).serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
