"""Entry point for the Employee Manager API.

Starts the FastAPI application with uvicorn.  Configuration such as
``DATABASE_URL``, ``API_HOST``, ``PORT`` and ``LOG_LEVEL`` can be placed
in a ``.env`` file in the working directory; it is loaded before the
application settings are read.

Usage:
    python run.py
"""
import asyncio
import logging

from dotenv import load_dotenv
from uvicorn import Config, Server

# Settings are read at import time, so the .env file goes first.
load_dotenv()

from employee_manager_api.app.core.config import settings  # noqa: E402
from employee_manager_api.app.main import app  # noqa: E402


async def run_api() -> None:
    """Serve the API on ``settings.api_host``:``settings.port``."""
    # log_config=None keeps uvicorn from replacing the handlers set up by create_app.
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.port,
        reload=False,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    logging.getLogger(__name__).info("Starting Employee Manager API on port %s", settings.port)
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
