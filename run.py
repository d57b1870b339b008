"""Entry point for the Geed API.

Starts the FastAPI application with Uvicorn.  Host, port and log level
come from the environment (``HOST``, ``PORT``, ``LOG_LEVEL``); see
``geed_api/app/core/config.py`` for all supported variables.

Usage:
    python run.py
"""
import logging

from uvicorn import Config, Server

from geed_api.app.core.config import settings


def make_config() -> Config:
    return Config(
        app="geed_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    server = Server(make_config())
    try:
        server.run()
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")


if __name__ == "__main__":
    main()
