"""
Main entrypoint for the Geed API.

This module assembles the FastAPI application: logging, CORS, error
handlers, the data store and the versioned routers.  ``create_app``
builds and configures the app, which is then instantiated at module
import time as ``app`` so it can be served with::

    uvicorn geed_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .stores import DataStore


logger = logging.getLogger(__name__)


def create_app(store: Optional[DataStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[DataStore]
        Data store handle to serve requests from.  Defaults to a
        ``DataStore`` that probes MongoDB using ``settings`` and falls
        back to the in‑memory store.

    Returns
    -------
    FastAPI
        A configured application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.store = store or DataStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Select the backend before the first request arrives.
        await app.state.store.initialize()
        logger.info("Storage backend: %s", app.state.store.backend_name)

    return app


app = create_app()
