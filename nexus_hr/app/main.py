"""
Main entrypoint for the NexusHR API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  ``create_app`` builds the app around a
``KeyValueStore``; when none is given the store configured in settings
is created.  The module level ``app`` can be served directly::

    uvicorn nexus_hr.app.main:app --reload
"""

from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.logging_config import setup_logging
from .core.storage import KeyValueStore, create_store


def create_app(store: Optional[KeyValueStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[KeyValueStore]
        Persistence backend shared by all requests.  Defaults to the
        backend selected by ``settings.storage_backend``.
    """
    # Logging first so store construction can log migrations.
    setup_logging(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.store = store if store is not None else create_store(settings)

    app.include_router(v1_router, prefix="/api/v1")
    return app


app = create_app()
