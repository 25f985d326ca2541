"""
Main entrypoint for the Product Catalog API.

This module assembles the FastAPI application, sets up logging, error
handlers and the product store, and includes the versioned routers.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``.  Importing the app
here makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn product_catalog_api.app.main:app --reload

The store lives on ``app.state.store`` for as long as the process
runs.  Its contents are lost on restart.
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import log_requests, setup_logging
from .services.product_store import ProductStore


def create_app(app_settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the ones read from the environment.
    store : Optional[ProductStore]
        Store to serve.  A new empty store is created when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    # Logging first so that everything below can log.
    setup_logging(app_settings.log_level, app_settings.log_file)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, debug=app_settings.debug)
    app.state.settings = app_settings
    app.state.store = store if store is not None else ProductStore()

    app.middleware("http")(log_requests)
    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "Hello World! Server is running smoothly."

    @app.get("/health", tags=["health"])
    async def health(request: Request) -> Dict[str, Any]:
        return {"status": "ok", "products": len(request.app.state.store)}

    # Products are served from /api/products.
    app.include_router(v1_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
