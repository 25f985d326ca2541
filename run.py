"""Entry point for the Product Catalog API.

Loads a ``.env`` file from the current directory (if present) and
serves the application with Uvicorn.  Host and port come from the
``HOST`` and ``PORT`` settings; defaults are ``0.0.0.0`` and ``3000``.

Usage:
    python run.py
"""
import logging

from dotenv import load_dotenv

# Must run before the application package reads its settings.
load_dotenv()

from uvicorn import Config, Server  # noqa: E402

from product_catalog_api.app.core.config import settings  # noqa: E402
from product_catalog_api.app.main import app  # noqa: E402


def main() -> None:
    """Start the API server and block until it exits."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Server running on http://%s:%s", settings.host, settings.port)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
