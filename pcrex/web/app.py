import logging
import os
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from pcrex.assets import EnvironmentConfig
from pcrex.assets import ImageResolver
from pcrex.assets import load_environment_config
from pcrex.database import Database
from pcrex.settings import DB_URL
from pcrex.settings import ENV
from pcrex.settings import UPLOADS_DIR
from pcrex.settings import WEB_SERVER_PORT
from pcrex.telemetry import get_tracer
from pcrex.telemetry import setup_web_server_telemetry
from pcrex.web.middleware import add_cache_headers

logger = logging.getLogger(__name__)


def create_app(environment: Optional[EnvironmentConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    `environment` defaults to the registry built from process settings.
    """
    app = FastAPI(title="PCREX Shop API", docs_url=None, redoc_url=None)

    environment = environment or load_environment_config()
    app.state.image_resolver = ImageResolver(environment)
    logger.info(
        f"Image references resolve against {environment.active_host()} "
        f"(target={environment.target}, cloud_prefix={environment.cloud_prefix or 'none'})"
    )

    if os.path.isdir(UPLOADS_DIR):
        app.mount("/uploads", StaticFiles(directory=UPLOADS_DIR), name="uploads")
    else:
        logger.warning("Could not mount /uploads -> %s (directory not available)", UPLOADS_DIR)

    # Telemetry
    app.state.metrics = setup_web_server_telemetry(app)
    app.state.tracer = get_tracer("pcrex.web_server")

    # Middleware
    app.middleware("http")(add_cache_headers)

    # Register routes
    from pcrex.web.routes.assets import router as assets_router
    from pcrex.web.routes.health import router as health_router
    from pcrex.web.routes.products import router as products_router

    app.include_router(products_router)
    app.include_router(assets_router)
    app.include_router(health_router)

    @app.on_event("startup")
    def _startup():
        if not hasattr(app.state, "db"):
            app.state.db = Database(db_url=DB_URL)

    return app


app = create_app()


def main():
    """Main entry point for the web server."""
    db_connected = False
    db_init_attempts = 0
    max_db_init_attempts = 10
    db_init_delay = 5

    while not db_connected and db_init_attempts < max_db_init_attempts:
        try:
            app.state.db = Database(db_url=DB_URL)
            app.state.db.ping()
            db_connected = True
            logger.info("Database connection successful.")
        except Exception as e:
            db_init_attempts += 1
            logger.warning(
                f"Database connection attempt {db_init_attempts} failed: {e}. "
                f"Retrying in {db_init_delay} seconds..."
            )
            time.sleep(db_init_delay)

    if not db_connected:
        logger.error("Failed to connect to the database after several attempts. Exiting.")
        return

    is_dev_mode = ENV in ("local", "dev")

    try:
        uvicorn.run(
            "pcrex.web.app:app",
            host="0.0.0.0",
            port=WEB_SERVER_PORT,
            reload=is_dev_mode,
            log_level="warning",
            reload_dirs=["./pcrex"] if is_dev_mode else None,
        )
    except Exception as e:
        logger.error(f"Error in web server: {str(e)}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
