import os
import time
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from sqlalchemy.engine import Engine
from starlette.middleware.gzip import GZipMiddleware
from starlette.staticfiles import StaticFiles

# Load environment variables as early as possible
load_dotenv()

from .config import Settings, settings as default_settings
from .database import create_db_and_tables, create_db_engine
from .exceptions import (
    APIException,
    api_exception_handler,
    create_error_response,
    http_exception_handler,
    validation_exception_handler,
)
from .middleware import (
    ErrorHandlingMiddleware,
    LoggingMiddleware,
    RateLimitMiddleware,
    RequestSizeLimitMiddleware,
    SecurityMiddleware,
)
from .routers import appointments_router, dashboard_router, doctors_router, patients_router

logger = logging.getLogger(__name__)


def configure_logging(config: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format=config.LOG_FORMAT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: Settings = app.state.config
    logger.info(f"Starting {config.APP_NAME}...")
    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        app.state.engine = create_db_engine(config=config)
    app.state.started_at = time.time()

    create_db_and_tables(app.state.engine)
    logger.info("Database initialized successfully")

    if config.SEED_ON_STARTUP:
        from .manage_db import seed

        seed(app.state.engine)

    yield

    logger.info(f"Shutting down {config.APP_NAME}...")
    if owns_engine:
        app.state.engine.dispose()
        app.state.engine = None


def create_app(config: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Build the application.

    Passing ``engine`` hands an existing datastore to the app, which then
    leaves disposing it to the caller.
    """
    config = config or default_settings
    configure_logging(config)

    app = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        debug=config.DEBUG,
        lifespan=lifespan,
        docs_url=("/docs" if config.DOCS_ENABLED else None),
        redoc_url=("/redoc" if config.DOCS_ENABLED else None),
        openapi_url=("/openapi.json" if config.DOCS_ENABLED else None),
    )
    app.state.config = config
    app.state.engine = engine

    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(ErrorHandlingMiddleware, config=config)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityMiddleware)
    app.add_middleware(RequestSizeLimitMiddleware, config=config)
    app.add_middleware(RateLimitMiddleware, config=config)
    app.add_middleware(GZipMiddleware, minimum_size=config.GZIP_MIN_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins_list,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=config.allowed_methods_list,
        allow_headers=config.allowed_headers_list,
    )

    app.include_router(patients_router.router)
    app.include_router(doctors_router.router)
    app.include_router(appointments_router.router)
    app.include_router(dashboard_router.router)

    static_dir = config.STATIC_DIR
    index_file = os.path.join(static_dir, "index.html")
    if os.path.isdir(static_dir):
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    # Anything not matched above: unknown API paths get a JSON 404, the rest the dashboard
    @app.get("/{full_path:path}", include_in_schema=False)
    def spa_fallback(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            return JSONResponse(
                status_code=404,
                content=create_error_response("API endpoint not found", f"/{full_path}"),
            )
        if not os.path.isfile(index_file):
            return JSONResponse(status_code=404, content=create_error_response("Not found"))
        return FileResponse(index_file)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "hospital_api.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        workers=default_settings.WORKERS,
        log_level=default_settings.LOG_LEVEL.lower(),
    )
