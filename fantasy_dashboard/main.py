"""
FastAPI application entry point.

This module creates and configures the FastAPI application.
Using an application factory pattern (create_app function) because:
- Easier to test with different configurations
- Explicit about initialization order
- Can create multiple app instances if needed (e.g., for testing)

For local development:
    uvicorn fantasy_dashboard.main:app --reload --port 3000

Or run the module directly, which honours PORT:
    python -m fantasy_dashboard.main
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.routes import health, stats, uploads
from .config.settings import get_settings
from .core.league.ingestion import IngestionPipeline
from .infrastructure.spreadsheet.loader import open_workbook
from .infrastructure.sqlite.client import DatabaseError, create_sqlite_database
from .infrastructure.sqlite.repositories import ResultsRepository

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Open the database and create tables (failure here stops the server)
    - Load the seed workbook if one is configured (failure here is logged)

    Shutdown:
    - Close the database
    """
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    logger.info(
        "Fantasy League Dashboard starting",
        extra={"version": settings.api_version, "database": settings.database_path}
    )

    database = create_sqlite_database(settings.database_path)
    try:
        database.create_schema()
    except DatabaseError as e:
        logger.error("Failed to initialize database", extra={"error": str(e)})
        database.close()
        raise

    pipeline = IngestionPipeline(
        store=ResultsRepository(database),
        open_workbook=open_workbook,
        weekly_results_sheet=settings.weekly_results_sheet,
        coach_lookup_sheet=settings.coach_lookup_sheet,
    )

    app.state.database = database
    app.state.pipeline = pipeline

    await asyncio.to_thread(pipeline.load_seed, settings.seed_workbook_path)

    logger.info("Database initialized")

    yield

    # Shutdown
    database.close()
    logger.info("Fantasy League Dashboard shutting down")


def create_app() -> FastAPI:
    """
    Application factory.

    Creates and configures the FastAPI application.
    This function is called once at startup (in production) or
    multiple times (in tests with different configurations).
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="""
        Standings and head-to-head statistics for a fantasy football league.

        ## Workflow

        1. **Upload results**: `POST /api/upload`
           - Multipart field `excelFile` with `weekly_results` and `coach_lookup` sheets
           - Replaces all previously loaded data

        2. **Browse stats**: `GET /api/standings`, `/api/head-to-head`,
           `/api/weekly-performance`, `/api/yearly-summary`
           - Regular-season games only

        3. **Filters**: `GET /api/coaches`, `GET /api/years`
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        stats.router,
        prefix="/api",
        tags=["Stats"],
    )

    app.include_router(
        uploads.router,
        prefix="/api",
        tags=["Uploads"],
    )

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")
    else:
        logger.warning("Static directory not found", extra={"path": str(static_dir)})

    @app.get("/", include_in_schema=False)
    async def root():
        """Serve the dashboard page, or API pointers if it isn't installed."""
        index = static_dir / "index.html"
        if index.is_file():
            return FileResponse(index)
        return {
            "message": "Fantasy League Dashboard API",
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render every HTTP error as {"error": message}."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all exception handler.

        Log the full error server-side but return a generic message.
        """
        logger.error(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
            exc_info=exc,
        )

        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    logger.info(
        "FastAPI application created",
        extra={
            "title": settings.api_title,
            "version": settings.api_version,
        }
    )

    return app


# Create the application instance
# This is what uvicorn will import
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "fantasy_dashboard.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
