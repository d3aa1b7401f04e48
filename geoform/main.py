"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from geoform.api.v1.submissions import router as submissions_router
from geoform.api.v1.submissions import submission_validation_error
from geoform.config import settings
from geoform.database import engine
from geoform.geocoding.client import GoogleGeocoder
from geoform.sheets.client import SheetsMirror

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.dev.ConsoleRenderer() if settings.environment == "development"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        getattr(logging, settings.log_level.upper(), logging.INFO)
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the third-party clients once per worker and release them on shutdown."""
    app.state.geocoder = GoogleGeocoder(
        api_key=settings.google_api_key,
        timeout=settings.geocoding_timeout_seconds,
    )
    app.state.mirror = SheetsMirror(
        spreadsheet_id=settings.spreadsheet_id,
        sheet_range=settings.sheet_range,
        credentials_file=settings.google_credentials_file,
        timeout=settings.sheets_timeout_seconds,
    )
    logger.info(
        "app_starting",
        environment=settings.environment,
        sheet_range=settings.sheet_range,
        mirror_configured=bool(settings.spreadsheet_id),
    )
    yield
    app.state.geocoder.close()
    await engine.dispose()
    logger.info("app_shutting_down")


app = FastAPI(
    title="Geoform API",
    description="Geocodes form submissions, stores them and mirrors them to a spreadsheet",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(submissions_router)
app.add_exception_handler(RequestValidationError, submission_validation_error)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Geoform API",
        "version": "0.1.0",
        "status": "running",
    }


def run() -> None:
    """Serve with one worker process per CPU; uvicorn replaces workers that die."""
    logger.info("server_starting", port=settings.port, workers=settings.web_concurrency)
    uvicorn.run(
        "geoform.main:app",
        host="0.0.0.0",
        port=settings.port,
        workers=settings.web_concurrency,
    )


if __name__ == "__main__":
    run()
