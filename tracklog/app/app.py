# This file loads env variables and must thus be imported before anything else.
from . import env_loader  # noqa: F401
from .env_loader import get_current_environment

import os
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tracklog.errors import BatchWriteError, SyncError
from .dependencies import get_session_manager
from .models import EnvironmentResponse
from .routers import (
    cycles_router,
    workouts_router,
    day_entries_router,
    series_sets_router,
    progression_router,
    session_router,
)

"""FastAPI application setup for the training log API.

Exposes the core's mutation and query operations over HTTP: cycles,
workouts, day entries with their series/sets, progression analysis, and the
caller's sync session. Configures CORS, logging and the mapping of store
failures to HTTP errors.
"""

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    # Cancel every open subscription on shutdown.
    get_session_manager().end_all()


app = FastAPI(lifespan=lifespan)
app.include_router(cycles_router)
app.include_router(workouts_router)
app.include_router(day_entries_router)
app.include_router(series_sets_router)
app.include_router(progression_router)
app.include_router(session_router)
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Configure basic logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(filename)s:%(lineno)d",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# Configure the logging for the API itself if the user specifies it.
if "LOG_LEVEL" in os.environ:
    match os.environ["LOG_LEVEL"].upper():
        case "DEBUG":
            log_level = logging.DEBUG
        case "INFO":
            log_level = logging.INFO
        case "WARNING":
            log_level = logging.WARNING
        case "ERROR":
            log_level = logging.ERROR
        case "CRITICAL":
            log_level = logging.CRITICAL
        case _:
            raise ValueError(f"Invalid log level: {os.environ['LOG_LEVEL']}")
    logging.getLogger("tracklog").setLevel(log_level)


@app.exception_handler(BatchWriteError)
async def batch_write_error_handler(request: Request, exc: BatchWriteError) -> JSONResponse:
    """A rejected batch wrote nothing; report it whole."""
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(SyncError)
async def sync_error_handler(request: Request, exc: SyncError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health")
@app.options("/health")
def health_check(response: Response) -> dict[str, str]:
    """Health check endpoint that returns 200 status with CORS from anywhere."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "*"
    return {"status": "healthy"}


@app.get("/environment", response_model=EnvironmentResponse)
def get_environment() -> EnvironmentResponse:
    """Get the current environment configuration."""
    environment = get_current_environment()
    return EnvironmentResponse(environment=environment)
