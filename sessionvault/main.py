#!/usr/bin/env python3
"""
Sessionvault - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes the storage and session modules
3. Runs the API server

All session logic is in the modules, following black box principles.
"""

import logging
import logging.config as log_config
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from sessionvault.config.provider import ConfigProvider, EnvConfigProvider
from sessionvault.logging_config import get_logging_config
from sessionvault.modules.api import PutValueRequest, SessionResponse, ValueResponse
from sessionvault.modules.middleware import create_session_middleware
from sessionvault.modules.session import (
    SerializeError,
    Session,
    SessionError,
    SessionFactory,
    SessionManager,
    StoreError,
)
from sessionvault.modules.storage import InMemoryStore, RedisStore, StorageModule

# Configuration provider (centralized config access)
config_provider: ConfigProvider = EnvConfigProvider()
api_config = config_provider.get_api_config()

log_config.dictConfig(get_logging_config(api_config.log_level))
logger = logging.getLogger(__name__)

# Same body for every lookup failure so callers cannot tell them apart
SESSION_REQUIRED = {"error": "Valid session required"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - initialize and cleanup resources.
    """
    logger.info("Starting Sessionvault API...")

    storage_config = config_provider.get_storage_config()
    storage: Optional[StorageModule] = None
    if storage_config.backend == "memory":
        store = InMemoryStore()
        logger.info("Using in-memory session store")
    else:
        storage = StorageModule(storage_config.redis_url)
        redis_client = await storage.connect()
        store = RedisStore(redis_client, key_prefix=storage_config.key_prefix)
        logger.info("Using Redis session store")

    app.state.storage = storage
    app.state.session_manager = SessionFactory.build(config_provider, store)
    logger.info("Sessionvault API started successfully")

    yield

    logger.info("Shutting down Sessionvault API...")
    if storage:
        await storage.disconnect()
    logger.info("Sessionvault API shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Sessionvault API",
    description="Sessionvault - Cookie-bound server-side sessions",
    version="1.0.0",
    lifespan=lifespan,
)

app.middleware("http")(
    create_session_middleware(skip_paths={"/health": ["*"], "/healthz": ["*"]})
)


# Dependency injection helpers
def get_session_manager(request: Request) -> SessionManager:
    """Return the configured session manager."""
    manager = getattr(request.app.state, "session_manager", None)
    if manager is None:
        raise HTTPException(503, "Service not initialized")
    return manager


def require_session(request: Request) -> Session:
    """Return the session loaded by the middleware or fail with 401."""
    session = getattr(request.state, "session", None)
    if session is None:
        raise SessionError("No valid session on request")
    return session


# Session Endpoints


@app.post("/session", response_model=SessionResponse, status_code=201)
async def create_session(
    request: Request,
    response: Response,
    manager: SessionManager = Depends(get_session_manager),
):
    """
    Create a new session and set the session cookie.

    Returns:
        201: Session created
        503: Session store unavailable
    """
    session = await manager.new(request, response)
    request.state.session = session
    return SessionResponse.from_session(session)


@app.get("/session", response_model=SessionResponse)
async def get_session(session: Session = Depends(require_session)):
    """
    Get the session bound to the request cookie.

    Returns:
        200: Session details
        401: No valid session
    """
    return SessionResponse.from_session(session)


@app.get("/session/values/{key}", response_model=ValueResponse)
async def get_value(key: str, session: Session = Depends(require_session)):
    """
    Get one value from the current session.

    Returns:
        200: Value found
        401: No valid session
        404: Key not set
    """
    if session.value is None or key not in session.value:
        raise HTTPException(404, f"Key '{key}' not set")
    return ValueResponse(key=key, value=session.get(key))


@app.put("/session/values/{key}", response_model=SessionResponse)
async def put_value(
    key: str,
    payload: PutValueRequest,
    session: Session = Depends(require_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """
    Store one value in the current session and save it.

    Returns:
        200: Session saved
        401: No valid session
        503: Session store unavailable
    """
    session.put(key, payload.value)
    await manager.save(session)
    return SessionResponse.from_session(session)


# Health/Monitoring Endpoints


@app.get("/healthz")
async def healthz():
    """
    Minimal health check endpoint for readiness/liveness probes.

    Returns:
        200: Service is running
    """
    return {"status": "ok"}


@app.get("/health")
async def health_check(request: Request):
    """
    Health check including session store connectivity.

    Returns:
        200: Service healthy
        503: Service unhealthy
    """
    manager = getattr(request.app.state, "session_manager", None)
    storage: Optional[StorageModule] = getattr(request.app.state, "storage", None)

    if storage is None:
        store_status = "memory" if manager else "disconnected"
    else:
        store_status = "connected" if await storage.ping() else "disconnected"

    if manager and store_status != "disconnected":
        return {"status": "healthy", "store": store_status, "version": "1.0.0"}

    return JSONResponse(
        status_code=503,
        content={
            "status": "unhealthy",
            "store": store_status,
            "modules": "initialized" if manager else "not initialized",
        },
    )


# Error handlers


@app.exception_handler(StoreError)
async def store_error_handler(request, exc):
    """Handle session store failures."""
    logger.error(f"Session store error: {exc}")
    return JSONResponse(status_code=503, content={"error": "Session store unavailable"})


@app.exception_handler(SerializeError)
async def serialize_error_handler(request, exc):
    """Handle values that cannot be stored in a session."""
    logger.warning(f"Rejected session value: {exc}")
    return JSONResponse(status_code=400, content={"error": "Value cannot be stored in session"})


@app.exception_handler(SessionError)
async def session_error_handler(request, exc):
    """Handle every other session failure as a missing session."""
    logger.debug(f"Session error on {request.url.path}: {type(exc).__name__}")
    return JSONResponse(status_code=401, content=SESSION_REQUIRED)


if __name__ == "__main__":
    uvicorn.run(
        "sessionvault.main:app",
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config.log_level),
    )
