"""
Session Middleware Module - Black Box Interface

Purpose: Load the caller's session before request handlers run
Interface: SessionMiddleware, create_session_middleware()
Hidden: Cookie decoding, store lookup, error formatting

Handlers read ``request.state.session``; it is None when the request has no
valid session, whatever the reason.
"""

import logging
from typing import Callable, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from ..session.errors import SessionError, StoreError
from ..session.manager import SessionManager

logger = logging.getLogger(__name__)


class SessionMiddleware:
    """
    Configurable session-loading middleware for FastAPI applications.

    Provide a callable returning the SessionManager for a request; the
    manager usually lives on ``app.state``.
    """

    def __init__(
        self,
        manager_getter: Callable[[Request], Optional[SessionManager]],
        skip_paths: Optional[Dict[str, list]] = None,
    ):
        """
        Initialize session middleware.

        Args:
            manager_getter: Returns the SessionManager (or None before startup)
            skip_paths: Dict of {path: [methods]} that never load a session
        """
        self.manager_getter = manager_getter
        self.skip_paths = skip_paths or {}

    def should_skip(self, request: Request) -> bool:
        """Check if session loading should be skipped for this request."""
        path = str(request.url.path)
        method = request.method.upper()

        if path in self.skip_paths:
            allowed_methods = self.skip_paths[path]
            if "*" in allowed_methods or method in allowed_methods:
                return True

        return False

    async def __call__(self, request: Request, call_next):
        """Attach the request's session, if any, then continue."""
        request.state.session = None

        manager = self.manager_getter(request)
        if manager is None or self.should_skip(request):
            return await call_next(request)

        try:
            request.state.session = await manager.retrieve(request)
        except StoreError as e:
            logger.error(f"Session store unavailable: {e}")
            return JSONResponse(status_code=503, content={"error": "Session store unavailable"})
        except SessionError as e:
            # Deliberately not surfaced: callers only see "no session"
            logger.debug(f"No valid session for {request.url.path}: {type(e).__name__}")

        return await call_next(request)


def create_session_middleware(skip_paths: Optional[Dict[str, list]] = None) -> SessionMiddleware:
    """
    Factory function to create middleware reading ``app.state.session_manager``.

    Args:
        skip_paths: Paths to skip {"/path": ["GET", "POST"]}

    Returns:
        Configured SessionMiddleware instance
    """
    def getter(request: Request) -> Optional[SessionManager]:
        return getattr(request.app.state, "session_manager", None)

    return SessionMiddleware(manager_getter=getter, skip_paths=skip_paths)


__all__ = ["SessionMiddleware", "create_session_middleware"]
