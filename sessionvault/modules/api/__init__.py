"""
API Module - Black Box Interface

Purpose: HTTP request/response models
Interface: REST API bodies
Hidden: Session internals

The API module only orchestrates - it contains no business logic.
"""

from .models import PutValueRequest, SessionResponse, ValueResponse

__all__ = ["PutValueRequest", "SessionResponse", "ValueResponse"]
