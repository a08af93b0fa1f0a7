"""
Session Module - Black Box Interface

Purpose: Manage session lifecycle and bind sessions to cookies
Interface: SessionManager.new(), retrieve(), save(); SessionFactory.build()
Hidden: Cookie encoding, signature verification, serialization

Replaceable cookie binding (plain or signed) and storage backend.
"""

from .codec import CookieCodec, PlainCookieCodec, SignedCookieCodec
from .errors import (
    CookieMissing,
    DecodeError,
    DeserializeError,
    EmptyValue,
    InvalidSessionID,
    NotFound,
    SerializeError,
    SessionError,
    StoreError,
)
from .factory import SessionFactory
from .interfaces import Store
from .manager import SESSION_COOKIE_NAME, SessionManager
from .session import Session, SessionStoreManager, generate_session_id

__all__ = [
    "Session",
    "SessionStoreManager",
    "SessionManager",
    "SessionFactory",
    "Store",
    "SESSION_COOKIE_NAME",
    "generate_session_id",
    "CookieCodec",
    "PlainCookieCodec",
    "SignedCookieCodec",
    "SessionError",
    "CookieMissing",
    "EmptyValue",
    "InvalidSessionID",
    "DecodeError",
    "NotFound",
    "StoreError",
    "DeserializeError",
    "SerializeError",
]
