"""
Cookie codecs binding a session ID to a cookie value.

Two strategies share one interface:
- PlainCookieCodec: the cookie carries the raw session ID
- SignedCookieCodec: the cookie carries base64(id) + "-" + hex(HMAC-SHA1(secret, id)),
  percent-encoded, so tampered cookies are rejected before any store lookup
"""

import base64
import binascii
import hashlib
import hmac
import logging
import re
from typing import Protocol
from urllib.parse import quote_plus, unquote_plus

from .errors import DecodeError, InvalidSessionID

logger = logging.getLogger(__name__)

# "%" not followed by two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class CookieCodec(Protocol):
    """Protocol for cookie encodings - allows swappable implementations."""

    def encode(self, session_id: str) -> str:
        """Turn a session ID into a cookie value."""
        ...

    def decode(self, cookie_value: str) -> str:
        """Turn a cookie value back into a session ID."""
        ...


class PlainCookieCodec:
    """Binds the session ID to the cookie verbatim."""

    def encode(self, session_id: str) -> str:
        return session_id

    def decode(self, cookie_value: str) -> str:
        return cookie_value


class SignedCookieCodec:
    """
    HMAC-SHA1 signed cookie encoding.

    The secret is fixed at construction. An empty secret still signs, but
    with a key anyone can reproduce.
    """

    # The standard base64 alphabet never emits "-"; decode() depends on it.
    SEPARATOR = "-"

    def __init__(self, secret: str = ""):
        """
        Initialize the codec.

        Args:
            secret: Shared HMAC secret
        """
        self._secret = secret.encode("utf-8")

    @property
    def has_secret(self) -> bool:
        return bool(self._secret)

    def signature(self, session_id: str) -> str:
        """Lowercase hex HMAC-SHA1 of the session ID."""
        return self._sign(session_id.encode("utf-8"))

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha1).hexdigest()

    def encode(self, session_id: str) -> str:
        """
        Encode and sign a session ID for use as a cookie value.

        Args:
            session_id: Raw session ID

        Returns:
            Percent-encoded "base64(id)-signature"
        """
        encoded_id = base64.standard_b64encode(session_id.encode("utf-8")).decode("ascii")
        return quote_plus(f"{encoded_id}{self.SEPARATOR}{self.signature(session_id)}")

    def decode(self, cookie_value: str) -> str:
        """
        Verify a signed cookie value and recover the session ID.

        Args:
            cookie_value: Percent-encoded cookie value

        Returns:
            The verified session ID

        Raises:
            DecodeError: Malformed percent escapes or invalid base64
            InvalidSessionID: Wrong structure or signature mismatch
        """
        if _MALFORMED_ESCAPE.search(cookie_value):
            raise DecodeError("Malformed percent escape in session cookie")
        unescaped = unquote_plus(cookie_value)

        parts = unescaped.split(self.SEPARATOR)
        if len(parts) != 2:
            raise InvalidSessionID("Invalid session ID")
        encoded_id, provided_sig = parts

        try:
            raw_id = base64.b64decode(encoded_id, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Invalid base64 in session cookie: {e}") from e

        # Constant-time comparison for security
        expected_sig = self._sign(raw_id)
        if not hmac.compare_digest(expected_sig.encode("ascii"), provided_sig.encode("utf-8")):
            logger.debug("Session cookie signature mismatch")
            raise InvalidSessionID("Invalid session ID")

        if not raw_id:
            raise InvalidSessionID("Invalid session ID")

        try:
            return raw_id.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("Session ID is not valid UTF-8") from e
