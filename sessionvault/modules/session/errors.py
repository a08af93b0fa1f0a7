"""Session error taxonomy.

Every failure raised by the session core derives from ``SessionError`` so the
HTTP layer can map the whole lookup family onto one response.
"""


class SessionError(Exception):
    """Base class for all session failures."""


class CookieMissing(SessionError):
    """The request carries no session cookie."""


class EmptyValue(SessionError):
    """The session cookie is present but its value is empty."""


class InvalidSessionID(SessionError):
    """Signature mismatch or malformed two-part cookie structure."""


class DecodeError(SessionError):
    """Percent-decoding or base64 decoding of the cookie value failed."""


class NotFound(SessionError):
    """The store holds no entry for the session ID."""


class StoreError(SessionError):
    """The storage backend failed."""


class DeserializeError(SessionError):
    """Stored bytes could not be turned back into a session."""


class SerializeError(SessionError):
    """A session could not be turned into bytes."""
