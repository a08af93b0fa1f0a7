import logging
from datetime import UTC, datetime, timedelta
from typing import Callable, Optional

from fastapi import Request, Response

from .codec import CookieCodec
from .errors import CookieMissing, EmptyValue
from .session import Session, SessionStoreManager

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session"


class SessionManager:
    """
    Request-scoped session lifecycle.

    Binds sessions from a SessionStoreManager to a cookie through a
    CookieCodec. With ``cookie_lifetime`` unset the cookie expires together
    with the session; otherwise the two lifetimes are independent.
    """

    def __init__(
        self,
        store_manager: SessionStoreManager,
        codec: CookieCodec,
        session_lifetime: timedelta,
        cookie_lifetime: Optional[timedelta] = None,
        cookie_name: str = SESSION_COOKIE_NAME,
        cookie_secure: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize session manager.

        Args:
            store_manager: Creates/finds/saves sessions in the store
            codec: Cookie encoding (plain or signed)
            session_lifetime: Server-side session lifetime
            cookie_lifetime: Cookie lifetime; None ties it to the session expiry
            cookie_name: Name of the session cookie
            cookie_secure: Set the Secure flag on the cookie
            clock: Returns the current UTC time
        """
        self.store_manager = store_manager
        self.codec = codec
        self.session_lifetime = session_lifetime
        self.cookie_lifetime = cookie_lifetime
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure
        self.clock = clock or (lambda: datetime.now(UTC))

    async def new(self, request: Request, response: Response) -> Session:
        """
        Create a session and set its cookie on both response and request.

        The cookie is reflected onto ``request.cookies`` so handlers later in
        the same request can retrieve the session without a round trip.

        Raises:
            StoreError: If the session cannot be persisted
        """
        now = self.clock()
        session = await self.store_manager.create(now + self.session_lifetime)

        if self.cookie_lifetime is None:
            cookie_expires = session.expires_at
        else:
            cookie_expires = now + self.cookie_lifetime

        cookie_value = self.codec.encode(session.id)
        response.set_cookie(
            key=self.cookie_name,
            value=cookie_value,
            expires=cookie_expires,
            path="/",
            secure=self.cookie_secure,
            httponly=True,
            samesite="lax",
        )
        request.cookies[self.cookie_name] = cookie_value
        return session

    async def retrieve(self, request: Request) -> Session:
        """
        Return the session named by the request's session cookie.

        Raises:
            CookieMissing: No session cookie on the request
            EmptyValue: Cookie value is empty
            InvalidSessionID / DecodeError: Signed cookie failed verification
            NotFound / DeserializeError: Store lookup failed
        """
        cookie_value = request.cookies.get(self.cookie_name)
        if cookie_value is None:
            raise CookieMissing(f"No '{self.cookie_name}' cookie on request")
        if cookie_value == "":
            raise EmptyValue("Session cookie value is empty")

        # Verification happens before any store access
        session_id = self.codec.decode(cookie_value)
        return await self.store_manager.find(session_id)

    async def save(self, session: Session) -> None:
        """Save the session, creating or overriding the stored entry."""
        await self.store_manager.save(session)
