"""
Session Factory following Black Box Design principles.

This factory:
- Constructs the session stack based on configuration
- Wires the store, codec and lifetimes together
- Returns only the SessionManager facade
"""

import logging
from datetime import timedelta
from typing import Callable, Optional

from ...config.provider import ConfigProvider
from .codec import PlainCookieCodec, SignedCookieCodec
from .interfaces import Store
from .manager import SESSION_COOKIE_NAME, SessionManager
from .session import SessionStoreManager

logger = logging.getLogger(__name__)


class SessionFactory:
    """
    Factory for building the session stack.

    This is the composition root that:
    - Picks the cookie codec
    - Creates the store manager
    - Returns the public SessionManager interface
    """

    @staticmethod
    def build(config_provider: ConfigProvider, store: Store) -> SessionManager:
        """
        Build the session manager from configuration.

        Args:
            config_provider: Configuration provider
            store: Store used for session persistence

        Returns:
            SessionManager facade
        """
        session_config = config_provider.get_session_config()

        if session_config.signed:
            return SessionFactory.build_signed(
                store,
                secret=session_config.cookie_secret,
                session_lifetime=timedelta(seconds=session_config.session_life_seconds),
                cookie_lifetime=timedelta(seconds=session_config.cookie_life_seconds),
                cookie_name=session_config.cookie_name,
                cookie_secure=session_config.cookie_secure,
            )

        return SessionFactory.build_plain(
            store,
            session_duration=timedelta(seconds=session_config.session_life_seconds),
            cookie_name=session_config.cookie_name,
            cookie_secure=session_config.cookie_secure,
        )

    @staticmethod
    def build_plain(
        store: Store,
        session_duration: timedelta,
        session_id_factory: Optional[Callable[[], str]] = None,
        cookie_name: str = SESSION_COOKIE_NAME,
        cookie_secure: bool = False,
        clock=None,
    ) -> SessionManager:
        """
        Build a manager whose cookie carries the raw session ID.

        The cookie expires together with the session.
        """
        logger.info("Building session stack with plain cookies")
        store_manager = SessionStoreManager(store, session_id_factory, clock=clock)
        return SessionManager(
            store_manager,
            PlainCookieCodec(),
            session_lifetime=session_duration,
            cookie_name=cookie_name,
            cookie_secure=cookie_secure,
            clock=clock,
        )

    @staticmethod
    def build_signed(
        store: Store,
        secret: str = "",
        session_lifetime: timedelta = timedelta(seconds=7200),
        cookie_lifetime: timedelta = timedelta(seconds=7200),
        session_id_factory: Optional[Callable[[], str]] = None,
        cookie_name: str = SESSION_COOKIE_NAME,
        cookie_secure: bool = False,
        clock=None,
    ) -> SessionManager:
        """
        Build a manager whose cookie carries an HMAC-signed session ID.

        Args:
            store: Store used for session persistence
            secret: HMAC signing secret
            session_lifetime: Server-side session lifetime
            cookie_lifetime: Cookie lifetime, independent of the session
            session_id_factory: Optional session ID generator
            cookie_name: Name of the session cookie
            cookie_secure: Set the Secure flag on the cookie
            clock: Returns the current UTC time

        Returns:
            SessionManager using SignedCookieCodec
        """
        if not secret:
            logger.warning(
                "Session cookie secret is empty - signatures can be forged. "
                "Set SESSION_COOKIE_SECRET for real integrity protection."
            )
        logger.info("Building session stack with signed cookies")
        store_manager = SessionStoreManager(store, session_id_factory, clock=clock)
        return SessionManager(
            store_manager,
            SignedCookieCodec(secret),
            session_lifetime=session_lifetime,
            cookie_lifetime=cookie_lifetime,
            cookie_name=cookie_name,
            cookie_secure=cookie_secure,
            clock=clock,
        )
