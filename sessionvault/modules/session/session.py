import logging
import math
import secrets
from datetime import UTC, datetime
from typing import Any, Callable, Dict, Optional

from pydantic import AwareDatetime, BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticSerializationError

from .errors import DeserializeError, SerializeError
from .interfaces import Store

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    """Generate a cryptographically secure session identifier (256 bits)."""
    return secrets.token_urlsafe(32)


class Session(BaseModel):
    """
    Server-side record of per-visitor state.

    ``value`` stays ``None`` until the first ``put``. Anything stored in it
    must survive a JSON round trip.
    """

    id: str = Field(..., min_length=1, description="Opaque session identifier")
    expires_at: AwareDatetime = Field(..., description="Absolute expiry, set at creation")
    value: Optional[Dict[str, Any]] = Field(None, description="Session key/value data")

    @field_validator("expires_at")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Store expiry in UTC so cookie expiry headers can be rendered in GMT."""
        return v.astimezone(UTC)

    def put(self, key: str, val: Any) -> None:
        """Store the key/value pair in the session."""
        if self.value is None:
            self.value = {}
        self.value[key] = val

    def get(self, key: str) -> Any:
        """Return the value for ``key`` or None when unset."""
        if self.value is None:
            return None
        return self.value.get(key)

    def to_bytes(self) -> bytes:
        try:
            return self.model_dump_json().encode("utf-8")
        except PydanticSerializationError as e:
            raise SerializeError(f"Session {self.id[:8]}... holds a non-serializable value: {e}") from e

    @classmethod
    def from_bytes(cls, data: bytes) -> "Session":
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise DeserializeError(f"Corrupted session data: {e.error_count()} error(s)") from e


class SessionStoreManager:
    """
    Creates, finds and saves sessions in a Store.

    The store owns eviction: entries are written with a TTL matching the
    session expiry and are never refreshed implicitly.
    """

    def __init__(
        self,
        store: Store,
        session_id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the store manager.

        Args:
            store: Store with async store()/retrieve()
            session_id_factory: Returns a fresh session ID (default: 256-bit random token)
            clock: Returns the current UTC time
        """
        self.store = store
        self.session_id_factory = session_id_factory or generate_session_id
        self.clock = clock or (lambda: datetime.now(UTC))

    async def create(self, expires_at: datetime) -> Session:
        """
        Create a new session and persist it immediately.

        Args:
            expires_at: Absolute session expiry

        Returns:
            The stored session

        Raises:
            ValidationError: If ``expires_at`` has no timezone
            StoreError: If the store write fails
        """
        session = Session(id=self.session_id_factory(), expires_at=expires_at)
        await self.save(session)
        logger.info(f"Created session {session.id[:8]}... expiring at {expires_at.isoformat()}")
        return session

    async def find(self, session_id: str) -> Session:
        """
        Return the stored session for ``session_id``.

        Raises:
            NotFound: If the store has no entry
            DeserializeError: If the stored bytes are corrupted
        """
        data = await self.store.retrieve(session_id)
        return Session.from_bytes(data)

    async def save(self, session: Session) -> None:
        """Create or overwrite the stored entry for the session."""
        data = session.to_bytes()
        remaining = (session.expires_at - self.clock()).total_seconds()
        ttl = max(1, math.ceil(remaining))
        await self.store.store(session.id, data, ttl=ttl)
