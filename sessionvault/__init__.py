"""
Sessionvault - Cookie-bound Session Management

Server-side sessions kept in a pluggable key-value store and bound to the
client through a "session" cookie.

Architecture:
- Each module is self-contained with clear interfaces
- Cookie binding is a swappable codec (plain or HMAC-signed)
- Storage is a swappable backend (Redis or in-memory)

Modules:
- session: Session entity, lifecycle manager and cookie codecs
- storage: Key-value persistence abstraction
- middleware: Per-request session loading
- api: REST API models
"""

__version__ = "1.0.0"
