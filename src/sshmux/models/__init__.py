"""
sshmux Data Models

Shared dataclasses and data structures to avoid circular dependencies.

Philosophy:
- Zero dependencies on other sshmux modules
- Self-contained data definitions
- Shared types used across multiple modules
"""

from .server_models import AuthType, ServerRecord, ServerValidationError, validate_server
from .session_models import ConnectionResult, SessionDetails, WindowInfo, WindowSpec

__all__ = [
    "AuthType",
    "ConnectionResult",
    "ServerRecord",
    "ServerValidationError",
    "SessionDetails",
    "WindowInfo",
    "WindowSpec",
    "validate_server",
]
