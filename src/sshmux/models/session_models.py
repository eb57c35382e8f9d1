"""
Session Data Models

Shared dataclasses for session orchestration to avoid circular dependencies.

Philosophy:
- Single responsibility: Session data structures only
- Zero dependencies: No imports from other sshmux modules except sibling models
- Regeneratable: Can be rebuilt from specification
"""

from dataclasses import dataclass
from typing import Any

from .server_models import ServerRecord


@dataclass(frozen=True)
class ConnectionResult:
    """Outcome of a connect call.

    Attributes:
        session_name: tmux session the caller should attach to
        was_existing: True when an existing session was reused instead of created
    """

    session_name: str
    was_existing: bool


@dataclass(frozen=True)
class WindowSpec:
    """One entry of a profile's window plan: window `index` runs `server`."""

    index: int
    window_name: str
    server: ServerRecord


@dataclass(frozen=True)
class WindowInfo:
    """A window reported by tmux for a live session."""

    index: int
    name: str


@dataclass
class SessionDetails:
    """Information about a live tmux session.

    Attributes:
        name: Session name as reported by tmux
        windows: Number of windows in session
        attached: Whether at least one client is attached
        many_attached: Whether more than one client is attached
        activity: Epoch seconds of the last activity (None if unknown)
        created: Epoch seconds of session creation (None if unknown)
    """

    name: str
    windows: int
    attached: bool = False
    many_attached: bool = False
    activity: int | None = None
    created: int | None = None

    @property
    def status(self) -> str:
        """Attachment state: attached, multi-attached or detached."""
        if not self.attached:
            return "detached"
        if self.many_attached:
            return "multi-attached"
        return "attached"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "windows": self.windows,
            "attached": self.attached,
            "many_attached": self.many_attached,
            "activity": self.activity,
            "created": self.created,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionDetails":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            windows=data["windows"],
            attached=data.get("attached", False),
            many_attached=data.get("many_attached", False),
            activity=data.get("activity"),
            created=data.get("created"),
        )


__all__ = ["ConnectionResult", "SessionDetails", "WindowInfo", "WindowSpec"]
