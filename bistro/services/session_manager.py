"""Registry of mounted reservation forms, one controller per session."""

import logging
import uuid
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from bistro.models import SubmissionState
from bistro.services.reservation_controller import ReservationController

logger = logging.getLogger(__name__)


class FormSession(BaseModel):
    """A mounted reservation form."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    session_id: str = Field(description="Unique session identifier")
    controller: ReservationController = Field(description="Form state machine")
    created_at: datetime = Field(default_factory=datetime.now)
    last_seen: datetime = Field(default_factory=datetime.now)


class FormSessionManager:
    """Keeps form sessions in memory.

    Instances share one registry, so every caller in the process sees the
    same sessions. Sessions do not survive a restart.
    """

    _instance: ClassVar["FormSessionManager | None"] = None
    _sessions: ClassVar[dict[str, FormSession]] = {}

    def __new__(cls) -> "FormSessionManager":
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @staticmethod
    def generate_session_id() -> str:
        """Generate a unique session identifier.

        Returns:
            Short UUID-based session ID
        """
        return f"form-{uuid.uuid4().hex[:12]}"

    def create_session(
        self, controller: ReservationController, session_id: str | None = None
    ) -> FormSession:
        """Register a freshly mounted form.

        Args:
            controller: Controller owning the new form's state
            session_id: Optional session ID (generated if not provided)

        Returns:
            FormSession object
        """
        if session_id is None:
            session_id = self.generate_session_id()

        session = FormSession(session_id=session_id, controller=controller)
        self._sessions[session_id] = session
        logger.info(f"Created form session {session_id}")

        return session

    def get_session(self, session_id: str) -> FormSession | None:
        """Get a session by ID and mark it as recently used.

        Args:
            session_id: Session identifier

        Returns:
            FormSession or None if not found
        """
        session = self._sessions.get(session_id)
        if session:
            session.last_seen = datetime.now()
        return session

    def remove_session(self, session_id: str) -> bool:
        """Unmount a form, discarding its draft.

        Args:
            session_id: Session identifier

        Returns:
            True if a session was removed
        """
        if self._sessions.pop(session_id, None) is None:
            logger.warning(f"Attempted to remove non-existent session {session_id}")
            return False
        logger.info(f"Removed form session {session_id}")
        return True

    def get_all_sessions(self) -> list[FormSession]:
        return list(self._sessions.values())

    def cleanup_idle_sessions(self, max_age_minutes: int = 60) -> int:
        """Remove sessions idle longer than max_age_minutes.

        Sessions with a delivery in flight are kept regardless of age.

        Args:
            max_age_minutes: Maximum idle time in minutes

        Returns:
            Number of sessions removed
        """
        now = datetime.now()
        to_remove = []

        for session_id, session in self._sessions.items():
            if session.controller.state is SubmissionState.SUBMITTING:
                continue
            idle_minutes = (now - session.last_seen).total_seconds() / 60
            if idle_minutes > max_age_minutes:
                to_remove.append(session_id)

        for session_id in to_remove:
            del self._sessions[session_id]
            logger.info(f"Cleaned up idle session {session_id}")

        return len(to_remove)


# Global singleton instance
_session_manager: FormSessionManager | None = None


def get_session_manager() -> FormSessionManager:
    """Get the global FormSessionManager instance.

    Returns:
        FormSessionManager singleton
    """
    global _session_manager
    if _session_manager is None:
        _session_manager = FormSessionManager()
    return _session_manager
