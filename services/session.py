from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from services.constants import DEBUG_HISTORY_MAX_ENTRIES
from services.data_model import Notification, Table
from services.field_registry import FieldRegistry


class DebugChannel:
    """
    Diagnostic text surface of one session.

    `current` is single-slot: every write replaces it. Each write is also kept
    in a bounded history so earlier detail (e.g. the request body) can still be
    read after later events overwrite the current slot.
    """

    def __init__(self, max_entries: int = DEBUG_HISTORY_MAX_ENTRIES):
        self._current = ""
        self._history = deque(maxlen=max_entries)

    @property
    def current(self) -> str:
        return self._current

    def write(self, message: str) -> None:
        """
        Replace the current debug message and record it in the history.

        Args:
            message: Text to display; must not contain the raw API key
        """
        self._current = message
        self._history.append({
            "timestamp": datetime.now().isoformat(),
            "message": message,
        })

    def get_history(self) -> List[Dict]:
        """Get all entries, newest first."""
        return list(reversed(self._history))

    def clear(self) -> None:
        self._current = ""
        self._history.clear()


@dataclass
class SessionContext:
    """Everything one browser session owns. Nothing here is shared between sessions."""
    credential: Optional[str] = None
    registry: FieldRegistry = field(default_factory=FieldRegistry)
    debug: DebugChannel = field(default_factory=DebugChannel)
    table: Optional[Table] = None
    field_options: List[str] = field(default_factory=list)   # names offered in the field picker
    in_flight: bool = False
    pending_notifications: List[Notification] = field(default_factory=list)

    def has_credential(self) -> bool:
        return bool(self.credential)

    def notify(self, notification: Notification) -> Notification:
        """Queue a notification for the next render and return it."""
        self.pending_notifications.append(notification)
        return notification

    def pop_notifications(self) -> List[Notification]:
        notifications, self.pending_notifications = self.pending_notifications, []
        return notifications
