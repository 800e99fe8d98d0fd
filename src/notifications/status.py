"""
Transient Status Messages

A status message ("New receipt saved!", "Member name is required.") is shown
until it is replaced or its dismissal timer fires.

At most one dismissal timer is live. Showing a new message cancels the
pending timer before arming a new one, and a timer only clears the
message it was armed for, so a late timer can never hide a newer message.
"""

import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, Field


class StatusKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class StatusMessage(BaseModel):
    text: str
    kind: StatusKind = StatusKind.SUCCESS
    shown_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class StatusNotifier:
    """Holds the current status message and its dismissal timer."""

    def __init__(
        self,
        dismiss_after: float = 3.0,
        timer_factory: TimerFactory = threading.Timer,
    ):
        self._dismiss_after = dismiss_after
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._current: Optional[StatusMessage] = None
        self._timer = None

    @property
    def current(self) -> Optional[StatusMessage]:
        with self._lock:
            return self._current

    def show(self, text: str, kind: StatusKind = StatusKind.SUCCESS) -> StatusMessage:
        """Show a message, replacing any current one and its timer."""
        message = StatusMessage(text=text, kind=kind)
        with self._lock:
            self._cancel_timer()
            self._current = message
            timer = self._timer_factory(self._dismiss_after, lambda: self._expire(message))
            timer.daemon = True
            self._timer = timer
            timer.start()
        return message

    def dismiss(self) -> None:
        """Clear the message now."""
        with self._lock:
            self._cancel_timer()
            self._current = None

    def _expire(self, message: StatusMessage) -> None:
        with self._lock:
            if self._current is message:
                self._current = None
                self._timer = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
