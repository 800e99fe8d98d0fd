"""Status message package."""

from src.notifications.status import StatusKind, StatusMessage, StatusNotifier

__all__ = ["StatusKind", "StatusMessage", "StatusNotifier"]
