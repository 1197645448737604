"""Short-lived messages shown to the user as toasts."""

from __future__ import annotations

import enum
import logging
import threading
import uuid
from dataclasses import dataclass, field

from ludo.state import global_state

logger = logging.getLogger(__name__)

MEDIUM = 4.0
"""Standard duration of a notification, in seconds."""


class Severity(enum.IntEnum):
    """How serious a notification is; drives its colour."""

    INFO = 0
    SUCCESS = 1
    WARNING = 2
    ERROR = 3


@dataclass
class Notification:
    """A message displayed on screen for a limited time."""

    severity: Severity
    message: str
    duration: float
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


_notifications: list[Notification] = []
_lock = threading.Lock()


def _format(message: str, args: tuple) -> str:
    return message % args if args else message


def list_all() -> list[Notification]:
    """Return the current notifications, oldest first."""
    with _lock:
        return list(_notifications)


def display(severity: Severity, message: str, duration: float) -> str:
    """Create a notification and return its identifier."""
    notification = Notification(severity=severity, message=message, duration=duration)
    with _lock:
        _notifications.append(notification)
    return notification.id


def display_and_log(severity: Severity, prefix: str, message: str, *args) -> str:
    """Create a notification and, in verbose mode, log its message."""
    msg = _format(message, args)
    if global_state.verbose:
        logger.info("[%s]: %s", prefix, msg)
    return display(severity, msg, MEDIUM)


def process(dt: float) -> None:
    """Age every notification by ``dt`` and drop the expired ones."""
    with _lock:
        for notification in _notifications:
            notification.duration -= dt
        _notifications[:] = [n for n in _notifications if n.duration > 0]


def clear() -> None:
    """Remove every notification."""
    with _lock:
        _notifications.clear()


def update(nid: str, severity: Severity, message: str, *args) -> None:
    """Change a notification's message and severity and restart its timer."""
    with _lock:
        notification = next((n for n in _notifications if n.id == nid), None)
        if notification is None:
            return
        notification.duration = MEDIUM
        notification.message = _format(message, args)
        notification.severity = severity