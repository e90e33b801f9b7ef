"""Outcome notifications raised by the stores.

Notifications are observations only. A failing notifier is logged and never
changes the outcome of the operation that raised it.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

@dataclass(frozen=True)
class Notification:
    """Human readable outcome of a mutating operation."""
    title: str
    description: str
    variant: str = 'default'  # default | destructive

class Notifier(ABC):
    """Receives notifications from the stores."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        pass

class LoggingNotifier(Notifier):
    """Writes notifications to the log."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('stockbill.notifications')

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.variant == 'destructive' else logging.INFO
        self.logger.log(level, f"{notification.title}: {notification.description}")

class CollectingNotifier(Notifier):
    """Keeps notifications in memory, newest last."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def titles(self) -> List[str]:
        return [notification.title for notification in self.notifications]

    def clear(self) -> None:
        self.notifications.clear()

def send(notifier: Notifier, title: str, description: str, variant: str = 'default') -> None:
    """Deliver a notification without letting notifier errors escape."""
    if notifier is None:
        return
    try:
        notifier.notify(Notification(title, description, variant))
    except Exception as e:
        logging.getLogger(__name__).warning(f"Notifier failed for '{title}': {str(e)}")
