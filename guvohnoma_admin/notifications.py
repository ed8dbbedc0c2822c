"""User-facing notifications shared by all panel controllers."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from .page import Page
from .rendering import alert, alert_class

logger = logging.getLogger(__name__)


class Level(str, Enum):
    """Notification severity."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


# Seconds before a notice is dismissed automatically
AUTO_DISMISS = {
    Level.SUCCESS: 3.0,
    Level.ERROR: 5.0,
    Level.INFO: 3.0,
}


class Notice(BaseModel):
    """A transient message shown to the user."""

    message: str
    level: Level = Level.SUCCESS
    dismiss_after: float = 3.0
    timestamp: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}


class Notifier(ABC):
    """Presentation component every controller reports through."""

    @abstractmethod
    def notify(self, message: str, level: Level = Level.SUCCESS) -> Notice:
        """Show a message to the user.

        Args:
            message: Text to show
            level: Severity of the message

        Returns:
            The Notice that was shown
        """
        pass

    def success(self, message: str) -> Notice:
        return self.notify(message, Level.SUCCESS)

    def error(self, message: str) -> Notice:
        return self.notify(message, Level.ERROR)


class LoggingNotifier(Notifier):
    """Notifier that logs and remembers every notice.

    Useful for headless runs and tests.
    """

    def __init__(self):
        self.notices: list[Notice] = []

    def notify(self, message: str, level: Level = Level.SUCCESS) -> Notice:
        level = Level(level)
        notice = Notice(message=message, level=level, dismiss_after=AUTO_DISMISS[level])
        self.notices.append(notice)

        if level == Level.ERROR:
            logger.error(message)
        else:
            logger.info(message)

        return notice

    @property
    def last(self) -> Notice | None:
        return self.notices[-1] if self.notices else None

    def messages(self, level: Level | None = None) -> list[str]:
        """Get the text of the recorded notices, optionally for one level."""
        return [n.message for n in self.notices if level is None or n.level == level]


class PageNotifier(LoggingNotifier):
    """Notifier that also injects dismissible alerts into a page.

    A new alert replaces any earlier alert of the same level still on the page.
    """

    def __init__(self, page: Page):
        super().__init__()
        self.page = page

    def notify(self, message: str, level: Level = Level.SUCCESS) -> Notice:
        notice = super().notify(message, level)
        element = alert(notice.message, notice.level.value, notice.dismiss_after)
        style = alert_class(notice.level.value)
        for previous in self.page.body.find_all("div", role="alert"):
            if style in str(previous.get("class", "")).split():
                previous.decompose()
        self.page.append_to_body(element)
        return notice
