"""User-facing notices raised by the services."""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """One message shown to the user."""

    level: NoticeLevel
    message: str


class Notifier:
    """Collects notices for the presentation layer and mirrors them to the log."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def success(self, message: str) -> None:
        """Record a success notice."""
        self._push(Notice(NoticeLevel.SUCCESS, message))

    def error(self, message: str) -> None:
        """Record an error notice."""
        self._push(Notice(NoticeLevel.ERROR, message))

    @property
    def last(self) -> Notice | None:
        return self.notices[-1] if self.notices else None

    def drain(self) -> list[Notice]:
        """Return all pending notices and clear them."""
        pending, self.notices = self.notices, []
        return pending

    def _push(self, notice: Notice) -> None:
        self.notices.append(notice)
        if notice.level is NoticeLevel.ERROR:
            logger.warning("Notice: %s", notice.message)
        else:
            logger.info("Notice: %s", notice.message)
