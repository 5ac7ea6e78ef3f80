"""
Notice board.

Collects the user-visible notices raised while an action runs. Action
boundaries push here instead of raising, and the caller drains the board
into its response.

Dependencies: session_desk.models
System role: Action-boundary failure reporting
"""

import logging

from session_desk.models.common import Notice, NoticeLevel

logger = logging.getLogger(__name__)


class NoticeBoard:
    """Ordered buffer of notices for one caller."""

    def __init__(self) -> None:
        self._notices: list[Notice] = []

    def push(self, level: NoticeLevel, title: str, description: str = "") -> Notice:
        notice = Notice(level=level, title=title, description=description)
        self._notices.append(notice)
        logger.debug(
            "Notice raised",
            extra={"level": level.value, "title": title, "description": description},
        )
        return notice

    def info(self, title: str, description: str = "") -> Notice:
        return self.push(NoticeLevel.INFO, title, description)

    def success(self, description: str) -> Notice:
        return self.push(NoticeLevel.SUCCESS, "Success", description)

    def error(self, description: str, title: str = "Error") -> Notice:
        return self.push(NoticeLevel.ERROR, title, description)

    @property
    def notices(self) -> list[Notice]:
        return list(self._notices)

    def drain(self) -> list[Notice]:
        """Return and forget all collected notices."""
        drained, self._notices = self._notices, []
        return drained
