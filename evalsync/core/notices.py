import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str


class NoticeBoard:
    """User-facing notices, in the order they were raised."""

    def __init__(self) -> None:
        self._notices: list[Notice] = []

    def post(self, level: NoticeLevel, message: str) -> Notice:
        notice = Notice(level=level, message=message)
        self._notices.append(notice)
        logger.log(logging.ERROR if level == NoticeLevel.ERROR else logging.INFO, "notice: %s", message)
        return notice

    def success(self, message: str) -> Notice:
        return self.post(NoticeLevel.SUCCESS, message)

    def info(self, message: str) -> Notice:
        return self.post(NoticeLevel.INFO, message)

    def error(self, message: str) -> Notice:
        return self.post(NoticeLevel.ERROR, message)

    @property
    def notices(self) -> list[Notice]:
        return list(self._notices)

    def messages(self) -> list[str]:
        return [n.message for n in self._notices]
