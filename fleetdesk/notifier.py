"""User-visible notices posted by the repositories and the persistence layer."""

from dataclasses import dataclass
from typing import List

from .logger import get_logger

logger = get_logger(__name__)

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass
class Notice:
    title: str
    description: str
    variant: str = DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == DESTRUCTIVE


class Notifier:
    """Collects notices for the front end to show. Each is also logged at DEBUG."""

    def __init__(self):
        self.notices: List[Notice] = []

    def success(self, title: str, description: str) -> Notice:
        logger.debug("%s: %s", title, description)
        return self._post(Notice(title, description))

    def error(self, title: str, description: str) -> Notice:
        logger.debug("%s: %s (error)", title, description)
        return self._post(Notice(title, description, DESTRUCTIVE))

    def _post(self, notice: Notice) -> Notice:
        self.notices.append(notice)
        return notice

    def drain(self) -> List[Notice]:
        """Return pending notices and clear them."""
        notices, self.notices = self.notices, []
        return notices
