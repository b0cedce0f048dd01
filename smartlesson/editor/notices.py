from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Notice:
    title: str
    description: str = ""
    destructive: bool = False
    blocking: bool = False  # must be acknowledged before continuing


@dataclass
class NoticeBoard:
    """User-facing notifications raised by the editors and flows"""

    items: List[Notice] = field(default_factory=list)

    def success(self, title: str, description: str = "") -> Notice:
        return self._push(Notice(title, description))

    def error(self, title: str, description: str = "", blocking: bool = False) -> Notice:
        return self._push(Notice(title, description, destructive=True, blocking=blocking))

    def dismiss(self, notice: Notice) -> None:
        if notice in self.items:
            self.items.remove(notice)

    @property
    def latest(self) -> Optional[Notice]:
        return self.items[-1] if self.items else None

    def _push(self, notice: Notice) -> Notice:
        self.items.append(notice)
        return notice
