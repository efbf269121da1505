"""The subscription filter record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Filter:
    """Selects events by id, kind, author, tags, time window and count."""

    ids: List[str] = field(default_factory=list)
    kinds: List[int] = field(default_factory=list)
    authors: List[str] = field(default_factory=list)
    tags: Optional[List[List[str]]] = None
    since: int = 0
    until: int = 0
    limit: int = 0
    search: Optional[str] = None
    limit_zero: bool = False

    def __post_init__(self) -> None:
        self.ids = list(self.ids)
        self.kinds = list(self.kinds)
        self.authors = list(self.authors)
        if self.tags is not None:
            self.tags = [list(tag) for tag in self.tags]