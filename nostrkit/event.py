"""The Nostr event record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Event:
    """A Nostr event: identity, author, timestamp, kind, content, signature and tags."""

    id: Optional[str] = None
    pubkey: Optional[str] = None
    created_at: int = 0
    kind: int = 0
    content: Optional[str] = None
    sig: Optional[str] = None
    tags: List[List[str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tags = [list(tag) for tag in self.tags]