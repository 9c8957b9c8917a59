"""
Newsflash Events — Topic Registry
===================================
Controls which handlers are registered under which topic key.

Rules:
- One TopicEntry per topic key, created on first subscription
- Entries are never torn down (an emptied entry persists)
- Handler ids come from a per-key counter; unique within the key only
- Insertion order is dispatch order
- In-memory only, owned by a single EventBus
- Not thread-safe; dispatch is synchronous on the caller's thread
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger("newsflash.events")


@dataclass
class HandlerRecord:
    """A single subscription under a topic key."""

    id: str
    callback: Callable
    once: bool = False
    is_joint: bool = False
    synthetic: bool = False  # installed by the joint coordinator


@dataclass
class TopicEntry:
    """All subscriptions for one topic key."""

    key: str
    handlers: dict[str, HandlerRecord] = field(default_factory=dict)
    next_id: int = 1
    # Guard: id of the one coordinator listener on this member key.
    joint_listener_id: Optional[str] = None

    def allocate_id(self) -> str:
        handler_id = str(self.next_id)
        self.next_id += 1
        return handler_id


class TopicRegistry:
    """
    In-memory registry of topic keys and their handler records.

    Each entry maps a topic key to an insertion-ordered dict of
    handler id -> HandlerRecord.
    """

    def __init__(self):
        self._topics: dict[str, TopicEntry] = {}

    def ensure(self, key: str) -> TopicEntry:
        """Return the entry for key, creating it if absent."""
        entry = self._topics.get(key)
        if entry is None:
            entry = TopicEntry(key=key)
            self._topics[key] = entry
        return entry

    def put(
        self,
        key: str,
        callback: Callable,
        once: bool = False,
        is_joint: bool = False,
        synthetic: bool = False,
    ) -> HandlerRecord:
        """Register callback under key and return its new record."""
        entry = self.ensure(key)
        record = HandlerRecord(
            id=entry.allocate_id(),
            callback=callback,
            once=once,
            is_joint=is_joint,
            synthetic=synthetic,
        )
        entry.handlers[record.id] = record
        return record

    def get(self, key: str, handler_id: str) -> Optional[HandlerRecord]:
        entry = self._topics.get(key)
        if entry is None:
            return None
        return entry.handlers.get(handler_id)

    def remove(self, key: str, handler_id: str) -> bool:
        """Delete a record by id. Returns whether it existed."""
        entry = self._topics.get(key)
        if entry is None or handler_id not in entry.handlers:
            return False
        del entry.handlers[handler_id]
        return True

    def snapshot_ids(self, key: str) -> tuple[str, ...]:
        """
        Ordered, immutable copy of the ids registered under key.

        Dispatch iterates over this instead of the live dict, so
        handlers may subscribe or unsubscribe mid-dispatch.
        """
        entry = self._topics.get(key)
        if entry is None:
            return ()
        return tuple(entry.handlers)

    def has_topic(self, key: str) -> bool:
        return key in self._topics

    def topics(self) -> frozenset[str]:
        """Return all topic keys that have an entry (possibly empty)."""
        return frozenset(self._topics.keys())

    def subscriber_count(self, key: str, include_synthetic: bool = False) -> int:
        """Count handlers under key. Coordinator listeners excluded by default."""
        entry = self._topics.get(key)
        if entry is None:
            return 0
        return sum(
            1 for record in entry.handlers.values()
            if include_synthetic or not record.synthetic
        )
