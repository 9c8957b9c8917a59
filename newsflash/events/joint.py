"""
Newsflash Events — Joint Event Coordinator
============================================
Fires a joint topic once every member event has been published
at least once since the joint topic last fired.

How it works:
1. On the first joint subscription to key K, a JointRecord is
   created for K with every member flag set to False.
2. Each member event gets exactly ONE synthetic listener per bus,
   installed the first time the member appears in any joint key.
   The guard lives on the member's TopicEntry.
3. When a member event fires, its listener runs publish_multi()
   for every joint key containing that member, in the order those
   keys were first subscribed.
4. publish_multi() flags the member. Once all members are flagged,
   the record is reset and the joint key is published with data=None.

This deliberately departs from publish-then-reset ordering.
The reset happens before the joint publication, so joint handlers
that emit member events start a fresh cycle instead of re-entering
a completed one. A failing joint handler still consumes the cycle.

Joint records and synthetic listeners live as long as the bus,
even after the last joint subscriber unsubscribes.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from newsflash.events.registry import TopicRegistry
from newsflash.events.targets import JointTarget

logger = logging.getLogger("newsflash.events")


@dataclass
class JointRecord:
    """Readiness bookkeeping for one joint key."""

    key: str
    members: tuple[str, ...]
    ready: dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.ready:
            self.ready = {member: False for member in self.members}

    def mark(self, member: str) -> None:
        self.ready[member] = True

    def is_complete(self) -> bool:
        return all(self.ready.values())

    def reset(self) -> None:
        for member in self.ready:
            self.ready[member] = False

    def pending(self) -> frozenset[str]:
        return frozenset(m for m, fired in self.ready.items() if not fired)


class JointCoordinator:
    """
    Owns joint readiness records and the synthetic member listeners.

    Args:
        registry: TopicRegistry shared with the bus.
        publish:  Callable that dispatches a topic key with data=None.
    """

    def __init__(self, registry: TopicRegistry, publish: Callable[[str], Any]):
        self._registry = registry
        self._publish = publish
        self._records: dict[str, JointRecord] = {}
        self._joints_by_member: dict[str, list[str]] = {}

    def install(self, target: JointTarget) -> JointRecord:
        """
        Ensure a readiness record for target and a listener on each member.

        Idempotent: repeated calls for the same target, or for targets
        sharing members, never add a second listener to a member.
        """
        key = target.key
        record = self._records.get(key)
        if record is None:
            record = JointRecord(key=key, members=target.members)
            self._records[key] = record
            for member in target.members:
                self._joints_by_member.setdefault(member, []).append(key)
            logger.debug(f"Joint record created: '{key}' {list(target.members)}")

        for member in target.members:
            entry = self._registry.ensure(member)
            if entry.joint_listener_id is not None:
                continue
            listener = self._registry.put(
                member, self._member_listener(member), synthetic=True
            )
            entry.joint_listener_id = listener.id
            logger.debug(
                f"Joint listener installed on '{member}' (id: {listener.id})"
            )

        return record

    def _member_listener(self, member: str) -> Callable:
        def on_member_event(_data: Any) -> None:
            for key in tuple(self._joints_by_member.get(member, ())):
                self.publish_multi(member, key)

        on_member_event.__qualname__ = f"joint_listener[{member}]"
        return on_member_event

    def publish_multi(self, member: str, key: str) -> bool:
        """
        Record that member fired for joint key; publish key if complete.

        Returns:
            True if the joint key was published by this call.
        """
        record = self._records.get(key)
        if record is None or member not in record.ready:
            return False

        record.mark(member)
        if not record.is_complete():
            return False

        record.reset()
        logger.info(f"Joint event complete: '{key}'")
        self._publish(key)
        return True

    def pending_members(self, key: str) -> frozenset[str]:
        """Members of key not fired since its last publication."""
        record = self._records.get(key)
        if record is None:
            return frozenset()
        return record.pending()
