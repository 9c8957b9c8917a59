"""
Newsflash Events — EventBus
=============================
The public, injectable bus object: on / once / off / emit.

Each EventBus owns its own TopicRegistry and JointCoordinator,
so independent buses never share subscriptions.

    bus = EventBus()
    bus.on("x", handler)
    bus.on(["a", "b"], joint_handler)   # fires after both a and b
    bus.emit("x", 42)
"""

import logging
from typing import Any, Callable, Optional

from newsflash.config.settings import BusConfig
from newsflash.events.dispatcher import DispatchResult, dispatch
from newsflash.events.joint import JointCoordinator
from newsflash.events.registry import TopicRegistry
from newsflash.events.subscriptions import SubscriptionManager
from newsflash.events.targets import JointTarget, resolve_target

logger = logging.getLogger("newsflash.events")


class EventBus:

    def __init__(self, config: Optional[BusConfig] = None):
        self.config = config or BusConfig()
        self.registry = TopicRegistry()
        self.joints = JointCoordinator(self.registry, self._publish_key)
        self.subscriptions = SubscriptionManager(
            self.registry, self.joints, self.config.separator
        )

    # ── subscription ────────────────────────────────────────────

    def on(self, target: Any, handler: Callable) -> str:
        """Subscribe handler to an event or a joint event. Returns its id."""
        return self.subscriptions.subscribe(target, handler)

    def once(self, target: Any, handler: Callable) -> str:
        """
        Like on(), but the handler is removed after its first call returns.

        Removal happens after the call, not before it. A once-handler that
        emits its own event while running is still registered and fires
        again, re-entrantly, for each nested emit.
        """
        return self.subscriptions.subscribe(target, handler, once=True)

    def off(self, target: Any, handler_id: Any) -> bool:
        """Unsubscribe by id. Returns False if nothing was removed."""
        return self.subscriptions.unsubscribe(target, handler_id)

    # ── publication ─────────────────────────────────────────────

    def emit(self, target: Any, data: Any = None) -> None:
        """
        Publish an event. Every handler is called as handler(data),
        with data=None when omitted.

        A list target publishes straight to its joint key: joint handlers
        receive data, member handlers and readiness are left untouched.
        """
        self.publish(target, data)

    def publish(self, target: Any, data: Any = None) -> DispatchResult:
        """emit() that also returns the DispatchResult."""
        key = resolve_target(target, self.config.separator).key
        return self._publish_key(key, data)

    def _publish_key(self, key: str, data: Any = None) -> DispatchResult:
        return dispatch(
            self.registry,
            key,
            data,
            isolate_errors=self.config.isolate_handler_errors,
        )

    # ── queries ─────────────────────────────────────────────────

    def has_subscribers(self, target: Any) -> bool:
        return self.subscriber_count(target) > 0

    def subscriber_count(self, target: Any) -> int:
        """Count user subscriptions for target (coordinator listeners excluded)."""
        key = resolve_target(target, self.config.separator).key
        return self.registry.subscriber_count(key)

    def topics(self) -> frozenset[str]:
        return self.registry.topics()

    def pending_members(self, target: Any) -> frozenset[str]:
        """Members of a joint target still waiting to fire this cycle."""
        resolved = resolve_target(target, self.config.separator)
        if not isinstance(resolved, JointTarget):
            return frozenset()
        return self.joints.pending_members(resolved.key)
