"""
Newsflash Events — Subscription Manager
=========================================
subscribe / unsubscribe / once semantics behind on(), once(), off().

Joint targets are stored under their canonical key with
is_joint=True, and hand off to the JointCoordinator for member
instrumentation.
"""

import logging
from typing import Any, Callable

from newsflash.events.errors import InvalidHandlerError, InvalidHandlerIdError
from newsflash.events.joint import JointCoordinator
from newsflash.events.registry import TopicRegistry
from newsflash.events.targets import JointTarget, resolve_target

logger = logging.getLogger("newsflash.events")


class SubscriptionManager:

    def __init__(
        self,
        registry: TopicRegistry,
        coordinator: JointCoordinator,
        separator: str,
    ):
        self._registry = registry
        self._coordinator = coordinator
        self._separator = separator

    def subscribe(self, target: Any, handler: Callable, once: bool = False) -> str:
        """
        Register handler for target.

        Returns:
            Subscription id, unique within the resolved topic key.

        Raises:
            InvalidHandlerError: handler not callable
            InvalidEventError:   target not a str or list of str
        """
        if not callable(handler):
            raise InvalidHandlerError(handler)

        resolved = resolve_target(target, self._separator)
        is_joint = isinstance(resolved, JointTarget)

        record = self._registry.put(
            resolved.key, handler, once=once, is_joint=is_joint
        )
        if is_joint:
            self._coordinator.install(resolved)

        handler_name = getattr(handler, "__qualname__", str(handler))
        logger.debug(
            f"Subscribed: {handler_name} → '{resolved.key}' "
            f"(id: {record.id}, once: {once}, joint: {is_joint})"
        )
        return record.id

    def unsubscribe(self, target: Any, handler_id: Any) -> bool:
        """
        Remove a subscription. Unknown ids are a silent no-op.

        Coordinator listeners are not removable from here.

        Raises:
            InvalidHandlerIdError: handler_id not a str
            InvalidEventError:     target not a str or list of str
        """
        if not isinstance(handler_id, str):
            raise InvalidHandlerIdError(handler_id)

        key = resolve_target(target, self._separator).key
        record = self._registry.get(key, handler_id)
        if record is None or record.synthetic:
            return False

        removed = self._registry.remove(key, handler_id)
        logger.debug(f"Unsubscribed: '{key}' (id: {handler_id})")
        return removed
