"""
Newsflash Event Bus — Public API
==================================
In-process pub/sub with joint (multi) events.
A joint handler fires once every member event has been published
since it last fired.
"""

from newsflash.events.bus import EventBus
from newsflash.events.dispatcher import DispatchResult, dispatch
from newsflash.events.errors import (
    EventBusError,
    InvalidEventError,
    InvalidHandlerError,
    InvalidHandlerIdError,
)
from newsflash.events.joint import JointCoordinator, JointRecord
from newsflash.events.registry import HandlerRecord, TopicEntry, TopicRegistry
from newsflash.events.subscriptions import SubscriptionManager
from newsflash.events.targets import (
    JointTarget,
    SingleTarget,
    canonical_key,
    canonical_members,
    resolve_target,
)

__all__ = [
    "EventBus",
    "dispatch",
    "DispatchResult",
    "TopicRegistry",
    "TopicEntry",
    "HandlerRecord",
    "SubscriptionManager",
    "JointCoordinator",
    "JointRecord",
    "SingleTarget",
    "JointTarget",
    "canonical_key",
    "canonical_members",
    "resolve_target",
    "EventBusError",
    "InvalidEventError",
    "InvalidHandlerError",
    "InvalidHandlerIdError",
]
