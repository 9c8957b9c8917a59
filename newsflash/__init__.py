"""
Newsflash
===========
A multi-event enabled pub/sub bus.
"""

from newsflash.config import BusConfig
from newsflash.events import (
    EventBus,
    EventBusError,
    InvalidEventError,
    InvalidHandlerError,
    InvalidHandlerIdError,
)

__all__ = [
    "EventBus",
    "BusConfig",
    "EventBusError",
    "InvalidEventError",
    "InvalidHandlerError",
    "InvalidHandlerIdError",
]
