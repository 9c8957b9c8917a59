"""
Newsflash Events — Errors
===========================
Error types for the event bus.

All of them are caller-contract violations raised synchronously
at the call that breaks the contract. Nothing here is retried.
Exceptions raised by subscribed handlers are not wrapped.
"""

from typing import Any


class EventBusError(Exception):
    """Base error for Event Bus operations."""
    pass


class InvalidHandlerError(EventBusError):
    """Handler passed to on/once is not callable."""

    def __init__(self, handler: Any):
        self.handler = handler
        super().__init__(
            f"Invalid handler: {handler!r}. Handler must be callable."
        )


class InvalidEventError(EventBusError):
    """Target is neither an event name nor a list of event names."""

    def __init__(self, target: Any, reason: str = ""):
        self.target = target
        self.reason = reason
        message = (
            f"Invalid event: {target!r}. "
            f"Must be a string or a non-empty list of strings."
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidHandlerIdError(EventBusError):
    """Subscription id passed to off is not a string."""

    def __init__(self, handler_id: Any):
        self.handler_id = handler_id
        super().__init__(
            f"Invalid handler id: {handler_id!r}. "
            f"Must be the string returned by on/once."
        )
