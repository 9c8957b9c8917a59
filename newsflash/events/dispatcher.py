"""
Newsflash Events — Dispatcher
===============================
Routes a published topic key to its registered handlers.

Dispatch behavior:
1. Snapshot handler ids for the key (registration order)
2. For each id, re-look-up the live record
3. Skip records removed earlier in this dispatch, or not callable
4. Invoke synchronously with data (None when omitted)
5. Remove once-handlers right after their call returns

Handler exceptions propagate to the caller of emit() and abort the
rest of the snapshot, unless isolation is enabled. With isolation,
failures are caught per handler, logged, and reported in the result.

This module does NOT:
- Validate targets (done at the API boundary)
- Track joint readiness (done by the coordinator)
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from newsflash.events.registry import TopicRegistry

logger = logging.getLogger("newsflash.events")


@dataclass
class DispatchResult:
    key: str
    notified: int = 0
    failed: int = 0
    failures: list[dict] = field(default_factory=list)


def dispatch(
    registry: TopicRegistry,
    key: str,
    data: Any = None,
    isolate_errors: bool = False,
) -> DispatchResult:
    """
    Dispatch a topic key to every handler currently registered for it.

    Args:
        registry:       TopicRegistry holding the handlers.
        key:            Resolved topic key.
        data:           Payload passed as the single argument to every handler.
        isolate_errors: Catch and log handler failures instead of raising.

    Returns:
        DispatchResult with notified / failed counts.
    """
    result = DispatchResult(key=key)

    if not registry.has_topic(key):
        logger.debug(f"No topic '{key}', emit is a no-op")
        return result

    for handler_id in registry.snapshot_ids(key):
        record = registry.get(key, handler_id)
        if record is None or not callable(record.callback):
            continue

        try:
            record.callback(data)
        except Exception as exc:
            if not isolate_errors:
                raise

            handler_name = getattr(record.callback, "__qualname__", str(record.callback))
            result.failed += 1
            result.failures.append({
                "handler": handler_name,
                "handler_id": handler_id,
                "error": str(exc),
                "error_type": type(exc).__name__,
            })
            logger.error(
                f"Handler failed: {handler_name} (id: {handler_id}) "
                f"for '{key}': {exc}",
                exc_info=True,
            )
            continue

        result.notified += 1
        if record.once:
            registry.remove(key, handler_id)

    logger.debug(
        f"Dispatch complete: '{key}', "
        f"{result.notified} notified, {result.failed} failed"
    )
    return result
