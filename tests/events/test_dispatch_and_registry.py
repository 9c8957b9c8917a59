"""
Newsflash Event Bus — Dispatcher & Registry Tests
===================================================
Covers:
- Registry ordering, per-key ids, snapshot immutability
- Mutation during dispatch (self-removal, removing others, adding new)
- Handler failures propagate and abort the rest of the snapshot
- Error isolation mode (log + continue)
- Dispatch logging
"""

import logging

import pytest

from newsflash.config import BusConfig
from newsflash.events import EventBus, TopicRegistry, dispatch


# ══════════════════════════════════════════════════════════════
# REGISTRY
# ══════════════════════════════════════════════════════════════

class TestTopicRegistry:
    def test_ensure_creates_once(self):
        registry = TopicRegistry()
        entry = registry.ensure("x")
        assert registry.ensure("x") is entry
        assert registry.topics() == frozenset({"x"})

    def test_ids_increase_per_key(self):
        registry = TopicRegistry()
        assert registry.put("x", print).id == "1"
        assert registry.put("x", print).id == "2"
        assert registry.put("y", print).id == "1"

    def test_ids_not_reused_after_remove(self):
        registry = TopicRegistry()
        first = registry.put("x", print)
        registry.remove("x", first.id)
        assert registry.put("x", print).id != first.id

    def test_remove_reports_existence(self):
        registry = TopicRegistry()
        record = registry.put("x", print)
        assert registry.remove("x", record.id) is True
        assert registry.remove("x", record.id) is False
        assert registry.remove("unknown", "1") is False

    def test_snapshot_is_ordered_and_detached(self):
        registry = TopicRegistry()
        ids = [registry.put("x", print).id for _ in range(3)]
        snapshot = registry.snapshot_ids("x")
        assert snapshot == tuple(ids)
        registry.remove("x", ids[0])
        assert snapshot == tuple(ids)
        assert registry.snapshot_ids("missing") == ()


# ══════════════════════════════════════════════════════════════
# MUTATION DURING DISPATCH
# ══════════════════════════════════════════════════════════════

class TestMutationDuringDispatch:
    def test_handler_removing_later_handler_skips_it(self):
        bus = EventBus()
        calls = []
        ids = {}

        def first(_data):
            calls.append("first")
            bus.off("x", ids["second"])

        ids["first"] = bus.on("x", first)
        ids["second"] = bus.on("x", lambda _: calls.append("second"))
        bus.on("x", lambda _: calls.append("third"))

        bus.emit("x")
        assert calls == ["first", "third"]

    def test_handler_added_during_dispatch_waits_for_next_emit(self):
        bus = EventBus()
        calls = []

        def adder(_data):
            calls.append("adder")
            bus.on("x", lambda _: calls.append("late"))

        bus.once("x", adder)
        bus.emit("x")
        assert calls == ["adder"]
        bus.emit("x")
        assert calls == ["adder", "late"]

    def test_handler_removing_itself(self):
        bus = EventBus()
        calls = []
        ids = {}

        def self_removing(_data):
            calls.append("self")
            bus.off("x", ids["self"])

        ids["self"] = bus.on("x", self_removing)
        bus.on("x", lambda _: calls.append("next"))
        bus.emit("x")
        bus.emit("x")
        assert calls == ["self", "next", "next"]

    def test_once_handler_emitting_its_own_event(self):
        bus = EventBus()
        calls = []

        def reentrant(depth):
            calls.append(depth)
            if depth < 3:
                bus.emit("x", depth + 1)

        bus.once("x", reentrant)
        bus.emit("x", 0)
        bus.emit("x", 10)
        # Still registered while running; removed after the outermost call returns.
        assert calls == [0, 1, 2, 3]


# ══════════════════════════════════════════════════════════════
# HANDLER FAILURES
# ══════════════════════════════════════════════════════════════

class TestHandlerFailures:
    def test_failure_propagates_and_aborts_rest(self):
        bus = EventBus()
        calls = []

        def broken(_data):
            raise RuntimeError("handler exploded")

        bus.on("x", lambda _: calls.append("before"))
        bus.on("x", broken)
        bus.on("x", lambda _: calls.append("after"))

        with pytest.raises(RuntimeError, match="handler exploded"):
            bus.emit("x")
        assert calls == ["before"]

    def test_isolated_failure_is_logged_and_dispatch_continues(self, caplog):
        bus = EventBus(BusConfig(isolate_handler_errors=True))
        calls = []

        def broken(_data):
            raise RuntimeError("handler exploded")

        bus.on("x", broken)
        bus.on("x", lambda _: calls.append("after"))

        with caplog.at_level(logging.ERROR, logger="newsflash.events"):
            result = bus.publish("x")

        assert calls == ["after"]
        assert result.notified == 1
        assert result.failed == 1
        assert result.failures[0]["error_type"] == "RuntimeError"
        assert "handler exploded" in caplog.text

    def test_isolated_once_handler_failure_keeps_subscription(self):
        registry = TopicRegistry()
        record = registry.put("x", lambda _: 1 / 0, once=True)
        result = dispatch(registry, "x", isolate_errors=True)
        assert result.failed == 1
        assert registry.get("x", record.id) is record


# ══════════════════════════════════════════════════════════════
# DISPATCH FUNCTION
# ══════════════════════════════════════════════════════════════

class TestDispatch:
    def test_unknown_key_returns_empty_result(self):
        result = dispatch(TopicRegistry(), "missing", 1)
        assert result.notified == 0
        assert result.failures == []

    def test_non_callable_record_is_skipped(self):
        registry = TopicRegistry()
        calls = []
        registry.put("x", print)
        registry.get("x", "1").callback = None
        registry.put("x", calls.append)
        result = dispatch(registry, "x", "data")
        assert calls == ["data"]
        assert result.notified == 1

    def test_joint_completion_logged(self, caplog):
        bus = EventBus()
        bus.on(["a", "b"], lambda _: None)
        with caplog.at_level(logging.INFO, logger="newsflash.events"):
            bus.emit("a")
            bus.emit("b")
        assert "Joint event complete: 'a,b'" in caplog.text
