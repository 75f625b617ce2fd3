"""
Tests for the EventEmitter registry.
"""

import pytest

from twitchhelix.helix.events import EVENT_REFRESH, EVENT_USER_AUTH, EventEmitter


class TestEventEmitter:
    """Tests for register, unregister and emit."""

    def test_handlers_invoked_in_registration_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.register(EVENT_REFRESH, lambda payload: calls.append(("a", payload)))
        emitter.register(EVENT_REFRESH, lambda payload: calls.append(("b", payload)))

        emitter.emit(EVENT_REFRESH, "token")

        assert calls == [("a", "token"), ("b", "token")]

    def test_duplicate_handlers_kept(self):
        emitter = EventEmitter()
        calls = []

        def handler(payload):
            calls.append(payload)

        emitter.register(EVENT_REFRESH, handler)
        emitter.register(EVENT_REFRESH, handler)
        emitter.emit(EVENT_REFRESH, 1)

        assert calls == [1, 1]

    def test_emit_without_handlers_is_noop(self):
        EventEmitter().emit("unknown", {"x": 1})

    def test_unregister_removes_all_handlers(self):
        emitter = EventEmitter()
        calls = []
        emitter.register(EVENT_REFRESH, calls.append)
        emitter.register(EVENT_REFRESH, calls.append)

        emitter.unregister(EVENT_REFRESH)
        emitter.emit(EVENT_REFRESH, "token")

        assert calls == []
        assert emitter.handlers(EVENT_REFRESH) == []

    def test_unregister_only_affects_named_event(self):
        emitter = EventEmitter()
        calls = []
        emitter.register(EVENT_REFRESH, calls.append)
        emitter.register(EVENT_USER_AUTH, calls.append)

        emitter.unregister(EVENT_REFRESH)
        emitter.emit(EVENT_USER_AUTH, "auth")

        assert calls == ["auth"]

    def test_unregister_unknown_event(self):
        EventEmitter().unregister("never-registered")

    def test_handler_exception_propagates(self):
        """Should surface handler errors to the emitting code."""
        emitter = EventEmitter()

        def boom(payload):
            raise RuntimeError("handler failed")

        emitter.register(EVENT_REFRESH, boom)

        with pytest.raises(RuntimeError, match="handler failed"):
            emitter.emit(EVENT_REFRESH, None)

    def test_handlers_returns_copy(self):
        emitter = EventEmitter()
        emitter.register(EVENT_REFRESH, print)

        emitter.handlers(EVENT_REFRESH).clear()

        assert emitter.handlers(EVENT_REFRESH) == [print]
