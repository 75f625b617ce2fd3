"""
Synchronous event registry for client lifecycle signals.

External code observes token refreshes, user authorization and rate-limit
activity by registering handlers here.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], None]

# Fired with the token exchange payload after a successful refresh.
EVENT_REFRESH = "refresh"
# Fired with a RateLimitSnapshot when a response is a 429.
EVENT_RATELIMIT = "ratelimit"
# Fired with a RateLimitSnapshot after every response (telemetry).
EVENT_RATELIMIT_POLL = "ratelimitpoll"
# Fired with the token exchange payload after an authorization-code grant.
EVENT_USER_AUTH = "user_auth"


class EventEmitter:
    """
    Registry of event name -> ordered handler list.

    Handlers are invoked synchronously, in registration order. Exceptions
    raised by a handler propagate to the code that emitted the event.
    """

    def __init__(self):
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)

    def register(self, event: str, handler: EventHandler) -> None:
        """Append a handler for an event. Duplicates are kept."""
        self._handlers[event].append(handler)

    def unregister(self, event: str) -> None:
        """Remove every handler registered for an event."""
        self._handlers.pop(event, None)

    def handlers(self, event: str) -> List[EventHandler]:
        """Return a copy of the handlers registered for an event."""
        return list(self._handlers.get(event, ()))

    def emit(self, event: str, payload: Any = None) -> None:
        """Invoke every handler registered for ``event`` with ``payload``."""
        handlers = self.handlers(event)
        if not handlers:
            return
        logger.debug("Emitting %s to %d handler(s)", event, len(handlers))
        for handler in handlers:
            handler(payload)
