"""
GXAccount SDK - Event Hooks

Before/after callbacks around registration, signing and faucet requests.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class EventType(Enum):
    """Available event types."""
    # Registration
    BEFORE_REGISTER = "before_register"
    AFTER_REGISTER = "after_register"

    # Signing
    BEFORE_SIGN = "before_sign"
    AFTER_SIGN = "after_sign"

    # Faucet requests
    BEFORE_REQUEST = "before_request"
    AFTER_REQUEST = "after_request"

    # Lookups
    ACCOUNT_RESOLVED = "account_resolved"

    ON_ERROR = "on_error"


@dataclass
class Event:
    """Event payload passed to handlers."""
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)


EventHandler = Callable[[Event], Optional[Any]]


class EventEmitter:
    """
    Event emitter for service operations.

    Example:
        emitter = EventEmitter()

        @emitter.on(EventType.AFTER_REGISTER)
        def remember(event):
            print(f"Registered {event.data['account_name']}")

    A failing handler is logged and reported as ON_ERROR; it never aborts
    the operation that emitted the event.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []
        self.logger = logger or logging.getLogger(__name__)

    def on(self, event_type: EventType) -> Callable:
        """Decorator to register an event handler."""
        def decorator(handler: EventHandler) -> EventHandler:
            self.add_handler(event_type, handler)
            return handler
        return decorator

    def add_handler(self, event_type: EventType, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)
        self.logger.debug(f"Registered handler for {event_type.value}")

    def remove_handler(self, event_type: EventType, handler: EventHandler) -> bool:
        """
        Remove an event handler.

        Returns:
            True if handler was removed, False if not found.
        """
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def add_global_handler(self, handler: EventHandler) -> None:
        """Register a handler that receives every event."""
        self._global_handlers.append(handler)

    def emit(self, event_type: EventType, data: Optional[Dict[str, Any]] = None) -> List[Any]:
        """
        Emit an event to all registered handlers.

        Global handlers run first, then handlers for the event type.

        Returns:
            List of handler return values (excluding None).
        """
        event = Event(type=event_type, data=data or {})
        results = []

        for handler in self._global_handlers + self._handlers.get(event_type, []):
            try:
                result = handler(event)
            except Exception as e:
                self.logger.error(f"Handler error for {event_type.value}: {e}")
                if event_type != EventType.ON_ERROR:
                    self._emit_error(e, event)
                continue
            if result is not None:
                results.append(result)

        return results

    def _emit_error(self, error: Exception, source_event: Event) -> None:
        error_event = Event(
            type=EventType.ON_ERROR,
            data={
                "error": error,
                "error_type": type(error).__name__,
                "message": str(error),
                "source_event": source_event.type.value
            }
        )
        for handler in self._handlers.get(EventType.ON_ERROR, []):
            try:
                handler(error_event)
            except Exception as e:
                # ON_ERROR handlers are not re-reported
                self.logger.error(f"ON_ERROR handler failed: {e}")

    def clear(self, event_type: Optional[EventType] = None) -> None:
        """Clear handlers for one event type, or all handlers."""
        if event_type:
            self._handlers[event_type] = []
        else:
            self._handlers.clear()
            self._global_handlers.clear()

    def handler_count(self, event_type: Optional[EventType] = None) -> int:
        if event_type:
            return len(self._handlers.get(event_type, []))
        return sum(len(h) for h in self._handlers.values()) + len(self._global_handlers)


def create_audit_hook(audit_callback: Callable[[dict], None]) -> EventHandler:
    """
    Create a hook that forwards events to an audit system.

    Args:
        audit_callback: Function to call with audit data.
    """
    def handler(event: Event) -> None:
        audit_callback({
            "event_type": event.type.value,
            "timestamp": event.timestamp,
            "data": event.data
        })
    return handler
