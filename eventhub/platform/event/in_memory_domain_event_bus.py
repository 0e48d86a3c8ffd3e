"""
In-memory Domain Event Bus

Dispatches domain events raised by use cases (after their transaction has
committed) to the handlers subscribed for that event type.

Delivery is best-effort: a failing handler is logged and counted, never
propagated to the publisher, so a notification outage cannot undo a booking.
"""

from typing import Any, Awaitable, Callable, Dict, List

from eventhub.platform.logging.loguru_io import Logger
from eventhub.platform.metrics.booking_metrics import metrics


DomainEventHandler = Callable[[Any], Awaitable[None]]


class InMemoryDomainEventBus:
    def __init__(self) -> None:
        # event type → handlers, in subscription order
        self._handlers: Dict[type, List[DomainEventHandler]] = {}

    def subscribe(self, *, event_type: type, handler: DomainEventHandler) -> None:
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
        Logger.base.debug(
            f'📡 [EVENT_BUS] {getattr(handler, "__qualname__", handler)} subscribed to '
            f'{event_type.__name__} (total handlers: {len(handlers)})'
        )

    def handler_count(self, *, event_type: type) -> int:
        return len(self._handlers.get(event_type, []))

    async def publish(self, *, event: Any) -> None:
        event_type = type(event)
        handlers = self._handlers.get(event_type)
        if not handlers:
            Logger.base.debug(f'📡 [EVENT_BUS] No handlers for {event_type.__name__}')
            return

        for handler in list(handlers):
            try:
                await handler(event)
            except Exception as e:
                metrics.record_handler_failure(event_type=event_type.__name__)
                Logger.base.opt(exception=e).error(
                    f'❌ [EVENT_BUS] {getattr(handler, "__qualname__", handler)} failed on '
                    f'{event_type.__name__}: {e}'
                )
