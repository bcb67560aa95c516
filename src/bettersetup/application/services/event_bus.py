from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
import logging
from typing import Callable, Dict, List, Type


Handler = Callable[[object], None]


@dataclass(order=True, frozen=True)
class _Subscription:
    priority: int
    order: int
    handler: Handler = field(compare=False)


class EventBus:
    """Synchronous in-process publisher for spec and gearing events.

    Handlers registered for a base class also receive its subclasses. Lower
    priority values run first; ties keep registration order. A failing handler
    is logged and recorded, and the remaining handlers still run.
    """

    def __init__(self) -> None:
        self._subscriptions: Dict[Type[object], List[_Subscription]] = {}
        self._sequence = count()
        self._last_publish_errors: List[Exception] = []
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: Type[object], handler: Handler, *, priority: int = 100) -> Callable[[], None]:
        subscription = _Subscription(int(priority), next(self._sequence), handler)
        self._subscriptions.setdefault(event_type, []).append(subscription)

        def unsubscribe() -> None:
            bucket = self._subscriptions.get(event_type, [])
            if subscription in bucket:
                bucket.remove(subscription)

        return unsubscribe

    def handler_count(self, event_type: Type[object]) -> int:
        return len(self._subscriptions.get(event_type, ()))

    def _subscriptions_for(self, event_type: Type[object]) -> List[_Subscription]:
        matched: List[_Subscription] = []
        for klass in event_type.__mro__:
            matched.extend(self._subscriptions.get(klass, ()))
        return sorted(matched)

    def publish(self, event: object) -> int:
        self._last_publish_errors = []
        event_type = type(event)
        delivered = 0
        for subscription in self._subscriptions_for(event_type):
            try:
                subscription.handler(event)
            except Exception as exc:
                self._last_publish_errors.append(exc)
                self._logger.exception(
                    "Event handler failed and was isolated",
                    extra={
                        "event_type": event_type.__name__,
                        "handler": getattr(subscription.handler, "__qualname__", repr(subscription.handler)),
                        "priority": subscription.priority,
                    },
                )
                continue
            delivered += 1
        return delivered

    def last_publish_errors(self) -> List[Exception]:
        return list(self._last_publish_errors)
