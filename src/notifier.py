"""
Edge-triggered change notification between the store and its observers
"""

import threading
from typing import Callable

from log import logger

Observer = Callable[[], None]


class Subscription:
    """Handle returned by ChangeNotifier.subscribe"""

    def __init__(self, notifier: "ChangeNotifier", observer: Observer):
        self._notifier = notifier
        self.observer = observer
        self.active = True

    def dispose(self) -> None:
        if self.active:
            self._notifier._unsubscribe(self)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.dispose()


class ChangeNotifier:
    """Delivers a bare "catalog changed" signal to every subscriber.

    Signals raised while a delivery is running are not queued: they mark the
    notifier dirty and a single extra delivery follows the current one.
    """

    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()
        self._delivering = False
        self._pending = False
        self.delivery_count = 0

    def subscribe(self, observer: Observer) -> Subscription:
        subscription = Subscription(self, observer)
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def fire(self) -> None:
        with self._lock:
            if self._delivering:
                self._pending = True
                return
            self._delivering = True

        try:
            while True:
                with self._lock:
                    self._pending = False
                    subscriptions = list(self._subscriptions)
                self._deliver(subscriptions)
                with self._lock:
                    if not self._pending:
                        self._delivering = False
                        return
        except BaseException:
            with self._lock:
                self._delivering = False
                self._pending = False
            raise

    refresh = fire

    def _deliver(self, subscriptions: list[Subscription]) -> None:
        self.delivery_count += 1
        for subscription in subscriptions:
            if not subscription.active:
                continue
            try:
                subscription.observer()
            except Exception as e:
                logger.error(f"Change observer {subscription.observer!r} failed: {e}")
