"""
Cart changed notification channel

A single payload-less topic with synchronous fan-out. Listeners that subscribe
after a publish never see it; there is no buffering or replay.
"""

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

CartChangedListener = Callable[[], None]


class Subscription:
    """Handle returned by subscribe(); cancel() detaches the listener"""

    def __init__(self, channel: "CartChangedChannel", listener: CartChangedListener):
        self._channel = channel
        self._listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop receiving notifications (idempotent)"""
        if self._active:
            self._active = False
            self._channel._remove(self)

    def _deliver(self) -> None:
        self._listener()

    def __repr__(self) -> str:
        return f"Subscription(listener={self._listener!r}, active={self._active})"


class CartChangedChannel:
    """Typed publish/subscribe channel for the "cart changed" topic"""

    TOPIC = "cart changed"

    def __init__(self):
        self._subscriptions: List[Subscription] = []
        self._logger = logging.getLogger(self.__class__.__name__)
        self._published = 0

    def subscribe(self, listener: CartChangedListener) -> Subscription:
        """Register a listener for subsequent publishes"""
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        self._logger.debug(
            "📡 SUBSCRIBED to '%s' (%d listeners)", self.TOPIC, len(self._subscriptions)
        )
        return subscription

    def publish(self) -> int:
        """
        Invoke every listener subscribed right now, in subscription order.

        Returns the number of listeners invoked. A failing listener is logged
        and does not stop delivery to the rest.
        """
        self._published += 1
        delivered = 0
        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            try:
                subscription._deliver()
                delivered += 1
            except Exception as e:  # pylint: disable=broad-except
                self._logger.error(
                    "💥 LISTENER FAILED on '%s': %s", self.TOPIC, e, exc_info=True
                )
        self._logger.info("📣 PUBLISHED '%s' to %d listeners", self.TOPIC, delivered)
        return delivered

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    @property
    def publish_count(self) -> int:
        return self._published

    def _remove(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass

    def clear(self) -> None:
        """Detach every listener"""
        for subscription in list(self._subscriptions):
            subscription.cancel()
