"""
tablekit Signal.

A minimal synchronous publish/subscribe notifier. Handlers run on the
publisher's thread, in the order they subscribed.

Example:
    greeted = Signal()
    subscription = greeted.subscribe(lambda name: print(f"hello {name}"))
    greeted.publish("world")      # prints "hello world"
    subscription.disconnect()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class Subscription:
    """Handle returned by :meth:`Signal.subscribe`; disconnects one handler."""

    __slots__ = ("_signal", "handler")

    def __init__(self, signal: Signal, handler: Handler) -> None:
        self._signal: Signal | None = signal
        self.handler = handler

    @property
    def connected(self) -> bool:
        return self._signal is not None

    def disconnect(self) -> None:
        """Stop delivering publications to the handler. Safe to call twice."""
        if self._signal is None:
            return
        self._signal._remove(self)
        self._signal = None

    def __repr__(self) -> str:
        state = "connected" if self.connected else "disconnected"
        return f"<Subscription {getattr(self.handler, '__name__', self.handler)!r} {state}>"


class Signal:
    """Synchronous notifier with ordered subscriptions."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, handler: Handler) -> Subscription:
        """Register a handler and return its subscription."""
        subscription = Subscription(self, handler)
        self._subscriptions.append(subscription)
        return subscription

    def once(self, handler: Handler) -> Subscription:
        """Register a handler that disconnects itself after its first call."""

        def wrapper(*args: Any, **kwargs: Any) -> Any:
            subscription.disconnect()
            return handler(*args, **kwargs)

        subscription = self.subscribe(wrapper)
        return subscription

    def publish(self, *args: Any, **kwargs: Any) -> list[Any]:
        """
        Call every subscribed handler with the given arguments.

        Handlers subscribed or disconnected while publishing do not change who
        receives this publication. An exception raised by a handler stops the
        publication and propagates to the caller.

        Returns:
            The handlers' return values, in subscription order.
        """
        snapshot = list(self._subscriptions)
        logger.debug("Publishing to %d handler(s)", len(snapshot))
        return [subscription.handler(*args, **kwargs) for subscription in snapshot]

    def disconnect_all(self) -> None:
        """Disconnect every subscription."""
        for subscription in list(self._subscriptions):
            subscription.disconnect()

    def _remove(self, subscription: Subscription) -> None:
        self._subscriptions.remove(subscription)
