from __future__ import annotations


class StockwatchError(Exception):
    """Base class for errors raised by the notification engine."""


class SubjectRetiredError(StockwatchError):
    """Raised when a retired stock (or its registry) is used again."""


class SubscriberNotificationFailed(StockwatchError):
    """
    Raised by a subscriber's ``update`` to report a delivery failure.
    Recorded in ``DispatchResult.failed``; never propagated out of a dispatch.
    """
    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description
