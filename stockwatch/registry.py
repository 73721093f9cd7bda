from __future__ import annotations

import logging
import threading
import time
from typing import List, Optional, Tuple

from .errors import SubjectRetiredError
from .events import DeliveryFailure, DispatchResult, Subscriber, describe_error

logger = logging.getLogger(__name__)


class SubscriberRegistry:
    """
    Ordered, identity-unique list of subscribers plus the fan-out.

    Membership changes and snapshot creation share one lock; subscribers are
    called outside it, so they may register/deregister from their own
    ``update`` and a slow subscriber never blocks membership changes.
    Each dispatch walks the snapshot taken when it started.
    """
    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()
        self._closed = False

    def add(self, subscriber: Subscriber) -> None:
        _check_subscriber(subscriber)
        with self._lock:
            self._ensure_open()
            if self._index(subscriber) is not None:
                logger.debug("[registry] duplicate subscriber ignored: %r", subscriber)
                return
            self._subscribers.append(subscriber)
        logger.debug("[registry] added %r", subscriber)

    def remove(self, subscriber: Subscriber) -> None:
        with self._lock:
            self._ensure_open()
            idx = self._index(subscriber)
            if idx is None:
                logger.debug("[registry] unknown subscriber ignored: %r", subscriber)
                return
            del self._subscribers[idx]
        logger.debug("[registry] removed %r", subscriber)

    def members(self) -> Tuple[Subscriber, ...]:
        with self._lock:
            return tuple(self._subscribers)

    def dispatch_all(self, price: float, *, timeout: Optional[float] = None) -> DispatchResult:
        with self._lock:
            self._ensure_open()
            snapshot = tuple(self._subscribers)

        deadline = time.monotonic() + timeout if timeout is not None else None
        delivered: List[Subscriber] = []
        failed: List[DeliveryFailure] = []
        skipped: List[Subscriber] = []

        for sub in snapshot:
            if deadline is not None and time.monotonic() >= deadline:
                skipped.append(sub)
                continue
            try:
                sub.update(price)
            except Exception as exc:
                logger.warning("[registry] subscriber %r failed on price=%s", sub, price, exc_info=True)
                failed.append(DeliveryFailure(sub, describe_error(exc)))
            else:
                delivered.append(sub)

        if skipped:
            logger.info("[registry] deadline passed, %d subscriber(s) not delivered", len(skipped))

        return DispatchResult(
            price=price,
            delivered=tuple(delivered),
            failed=tuple(failed),
            skipped=tuple(skipped),
        )

    def close(self) -> None:
        with self._lock:
            self._subscribers.clear()
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def __contains__(self, subscriber: object) -> bool:
        with self._lock:
            return self._index(subscriber) is not None

    # caller holds the lock
    def _index(self, subscriber: object) -> Optional[int]:
        for i, s in enumerate(self._subscribers):
            if s is subscriber:
                return i
        return None

    def _ensure_open(self) -> None:
        if self._closed:
            raise SubjectRetiredError("registry is closed")


def _check_subscriber(subscriber: object) -> None:
    if subscriber is None:
        raise TypeError("subscriber must not be None")
    if not callable(getattr(subscriber, "update", None)):
        raise TypeError(f"subscriber {subscriber!r} has no callable update()")
