from __future__ import annotations

import logging
import numbers
import threading
import time
from typing import Optional, Tuple

from .errors import SubjectRetiredError
from .events import DispatchResult, Subscriber
from .metrics import record_dispatch
from .registry import SubscriberRegistry

logger = logging.getLogger(__name__)


class Stock:
    """
    Observable price for one tracked instrument.

    Every ``set_price`` notifies all current subscribers, even when the price
    did not change. New subscribers get the next price, never a replay.
    """
    def __init__(self,
                 symbol: str,
                 *,
                 dispatch_timeout: Optional[float] = None) -> None:
        self.symbol = symbol
        self.dispatch_timeout = dispatch_timeout
        self._price = 0.0
        self._registry = SubscriberRegistry()   # owned, closed by retire()
        self._retired = False

    @property
    def price(self) -> float:
        return self._price

    @property
    def subscribers(self) -> Tuple[Subscriber, ...]:
        return self._registry.members()

    @property
    def retired(self) -> bool:
        return self._retired

    def register(self, subscriber: Subscriber) -> None:
        self._ensure_active()
        self._registry.add(subscriber)

    def deregister(self, subscriber: Subscriber) -> None:
        self._ensure_active()
        self._registry.remove(subscriber)

    def set_price(self, price: float) -> DispatchResult:
        value = _as_price(price)
        self._ensure_active()
        self._price = value
        return self._dispatch(value)

    def retire(self) -> None:
        if self._retired:
            return
        self._retired = True
        self._registry.close()
        logger.info("[stock] %s retired", self.symbol)

    def _dispatch(self, value: float) -> DispatchResult:
        start = time.perf_counter()
        result = self._registry.dispatch_all(value, timeout=self.dispatch_timeout)
        record_dispatch(self.symbol, result, time.perf_counter() - start)
        logger.debug("[stock] %s dispatched %s", self.symbol, result.summary())
        return result

    def _ensure_active(self) -> None:
        if self._retired:
            raise SubjectRetiredError(f"stock {self.symbol} is retired")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(symbol={self.symbol!r}, price={self._price})"


class ThreadSafeStock(Stock):
    """
    Stock for concurrent producers: each ``set_price`` runs end-to-end under
    one re-entrant lock, so dispatches from different threads never interleave.
    A subscriber may still call ``set_price`` on the same stock from ``update``.
    """
    def __init__(self, symbol: str, **kwargs) -> None:
        super().__init__(symbol, **kwargs)
        self._set_lock = threading.RLock()

    def set_price(self, price: float) -> DispatchResult:
        value = _as_price(price)
        with self._set_lock:
            self._ensure_active()
            self._price = value
            return self._dispatch(value)

    def retire(self) -> None:
        # waits for an in-flight dispatch to finish
        with self._set_lock:
            super().retire()


def _as_price(price: object) -> float:
    if price is None or isinstance(price, bool) or not isinstance(price, numbers.Real):
        raise TypeError(f"price must be a real number, got {price!r}")
    return float(price)
