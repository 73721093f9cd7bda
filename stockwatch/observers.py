import logging
import sys
from typing import Callable, List, Optional, TextIO

from .events import Subscriber

logger = logging.getLogger(__name__)


class StockChart(Subscriber):
    """Display subscriber: renders each price to a text stream (stdout by default)."""
    def __init__(self, name: str, stream: Optional[TextIO] = None) -> None:
        self.name = name
        self.stream = stream
        self.last_price: Optional[float] = None

    def update(self, price: float) -> None:
        out = self.stream or sys.stdout
        print(f"Price Update Display {price}", file=out)
        self.last_price = price

    def __repr__(self) -> str:
        return f"StockChart({self.name!r})"


class PriceAlert(Subscriber):
    """
    Alert subscriber: builds a message per price and hands it to ``sink``.
    Without a sink the message goes to this module's logger at INFO.
    A raising sink makes the delivery fail for this subscriber only.
    """
    def __init__(self, name: str, sink: Optional[Callable[[str], None]] = None) -> None:
        self.name = name
        self.sink = sink
        self.messages: List[str] = []

    def update(self, price: float) -> None:
        message = f"New Stock Price {price}"
        if self.sink is None:
            logger.info("[PriceAlert:%s] %s", self.name, message)
        else:
            self.sink(message)
        self.messages.append(message)

    def __repr__(self) -> str:
        return f"PriceAlert({self.name!r})"


class LogReporter(Subscriber):
    def update(self, price: float) -> None:
        logger.info("[LogReporter] price=%s", price)
