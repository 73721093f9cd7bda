from __future__ import annotations

import logging
from typing import List, Optional

from .config import Settings
from .events import DispatchResult
from .logging_setup import setup_logging
from .metrics import render_prometheus
from .observers import PriceAlert, StockChart
from .subject import Stock, ThreadSafeStock


def build_stock(settings: Settings) -> Stock:
    cls = ThreadSafeStock if settings.thread_safe else Stock
    return cls(settings.stock_symbol, dispatch_timeout=settings.dispatch_timeout_seconds)


def run_demo(settings: Settings) -> List[DispatchResult]:
    """
    Chart + alert on one stock; first price reaches both, then the chart is
    dropped and every later price reaches the alert only.
    """
    chart = StockChart("Display1")
    alert = PriceAlert("WhatsApp")

    stock = build_stock(settings)
    stock.register(chart)
    stock.register(alert)

    results: List[DispatchResult] = []
    for i, price in enumerate(settings.demo_prices):
        if i == 1:
            stock.deregister(chart)
        result = stock.set_price(price)
        logging.info("[demo] %s %s", stock.symbol, result.summary())
        for failure in result.failed:
            logging.error("[demo] %r failed: %s", failure.subscriber, failure.error)
        results.append(result)

    stock.retire()
    logging.debug("[demo] metrics\n%s", render_prometheus().decode("utf-8"))
    return results


def main(settings: Optional[Settings] = None) -> int:
    settings = settings or Settings()
    setup_logging(
        app="stockwatch",
        level=settings.log_level,
        stream_json=settings.log_json,
        filename=settings.log_file or None,
    )
    logging.info(
        "[demo] symbol=%s prices=%s thread_safe=%s timeout=%s",
        settings.stock_symbol, settings.demo_prices,
        settings.thread_safe, settings.dispatch_timeout_seconds,
    )
    results = run_demo(settings)
    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
