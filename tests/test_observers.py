# tests/test_observers.py
import io
import logging

from stockwatch.events import DispatchResult, Subscriber
from stockwatch.observers import LogReporter, PriceAlert, StockChart
from stockwatch.registry import SubscriberRegistry


def test_variants_satisfy_subscriber_protocol():
    for sub in (StockChart("d"), PriceAlert("a"), LogReporter()):
        assert isinstance(sub, Subscriber)


def test_stock_chart_renders_to_stream():
    out = io.StringIO()
    chart = StockChart("Display1", stream=out)
    chart.update(5.0)
    chart.update(1.25)
    assert out.getvalue() == "Price Update Display 5.0\nPrice Update Display 1.25\n"
    assert chart.last_price == 1.25


def test_stock_chart_defaults_to_stdout(capsys):
    StockChart("Display1").update(3.0)
    assert capsys.readouterr().out == "Price Update Display 3.0\n"


def test_price_alert_sink_and_default_logger(caplog):
    got = []
    PriceAlert("sms", sink=got.append).update(2.0)
    assert got == ["New Stock Price 2.0"]

    with caplog.at_level(logging.INFO, logger="stockwatch.observers"):
        alert = PriceAlert("WhatsApp")
        alert.update(4.0)
    assert alert.messages == ["New Stock Price 4.0"]
    assert "New Stock Price 4.0" in caplog.text


def test_failing_alert_sink_is_reported_not_raised():
    def sink(msg):
        raise ConnectionError("gateway down")

    alert = PriceAlert("sms", sink=sink)
    chart = StockChart("Display1", stream=io.StringIO())
    reg = SubscriberRegistry()
    reg.add(alert)
    reg.add(chart)

    result = reg.dispatch_all(8.0)
    assert result.delivered == (chart,)
    assert [f.subscriber for f in result.failed] == [alert]
    assert "gateway down" in result.failed[0].error
    assert alert.messages == []


def test_log_reporter_logs_price(caplog):
    with caplog.at_level(logging.INFO, logger="stockwatch.observers"):
        LogReporter().update(6.5)
    assert "[LogReporter] price=6.5" in caplog.text


def test_dispatch_result_summary():
    r = DispatchResult(price=1.0)
    assert r.ok
    assert r.summary() == "price=1.0 delivered=0 failed=0 skipped=0"
