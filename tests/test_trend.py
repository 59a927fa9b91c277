from snapshot import StockSnapshot
from tests.conftest import make_payload
from trend import TrendPoint, build_trend, chart_payload


def test_build_trend_keeps_fixed_order_for_non_monotonic_values():
    snap = StockSnapshot.from_dict(make_payload(avg200=100, avg50=110, ltp=95))
    assert build_trend(snap) == [
        TrendPoint("200-Day Avg", 100),
        TrendPoint("50-Day Avg", 110),
        TrendPoint("Current", 95),
    ]


def test_chart_payload(snapshot):
    assert chart_payload(snapshot) == {
        "title": "TCS.NS Price Trend",
        "labels": ["200-Day Avg", "50-Day Avg", "Current"],
        "values": [2950.25, 3000, 3050.5],
    }
