"""
Three-point price trend handed to the chart on the page.

Order is fixed (long-term -> short-term -> latest) and never sorted, so a
current price below both averages shows up as a falling line.
"""
from collections import namedtuple

TrendPoint = namedtuple("TrendPoint", ["label", "value"])

TREND_LABELS = ("200-Day Avg", "50-Day Avg", "Current")


def build_trend(snapshot):
    return [
        TrendPoint(TREND_LABELS[0], snapshot.avg200),
        TrendPoint(TREND_LABELS[1], snapshot.avg50),
        TrendPoint(TREND_LABELS[2], snapshot.ltp),
    ]


def chart_title(symbol):
    return f"{symbol} Price Trend"


def chart_payload(snapshot):
    """JSON-ready chart input: title plus labels/values in trend order."""
    series = build_trend(snapshot)
    return {
        "title": chart_title(snapshot.symbol),
        "labels": [p.label for p in series],
        "values": [p.value for p in series],
    }
