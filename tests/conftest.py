import pytest

from snapshot import StockSnapshot


def make_payload(**overrides):
    payload = {
        "symbol": "TCS.NS",
        "ltp": 3050.5,
        "avg50": 3000,
        "avg200": 2950.25,
        "pseudoRSI": 61.2,
        "changePercent": 1.237,
        "volume": 2345678,
        "entry": 3040,
        "target": 3200,
        "stopLoss": 2980,
        "suggestion": "HOLD",
        "reason": "Price is between the averages",
        "news": [
            {"title": "TCS wins deal", "link": "https://example.com/tcs", "pubDate": "Mon, 26 Jan 2026 10:00:00 GMT"},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def payload():
    return make_payload()


@pytest.fixture
def snapshot():
    return StockSnapshot.from_dict(make_payload())


class FakeFetch:
    """Stands in for StockClient.fetch: returns queued snapshots, or raises
    queued errors, in order."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, symbol):
        self.calls.append(symbol)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result
