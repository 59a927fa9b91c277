"""
StockSnapshot -- one symbol's metrics and recommendation as returned by the
stock service (`GET /api/stocks/<symbol>`).

Payloads are validated when they arrive. A snapshot missing any of its
numeric fields is rejected with SnapshotError rather than rendered partially.
"""
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple


class StockDataError(Exception):
    """Base class for anything that stops a snapshot from being displayed."""


class SnapshotError(StockDataError):
    """The service answered, but the body is not a usable snapshot."""

    def __init__(self, message, field_name=None):
        super().__init__(message)
        self.field_name = field_name


# JSON key (as the service sends it) -> attribute name
NUMERIC_FIELDS = {
    "ltp": "ltp",
    "avg50": "avg50",
    "avg200": "avg200",
    "pseudoRSI": "pseudo_rsi",
    "changePercent": "change_percent",
    "volume": "volume",
    "entry": "entry",
    "target": "target",
    "stopLoss": "stop_loss",
}


def clean_number(value, key):
    """Coerce a JSON value to int/float. Numeric strings ("1,234.5") are
    accepted; anything else raises SnapshotError."""
    if value is None or value == "":
        raise SnapshotError(f"Missing field: {key}", key)
    # bool is an int subclass but never a metric
    if isinstance(value, bool):
        raise SnapshotError(f"Field {key} is not numeric: {value!r}", key)
    number = None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.replace(",", "").strip()
        try:
            number = float(text) if "." in text else int(text)
        except ValueError:
            pass
    # JSON allows Infinity/NaN; neither is a displayable metric
    if number is None or (isinstance(number, float) and not math.isfinite(number)):
        raise SnapshotError(f"Field {key} is not numeric: {value!r}", key)
    return number


@dataclass(frozen=True)
class NewsItem:
    title: str
    link: str
    pub_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        return cls(
            title=str(data.get("title") or ""),
            link=str(data.get("link") or ""),
            pub_date=data.get("pubDate"),
        )

    def to_dict(self):
        return {"title": self.title, "link": self.link, "pubDate": self.pub_date}


@dataclass(frozen=True)
class StockSnapshot:
    symbol: str
    ltp: float
    avg50: float
    avg200: float
    pseudo_rsi: float
    change_percent: float
    volume: float
    entry: float
    target: float
    stop_loss: float
    suggestion: str = ""
    reason: str = ""
    news: Tuple[NewsItem, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, payload):
        if not isinstance(payload, dict):
            raise SnapshotError(f"Expected a JSON object, got {type(payload).__name__}")

        symbol = payload.get("symbol")
        if not isinstance(symbol, str) or not symbol:
            raise SnapshotError("Missing field: symbol", "symbol")

        numbers = {
            attr: clean_number(payload.get(key), key)
            for key, attr in NUMERIC_FIELDS.items()
        }

        news = payload.get("news") or []
        if not isinstance(news, list):
            raise SnapshotError("Field news is not a list", "news")

        return cls(
            symbol=symbol,
            suggestion=str(payload.get("suggestion") or ""),
            reason=str(payload.get("reason") or ""),
            news=tuple(NewsItem.from_dict(n) for n in news if isinstance(n, dict)),
            **numbers,
        )

    def to_dict(self):
        data = {"symbol": self.symbol}
        for key, attr in NUMERIC_FIELDS.items():
            data[key] = getattr(self, attr)
        data["suggestion"] = self.suggestion
        data["reason"] = self.reason
        data["news"] = [n.to_dict() for n in self.news]
        return data
