"""
Presentation layer: turns a fetched StockSnapshot plus the session status
into the view model the page renders.

Classification (suggestion -> badge category, suggestion -> notification)
is pure. Sending notifications happens only through listeners registered
with `PresentationController.subscribe`, so the mapping can be tested
without a live notification sink.
"""
import itertools
import logging
import threading
from collections import namedtuple

from formatting import format_magnitude, format_number, format_percent, format_price
from market_session import resolve_session, session_banner
from snapshot import StockDataError
from trend import chart_payload

FETCH_ERROR_MESSAGE = "Stock not found or API error"

BADGE_ALERT = "alert"
BADGE_POSITIVE = "positive"
BADGE_NEUTRAL = "neutral"

POSITIVE = "positive"
NEGATIVE = "negative"

Notification = namedtuple("Notification", ["kind", "message"])

BUY_NOTIFICATION = Notification(POSITIVE, "📈 Good time to BUY!")
SELL_NOTIFICATION = Notification(NEGATIVE, "📉 Consider SELLING!")


def classify_suggestion(suggestion):
    if suggestion == "SELL":
        return BADGE_ALERT
    if suggestion == "BUY":
        return BADGE_POSITIVE
    return BADGE_NEUTRAL


def notification_for(suggestion):
    if suggestion == "BUY":
        return BUY_NOTIFICATION
    if suggestion == "SELL":
        return SELL_NOTIFICATION
    return None


def metric_rows(snapshot):
    """(label, display) rows for the metrics card.

    Prices are shown raw with the currency symbol; volume and the trade
    levels go through the K/L/Cr formatter.
    """
    return [
        ("Current Price", format_price(snapshot.ltp)),
        ("50 Day Avg", format_price(snapshot.avg50)),
        ("200 Day Avg", format_price(snapshot.avg200)),
        ("RSI", format_number(snapshot.pseudo_rsi)),
        ("Change %", format_percent(snapshot.change_percent)),
        ("Volume", format_magnitude(snapshot.volume)),
        ("Entry", format_magnitude(snapshot.entry)),
        ("Target", format_magnitude(snapshot.target)),
        ("StopLoss", format_magnitude(snapshot.stop_loss)),
    ]


class ViewModel:
    def __init__(self, session_banner=None, snapshot=None, error=None, updated_at=None):
        self.session_banner = session_banner
        self.snapshot = snapshot
        self.error = error
        self.updated_at = updated_at

        if snapshot is not None:
            self.symbol = snapshot.symbol
            self.metrics = metric_rows(snapshot)
            self.badge = {
                "suggestion": snapshot.suggestion,
                "category": classify_suggestion(snapshot.suggestion),
            }
            self.reason = snapshot.reason
            self.trend = chart_payload(snapshot)
            self.news = list(snapshot.news)
        else:
            self.symbol = None
            self.metrics = []
            self.badge = None
            self.reason = None
            self.trend = None
            self.news = []

    def to_dict(self):
        return {
            "session_banner": self.session_banner,
            "symbol": self.symbol,
            "metrics": [{"label": label, "value": value} for label, value in self.metrics],
            "badge": self.badge,
            "reason": self.reason,
            "trend": self.trend,
            "news": [n.to_dict() for n in self.news],
            "error": self.error,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "snapshot": self.snapshot.to_dict() if self.snapshot else None,
        }


class PresentationController:
    """Holds the snapshot currently on display.

    `fetch` is a callable symbol -> StockSnapshot (normally
    StockClient.fetch); it signals failure by raising StockDataError.
    Each search takes a request token; results arriving for an older
    token than the latest one issued are dropped.
    """

    def __init__(self, fetch, clock=None):
        self.fetch = fetch
        self.clock = clock
        self.snapshot = None
        self.error = None
        self._listeners = []
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self._lock = threading.Lock()

    # ── Notifications ──────────────────────────────────────

    def subscribe(self, listener):
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, notification):
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception as e:
                logging.warning(f"Notification listener failed: {e}")

    # ── Search lifecycle ───────────────────────────────────

    def begin_search(self):
        with self._lock:
            token = next(self._tokens)
            self._latest_token = token
            return token

    def is_current(self, token):
        return token == self._latest_token

    def complete(self, token, snapshot):
        with self._lock:
            if not self.is_current(token):
                logging.info(f"Dropping stale result for {snapshot.symbol} (request {token})")
                return False
            self.snapshot = snapshot
            self.error = None

        notification = notification_for(snapshot.suggestion)
        if notification:
            self.dispatch(notification)
        return True

    def fail(self, token, error=None):
        with self._lock:
            if not self.is_current(token):
                logging.info(f"Dropping stale failure (request {token}): {error}")
                return False
            self.snapshot = None
            self.error = FETCH_ERROR_MESSAGE

        self.dispatch(Notification(NEGATIVE, FETCH_ERROR_MESSAGE))
        return True

    def search(self, symbol):
        """Fetch `symbol` and update the held snapshot. Returns True when the
        result was applied."""
        if not symbol:
            return False
        token = self.begin_search()
        try:
            snapshot = self.fetch(symbol)
        except StockDataError as e:
            logging.warning(f"Search for {symbol} failed: {e}")
            return self.fail(token, e)
        return self.complete(token, snapshot)

    def view(self, now=None):
        if now is None and self.clock is not None:
            now = self.clock()
        banner = session_banner(resolve_session(now)) if now is not None else None
        return ViewModel(
            session_banner=banner,
            snapshot=self.snapshot,
            error=self.error,
            updated_at=now,
        )
