"""
Exchange session resolution.

The exchange trades 09:15 - 15:15 local time, Monday to Friday. Given a
timestamp, `resolve_session` says whether the market is open and, if not,
when it next opens. The resolver never reads the clock itself; the caller
supplies `now` (see `exchange_now` in app.py) and decides how often to ask.
"""
from datetime import datetime, time, timedelta

MARKET_OPEN_MINUTE = 9 * 60 + 15    # 09:15
MARKET_CLOSE_MINUTE = 15 * 60 + 15  # 15:15
MARKET_OPEN_TIME = time(9, 15)
MARKET_OPEN_LABEL = "9:15 AM"

# datetime.weekday(): Monday=0 ... Sunday=6
FRIDAY, SATURDAY, SUNDAY = 4, 5, 6


class SessionStatus:
    """Either open (no payload) or closed with the next opening timestamp."""

    __slots__ = ("next_open",)

    def __init__(self, next_open=None):
        self.next_open = next_open

    @classmethod
    def open(cls):
        return cls(None)

    @classmethod
    def closed(cls, next_open):
        return cls(next_open)

    @property
    def is_open(self):
        return self.next_open is None

    def to_dict(self):
        return {
            "open": self.is_open,
            "next_open": self.next_open.isoformat() if self.next_open else None,
            "banner": session_banner(self),
        }

    def __eq__(self, other):
        return isinstance(other, SessionStatus) and self.next_open == other.next_open

    def __repr__(self):
        if self.is_open:
            return "SessionStatus.open()"
        return f"SessionStatus.closed({self.next_open!r})"


def _days_until_open(now):
    """Days to add to `now` to reach the next open, or None while trading."""
    day = now.weekday()
    total_minutes = now.hour * 60 + now.minute

    if day == SATURDAY:
        return 2
    if day == SUNDAY:
        return 1
    if day == FRIDAY and total_minutes >= MARKET_CLOSE_MINUTE:
        return 3
    if total_minutes >= MARKET_CLOSE_MINUTE:
        return 1
    if total_minutes < MARKET_OPEN_MINUTE:
        return 0
    return None


def _at_open(now, days):
    target = (now + timedelta(days=days)).date()
    naive = datetime.combine(target, MARKET_OPEN_TIME)
    tz = now.tzinfo
    if tz is None:
        return naive
    # pytz zones must localize to pick the right offset for the target date
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def resolve_session(now):
    days = _days_until_open(now)
    if days is None:
        return SessionStatus.open()
    return SessionStatus.closed(_at_open(now, days))


def format_open_date(moment):
    """'Tuesday, 14 Oct'"""
    return f"{moment:%A}, {moment.day} {moment:%b}"


def session_banner(status):
    """Banner text for a closed market; None while open."""
    if status.is_open:
        return None
    return (
        f"📴 Market is closed. It will open on "
        f"{format_open_date(status.next_open)} at {MARKET_OPEN_LABEL}"
    )
