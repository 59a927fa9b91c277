"""
Display formatting for dashboard metrics.

Large trading magnitudes (volume, entry, target, stop loss) are abbreviated
with the Indian numbering tiers: K (thousand), L (lakh) and Cr (crore).
Prices are never abbreviated.
"""
from decimal import Decimal, ROUND_HALF_UP

# (threshold, divisor, suffix) -- checked top-down, strict ">"
MAGNITUDE_TIERS = [
    (10_000_000, 10_000_000, "Cr"),
    (100_000, 100_000, "L"),
    (1_000, 1_000, "K"),
]

CURRENCY_SYMBOL = "₹"

_TWO_PLACES = Decimal("0.01")


def format_fixed(value):
    """Render with two decimals, rounding half away from zero on the exact
    binary value (matches what a browser prints)."""
    return str(Decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def format_number(value):
    """Render a number with no forced decimals: 1000.0 -> '1000', 12.5 -> '12.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_magnitude(value):
    for threshold, divisor, suffix in MAGNITUDE_TIERS:
        if value > threshold:
            return format_fixed(value / divisor) + suffix
    return format_number(value)


def format_price(value):
    return f"{CURRENCY_SYMBOL}{format_number(value)}"


def format_percent(value):
    return f"{format_fixed(value)}%"
