"""
Settings, read from the environment once at import and loaded into
`app.config` via `app.config.from_object`.
"""
import os

STOCK_API_BASE_URL = os.environ.get("STOCK_API_BASE_URL", "https://stock-backend-sage.vercel.app")
STOCK_API_TIMEOUT = float(os.environ.get("STOCK_API_TIMEOUT", "10"))

# Exchange-local time drives the session banner
MARKET_TIMEZONE = os.environ.get("MARKET_TIMEZONE", "Asia/Kolkata")

# How often the page re-checks /api/session; 0 = only on page load
SESSION_POLL_SECONDS = int(os.environ.get("SESSION_POLL_SECONDS", "60"))

TRENDING_SYMBOLS = [
    s.strip()
    for s in os.environ.get("TRENDING_SYMBOLS", "RELIANCE.NS,TCS.NS,INFY.NS,HDFCBANK.NS,LT.NS").split(",")
    if s.strip()
]

SECRET_KEY = os.environ.get("SECRET_KEY", "stocky-dev-key")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
