"""
HTTP client for the stock service that computes snapshots and suggestions.

    GET {base_url}/api/stocks/{symbol}  ->  StockSnapshot JSON
"""
import logging
from urllib.parse import quote

import requests

from snapshot import StockDataError, StockSnapshot


class FetchError(StockDataError):
    """Network failure, non-success status, or a body that is not JSON."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class StockClient:
    def __init__(self, base_url, timeout=10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def stock_url(self, symbol):
        # symbol keeps the case the user typed
        return f"{self.base_url}/api/stocks/{quote(symbol, safe='')}"

    def fetch(self, symbol):
        url = self.stock_url(symbol)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logging.warning(f"Stock service request failed for {symbol}: {e}")
            raise FetchError(f"Request failed for {symbol}: {e}") from e

        if response.status_code == 404:
            logging.info(f"Stock service has no data for {symbol}")
            raise FetchError(f"Symbol not found: {symbol}", status=404)
        if not response.ok:
            logging.warning(f"Stock service returned {response.status_code} for {symbol}")
            raise FetchError(
                f"Stock service returned {response.status_code} for {symbol}",
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logging.warning(f"Stock service sent a non-JSON body for {symbol}")
            raise FetchError(f"Invalid JSON for {symbol}", status=response.status_code) from e

        return StockSnapshot.from_dict(payload)
