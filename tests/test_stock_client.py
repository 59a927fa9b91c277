from unittest.mock import MagicMock, patch

import pytest
import requests

from snapshot import SnapshotError
from stock_client import FetchError, StockClient
from tests.conftest import make_payload


def fake_response(status=200, body=None, json_error=False):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    if json_error:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def client():
    return StockClient("https://stocks.example.com/", timeout=3)


def test_stock_url_escapes_symbol_and_keeps_case(client):
    assert client.stock_url("bel.NS") == "https://stocks.example.com/api/stocks/bel.NS"
    assert client.stock_url("M&M.NS") == "https://stocks.example.com/api/stocks/M%26M.NS"
    assert client.stock_url("A/B") == "https://stocks.example.com/api/stocks/A%2FB"


def test_fetch_returns_snapshot(client):
    with patch.object(client.session, "get", return_value=fake_response(body=make_payload())) as get:
        snap = client.fetch("TCS.NS")
    get.assert_called_once_with("https://stocks.example.com/api/stocks/TCS.NS", timeout=3)
    assert snap.symbol == "TCS.NS"


def test_fetch_not_found(client):
    with patch.object(client.session, "get", return_value=fake_response(status=404)):
        with pytest.raises(FetchError) as exc:
            client.fetch("NOPE")
    assert exc.value.status == 404


def test_fetch_server_error(client):
    with patch.object(client.session, "get", return_value=fake_response(status=500)):
        with pytest.raises(FetchError) as exc:
            client.fetch("TCS.NS")
    assert exc.value.status == 500


def test_fetch_network_error(client):
    with patch.object(client.session, "get", side_effect=requests.ConnectionError("down")):
        with pytest.raises(FetchError) as exc:
            client.fetch("TCS.NS")
    assert exc.value.status is None


def test_fetch_invalid_json(client):
    with patch.object(client.session, "get", return_value=fake_response(json_error=True)):
        with pytest.raises(FetchError):
            client.fetch("TCS.NS")


def test_fetch_malformed_snapshot(client):
    body = make_payload()
    del body["ltp"]
    with patch.object(client.session, "get", return_value=fake_response(body=body)):
        with pytest.raises(SnapshotError):
            client.fetch("TCS.NS")
