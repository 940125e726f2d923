import re
from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import pytest

from api import create_app
from api.config import TestingConfig


@pytest.fixture
def client():
    app = create_app(TestingConfig)
    return app.test_client()


def _query(url):
    return {k: v[0] for k, v in parse_qs(urlparse(url).query, keep_blank_values=True).items()}


@pytest.mark.parametrize("path", ["/api/payment/process", "/api/qr/generate"])
@pytest.mark.parametrize("method", ["get", "put", "delete", "patch", "options"])
def test_non_post_is_rejected(client, path, method):
    resp = getattr(client, method)(path)
    assert resp.status_code == 405
    assert resp.get_json() == {"error": "Method not allowed"}


def test_payment_sample_request(client):
    resp = client.post("/api/payment/process", json={
        "amount": "10.00",
        "currency": "USD",
        "description": "Website deposit",
        "returnUrl": "https://9lmnts.com/thanks",
        "cancelUrl": "https://9lmnts.com/pricing",
    })
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["businessEmail"] == "darnley@9lmnts.com"
    query = _query(body["paymentUrl"])
    assert query["cmd"] == "_xclick"
    assert query["amount"] == "10.00"
    assert query["currency_code"] == "USD"
    assert query["return"] == "https://9lmnts.com/thanks"


def test_payment_defaults_return_urls_to_site(client):
    resp = client.post("/api/payment/process", json={"amount": 20, "currency": "USD", "description": "Tip"})
    query = _query(resp.get_json()["paymentUrl"])
    assert query["return"] == "https://9lmnts.test/?payment=success"
    assert query["cancel_return"] == "https://9lmnts.test/?payment=cancelled"


@pytest.mark.parametrize("payload", [
    {"currency": "USD", "description": "x"},
    {"amount": "10", "description": "x"},
    {"amount": "10", "currency": "USD"},
    {},
])
def test_payment_missing_fields(client, payload):
    resp = client.post("/api/payment/process", json=payload)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Missing required fields: amount, currency, description"}


def test_payment_non_object_body(client):
    resp = client.post("/api/payment/process", json=["10.00", "USD"])
    assert resp.status_code == 400


def test_payment_unexpected_error(client):
    with patch("api.routes.payment_service.create_payment_link", side_effect=RuntimeError("boom")):
        resp = client.post("/api/payment/process", json={"amount": "1", "currency": "USD", "description": "x"})
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to process payment"}


def test_payment_malformed_json(client):
    resp = client.post("/api/payment/process", data="{not json", content_type="application/json")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to process payment"}


def test_qr_empty_body(client):
    resp = client.post("/api/qr/generate")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert re.fullmatch(r"event-\d+", body["data"]["eventId"])
    assert body["data"]["location"] == "https://9lmnts-eventos.vercel.app"
    assert body["data"]["eventType"] == "unknown"
    assert body["data"]["features"] == []
    assert body["qrCode"].startswith("https://api.qrserver.com/v1/create-qr-code/?size=200x200&data=")


def test_qr_keeps_given_fields(client):
    resp = client.post("/api/qr/generate", json={"eventId": "launch", "features": ["voting"]})
    data = resp.get_json()["data"]
    assert data["eventId"] == "launch"
    assert data["features"] == ["voting"]


@pytest.mark.parametrize("body", ['["x"]', '"launch"', "42"])
def test_qr_non_object_body_uses_defaults(client, body):
    resp = client.post("/api/qr/generate", data=body, content_type="application/json")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert re.fullmatch(r"event-\d+", data["eventId"])
    assert data["eventType"] == "unknown"


def test_qr_null_body(client):
    resp = client.post("/api/qr/generate", data="null", content_type="application/json")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to generate QR code"}


def test_qr_unexpected_error(client):
    with patch("api.routes.qr_service.generate_qr_code", side_effect=RuntimeError("boom")):
        resp = client.post("/api/qr/generate", json={})
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to generate QR code"}


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}
