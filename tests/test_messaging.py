from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
import requests

import telegram_utils
from infrastructure.messaging.telegram_provider import TelegramProvider


@pytest.fixture
def provider():
    return TelegramProvider()


@patch('requests.post')
def test_send_message_success(mock_post, provider):
    mock_resp = MagicMock()
    mock_resp.status_code = 200
    mock_post.return_value = mock_resp

    success, msg = provider.send_message("fake_token", "12345", "Test message")

    assert success is True
    assert "✅" in msg
    assert mock_post.call_args[1]["json"]["chat_id"] == "12345"


@patch('requests.post')
def test_send_message_api_error(mock_post, provider):
    mock_resp = MagicMock()
    mock_resp.status_code = 400
    mock_resp.text = "Bad Request"
    mock_post.return_value = mock_resp

    success, msg = provider.send_message("fake_token", "12345", "Test message")

    assert success is False
    assert "Telegram error" in msg
    assert "Bad Request" in msg


@patch('requests.post')
def test_send_message_network_error(mock_post, provider):
    mock_post.side_effect = requests.ConnectionError("Connection Refused")

    success, msg = provider.send_message("fake_token", "12345", "Test message")

    assert success is False
    assert "Network error" in msg


def test_send_message_missing_credentials(provider):
    success, msg = provider.send_message("", "12345", "Test message")
    assert success is False
    assert "❌" in msg

    success, msg = provider.send_message("token", "", "Test message")
    assert success is False
    assert "❌" in msg


def test_format_lead_message_escapes_markdown():
    lead = {
        "full_name": "Jane_Doe",
        "email": "jane@example.com",
        "company": "Acme",
        "service": "events",
        "plan": "event-pro",
        "budget": "$5k",
        "message": "Need *QR* codes",
    }
    text = telegram_utils.format_lead_message(lead)
    assert "Jane\\_Doe" in text
    assert "Need \\*QR\\* codes" in text
    assert "Event Technology" in text
    assert "Plan: Event Pro" in text


def test_format_lead_message_truncates_long_text():
    lead = {"full_name": "A", "email": "a@b.co", "service": "web", "message": "x" * 800}
    text = telegram_utils.format_lead_message(lead)
    assert text.endswith("…")
    assert "x" * 501 not in text


def test_format_digest():
    leads = [
        {"created_at": "2025-03-01T09:00:00", "status": "new", "service": "web"},
        {"created_at": "2025-03-01T15:00:00", "status": "contacted", "service": "web"},
        {"created_at": "2025-02-27T10:00:00", "status": "won", "service": "events"},
    ]
    text = telegram_utils.format_digest(leads, datetime(2025, 3, 1))
    assert "01.03.2025" in text
    assert "New today: *2*" in text
    assert "Open pipeline: *2*" in text
    assert "Web Design & Development: 2" in text


def test_format_digest_empty():
    text = telegram_utils.format_digest([], datetime(2025, 3, 1))
    assert "No inquiries yet." in text
