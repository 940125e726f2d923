from datetime import datetime
from unittest.mock import patch

import daily_leads_digest
from infrastructure.repositories.sqlite_lead_repository import SQLiteLeadRepository


def test_load_settings_prefers_secrets_file(tmp_path, monkeypatch):
    secrets = tmp_path / "secrets.toml"
    secrets.write_text('TG_BOT_TOKEN = "file-token"\nSITE_DB = "from-file.db"\n')
    monkeypatch.setenv("TG_CHAT_ID", "env-chat")
    monkeypatch.delenv("TG_BOT_TOKEN", raising=False)

    settings = daily_leads_digest.load_settings(str(secrets))

    assert settings == {"token": "file-token", "chat_id": "env-chat", "db_path": "from-file.db"}


def test_load_settings_without_file(tmp_path, monkeypatch):
    monkeypatch.setenv("TELEGRAM_TOKEN", "legacy-token")
    monkeypatch.delenv("TG_BOT_TOKEN", raising=False)
    monkeypatch.delenv("SITE_DB", raising=False)

    settings = daily_leads_digest.load_settings(str(tmp_path / "missing.toml"))

    assert settings["token"] == "legacy-token"
    assert settings["db_path"] == "site.db"


@patch("daily_leads_digest.telegram_utils.send_telegram_message", return_value=(True, "✅ Notification sent."))
def test_send_daily_digest_reports_yesterday(mock_send, tmp_path):
    db_path = str(tmp_path / "site.db")
    repo = SQLiteLeadRepository(db_path)
    repo.init_db()
    repo.create_lead("Jane", "jane@example.com", "web", "Site", "2025-03-01T10:00:00")

    ok = daily_leads_digest.send_daily_digest(
        now=datetime(2025, 3, 2, 8, 0),
        settings={"token": "t", "chat_id": "c", "db_path": db_path},
    )

    assert ok is True
    token, chat_id, report = mock_send.call_args[0]
    assert (token, chat_id) == ("t", "c")
    assert "01.03.2025" in report
    assert "New today: *1*" in report


@patch("daily_leads_digest.telegram_utils.send_telegram_message", return_value=(True, "✅ Notification sent."))
@patch("daily_leads_digest.datetime")
def test_send_daily_digest_uses_utc_day(mock_datetime, mock_send, tmp_path):
    # Inquiries are stamped in UTC, so the digest day must be a UTC day too.
    mock_datetime.utcnow.return_value = datetime(2025, 3, 2, 0, 30)
    mock_datetime.now.return_value = datetime(2025, 3, 3, 9, 30)
    db_path = str(tmp_path / "site.db")
    repo = SQLiteLeadRepository(db_path)
    repo.init_db()
    repo.create_lead("Jane", "jane@example.com", "web", "Site", "2025-03-01T23:50:00")

    daily_leads_digest.send_daily_digest(settings={"token": "t", "chat_id": "c", "db_path": db_path})

    report = mock_send.call_args[0][2]
    assert "01.03.2025" in report
    assert "New today: *1*" in report
