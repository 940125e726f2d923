"""Cron entry point: posts yesterday's inquiries and the open pipeline to the studio chat."""

import logging
import os
import sys
from datetime import datetime, timedelta

import toml

import telegram_utils
from infrastructure.observability import setup_observability
from infrastructure.repositories.sqlite_lead_repository import SQLiteLeadRepository

log = logging.getLogger(__name__)

SECRETS_FILE = ".streamlit/secrets.toml"


def load_settings(path=SECRETS_FILE):
    """Secrets file first (local runs), then environment variables (server)."""
    try:
        secrets = toml.load(path)
    except (FileNotFoundError, toml.TomlDecodeError):
        secrets = {}

    def _get(*keys):
        for key in keys:
            value = secrets.get(key) or os.getenv(key)
            if value:
                return value
        return None

    return {
        "token": _get("TG_BOT_TOKEN", "TELEGRAM_TOKEN"),
        "chat_id": _get("TG_CHAT_ID", "TELEGRAM_CHAT_ID"),
        "db_path": _get("SITE_DB") or "site.db",
    }


def send_daily_digest(now=None, settings=None):
    settings = settings or load_settings()
    now = now or datetime.utcnow()
    target_date = now - timedelta(days=1)
    log.info(f"🚀 Building inquiries digest for {target_date.date()}")

    repo = SQLiteLeadRepository(settings["db_path"])
    repo.init_db()
    report = telegram_utils.format_digest(repo.list_leads(), target_date)

    success, msg = telegram_utils.send_telegram_message(settings["token"], settings["chat_id"], report)
    if success:
        log.info(msg)
    else:
        log.error(msg)
    return success


if __name__ == "__main__":
    setup_observability()
    sys.exit(0 if send_daily_digest() else 1)
