import logging

import requests

log = logging.getLogger(__name__)


class TelegramProvider:
    def send_message(self, token: str, chat_id: str, message: str) -> tuple[bool, str]:
        """
        Sends a text message to the studio's Telegram chat.
        Returns a tuple of (success_boolean, status_message).
        """
        if not token or not chat_id:
            return False, "❌ Telegram token or chat id is missing."

        url = f"https://api.telegram.org/bot{token}/sendMessage"
        payload = {
            "chat_id": chat_id,
            "text": message,
            "parse_mode": "Markdown",
            "disable_web_page_preview": True,
        }

        try:
            response = requests.post(url, json=payload, timeout=10)
            if response.status_code == 200:
                return True, "✅ Notification sent."
            log.error(f"❌ Telegram API error {response.status_code}: {response.text}")
            return False, f"Telegram error: {response.text}"
        except requests.RequestException as e:
            log.error(f"❌ Telegram network error: {e}")
            return False, f"Network error: {str(e)}"
