from datetime import datetime
from typing import Any, Dict, Iterable

import pandas as pd

from infrastructure.messaging.telegram_provider import TelegramProvider
from services import catalog_service


def _escape(text: Any) -> str:
    value = str(text or "")
    for ch in ("_", "*", "`", "["):
        value = value.replace(ch, f"\\{ch}")
    return value


def format_lead_message(lead: Dict[str, Any]) -> str:
    """Formats a single new inquiry for the studio chat."""
    service = catalog_service.get_service(lead.get("service") or "other")
    plan = catalog_service.get_plan(lead.get("plan"))
    lines = [
        "🆕 *New project inquiry*",
        f"👤 {_escape(lead.get('full_name'))} ({_escape(lead.get('email'))})",
    ]
    if lead.get("company"):
        lines.append(f"🏢 {_escape(lead['company'])}")
    lines.append(f"{service.icon} {_escape(service.name)}")
    if plan is not None:
        lines.append(f"💼 Plan: {_escape(plan.name)}")
    if lead.get("budget"):
        lines.append(f"💰 Budget: {_escape(lead['budget'])}")
    message = str(lead.get("message") or "")
    if len(message) > 500:
        message = message[:500] + "…"
    lines.append("")
    lines.append(_escape(message))
    return "\n".join(lines)


def format_digest(leads: Iterable[Dict[str, Any]], target_date: datetime) -> str:
    """Formats the daily CRM digest: inquiries received on `target_date` and the open pipeline."""
    df = pd.DataFrame(list(leads))
    header = f"📋 *Daily inquiries digest* · {target_date.strftime('%d.%m.%Y')}"
    if df.empty:
        return f"{header}\n\nNo inquiries yet."

    df["created_at"] = pd.to_datetime(df["created_at"])
    df_day = df[df["created_at"].dt.date == target_date.date()]
    open_pipeline = df[df["status"].isin(["new", "contacted", "proposal"])]

    lines = [header, "", f"📥 New today: *{len(df_day)}*", f"🔄 Open pipeline: *{len(open_pipeline)}*"]
    if not df_day.empty:
        lines.append("")
        by_service = df_day["service"].map(lambda s: catalog_service.get_service(s).name).value_counts()
        for name, count in by_service.items():
            lines.append(f"• {_escape(name)}: {count}")
    return "\n".join(lines)


def send_telegram_message(token, chat_id, message):
    return TelegramProvider().send_message(token, chat_id, message)
