"""Event QR codes rendered by the public qrserver.com image API."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

QR_API_URL = "https://api.qrserver.com/v1/create-qr-code/"
QR_SIZE = "200x200"
DEFAULT_LOCATION = "https://9lmnts-eventos.vercel.app"
DEFAULT_EVENT_TYPE = "unknown"

# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _iso_now(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_qr_data(
    payload: Mapping[str, Any],
    default_location: str = DEFAULT_LOCATION,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Fill in defaults for every missing field. Key order is the serialized order."""
    now = now or datetime.now(timezone.utc)
    generated_at = _iso_now(now)
    return {
        "eventId": payload.get("eventId") or f"event-{int(now.timestamp() * 1000)}",
        "eventType": payload.get("eventType") or DEFAULT_EVENT_TYPE,
        "timestamp": payload.get("timestamp") or generated_at,
        "location": payload.get("location") or default_location,
        "features": payload.get("features") or [],
        "generatedAt": generated_at,
    }


def build_qr_url(data: Mapping[str, Any], size: str = QR_SIZE) -> str:
    encoded = quote(json.dumps(data, separators=(",", ":"), ensure_ascii=False), safe=_URI_COMPONENT_SAFE)
    return f"{QR_API_URL}?size={size}&data={encoded}"


def generate_qr_code(payload: Mapping[str, Any], default_location: str = DEFAULT_LOCATION) -> Dict[str, Any]:
    data = build_qr_data(payload, default_location=default_location)
    return {"success": True, "qrCode": build_qr_url(data), "data": data}
