import sqlite3
import json
from typing import Optional, Dict, Any, List, Tuple
from datetime import datetime
import logging
from enum import Enum

log = logging.getLogger(__name__)

class AuditAction(str, Enum):
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAIL = "LOGIN_FAIL"
    LOGOUT = "LOGOUT"
    SIGNUP = "SIGNUP"
    RBAC_DENIED = "RBAC_DENIED"
    LEAD_CREATE = "LEAD_CREATE"
    LEAD_STATUS_CHANGE = "LEAD_STATUS_CHANGE"
    PAYMENT_LINK = "PAYMENT_LINK"
    QR_GENERATED = "QR_GENERATED"

ALLOWED_METADATA_KEYS = {
    "reason", "target_page", "new_status", "old_status", "service",
    "plan", "amount", "currency", "event_type", "role",
}

MAX_METADATA_LENGTH = 2000


def _clip(value: Any, limit: int) -> Optional[str]:
    return str(value)[:limit] if value is not None else None


def _metadata_json(metadata: Dict[str, Any]) -> str:
    """Whitelisted keys only; values that look like credentials are dropped."""
    safe_meta = {
        k: v for k, v in metadata.items()
        if k in ALLOWED_METADATA_KEYS and "password" not in str(v).lower() and "token" not in str(v).lower()
    }
    try:
        meta_str = json.dumps(safe_meta)
    except (TypeError, ValueError):
        return "{\"error\": \"unserializable\"}"
    if len(meta_str) > MAX_METADATA_LENGTH:
        safe_meta["truncated"] = True
        meta_str = json.dumps(safe_meta)[:MAX_METADATA_LENGTH]
    return meta_str


class SQLiteAuditRepository:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _conn(self):
        return sqlite3.connect(self.db_path)

    def init_db(self):
        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS audit_log (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    ts TEXT NOT NULL,
                    actor_user_id TEXT,
                    actor_role TEXT,
                    action TEXT NOT NULL,
                    target_type TEXT NOT NULL,
                    target_id TEXT,
                    metadata_json TEXT,
                    result TEXT NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_audit_ts ON audit_log (ts)")
            conn.commit()

    def log_action(
        self,
        action: Any,
        target_type: str,
        actor_user_id: Optional[str] = None,
        actor_role: Optional[str] = None,
        target_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        result: str = "success"
    ):
        """Logs an action to the audit repository. Never raises."""
        try:
            action_val = action.value if isinstance(action, AuditAction) else _clip(action, 50)
            row = (
                datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S"),
                _clip(actor_user_id, 64),
                _clip(actor_role, 20),
                action_val or "UNKNOWN",
                _clip(target_type, 50) or "UNKNOWN",
                _clip(target_id, 100),
                _metadata_json(metadata) if metadata is not None else None,
                _clip(result, 20) or "unknown",
            )
            with self._conn() as conn:
                conn.execute("""
                    INSERT INTO audit_log
                    (ts, actor_user_id, actor_role, action, target_type, target_id, metadata_json, result)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """, row)
                conn.commit()
        except Exception as e:
            # Audit failures must not crash the site
            log.error(f"Audit log failed for action {action}: {e}", exc_info=True)

    def get_logs(self, limit: int = 100, action_filter: Optional[str] = None) -> List[Tuple]:
        """Fetches the most recent audit entries for the admin dashboard."""
        try:
            with self._conn() as conn:
                query = """
                    SELECT id, ts, COALESCE(actor_user_id, 'ANONYMOUS'), actor_role, action,
                           target_type, target_id, metadata_json, result
                    FROM audit_log
                    WHERE 1=1
                """
                params: List[Any] = []
                if action_filter and action_filter != "All":
                    query += " AND action = ?"
                    params.append(action_filter)

                query += " ORDER BY ts DESC, id DESC LIMIT ?"
                params.append(limit)

                return conn.execute(query, tuple(params)).fetchall()
        except Exception as e:
            log.error(f"Failed to fetch audit logs: {e}", exc_info=True)
            return []
