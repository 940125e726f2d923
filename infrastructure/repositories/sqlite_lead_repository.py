import sqlite3
from typing import Any, Dict, List, Optional

LEAD_STATUSES = ("new", "contacted", "proposal", "won", "lost")

LEAD_COLUMNS = (
    "id", "full_name", "email", "company", "phone", "service", "plan",
    "budget", "message", "status", "user_id", "created_at", "updated_at",
)


def _row_to_lead(row) -> Dict[str, Any]:
    return dict(zip(LEAD_COLUMNS, row))


class SQLiteLeadRepository:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _conn(self):
        return sqlite3.connect(self.db_path)

    def _get_current_version(self, conn) -> int:
        row = conn.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='schema_info'").fetchone()
        if row:
            version_row = conn.execute("SELECT version FROM schema_info").fetchone()
            if version_row:
                return version_row[0]
        return 0

    def _migrate_v1(self, conn):
        """Baseline schema (v1)."""
        conn.execute("""
            CREATE TABLE IF NOT EXISTS leads (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                full_name TEXT NOT NULL,
                email TEXT NOT NULL,
                company TEXT,
                phone TEXT,
                service TEXT NOT NULL,
                plan TEXT,
                budget TEXT,
                message TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'new',
                user_id TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        conn.execute("CREATE INDEX IF NOT EXISTS idx_leads_email ON leads (email)")

    def init_db(self):
        MIGRATIONS = [self._migrate_v1]

        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS schema_info (
                    version INTEGER NOT NULL
                )
            """)
            current_version = self._get_current_version(conn)

            has_version_row = conn.execute("SELECT COUNT(*) FROM schema_info").fetchone()[0] > 0
            if not has_version_row:
                conn.execute("INSERT INTO schema_info (version) VALUES (?)", (current_version,))

            for i in range(current_version, len(MIGRATIONS)):
                target_version = i + 1
                try:
                    MIGRATIONS[i](conn)
                    conn.execute("UPDATE schema_info SET version = ?", (target_version,))
                except Exception as e:
                    # Leaving the `with` block by exception rolls back every step of this run.
                    raise RuntimeError(f"Database migration to v{target_version} failed: {e}") from e

            conn.commit()

    def create_lead(self, full_name, email, service, message, created_at,
                    company=None, phone=None, plan=None, budget=None, user_id=None) -> int:
        with self._conn() as conn:
            cur = conn.execute("""
                INSERT INTO leads (full_name, email, company, phone, service, plan, budget, message,
                                   status, user_id, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, 'new', ?, ?, ?)
            """, (full_name, email, company, phone, service, plan, budget, message, user_id, created_at, created_at))
            conn.commit()
            return cur.lastrowid

    def get_lead(self, lead_id: int) -> Optional[Dict[str, Any]]:
        with self._conn() as conn:
            row = conn.execute(f"SELECT {', '.join(LEAD_COLUMNS)} FROM leads WHERE id = ?", (lead_id,)).fetchone()
            return _row_to_lead(row) if row else None

    def list_leads(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        query = f"SELECT {', '.join(LEAD_COLUMNS)} FROM leads"
        params: tuple = ()
        if status:
            query += " WHERE status = ?"
            params = (status,)
        query += " ORDER BY created_at DESC, id DESC"
        with self._conn() as conn:
            return [_row_to_lead(row) for row in conn.execute(query, params).fetchall()]

    def list_leads_for_client(self, email: str, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        with self._conn() as conn:
            rows = conn.execute(f"""
                SELECT {', '.join(LEAD_COLUMNS)} FROM leads
                WHERE lower(email) = lower(?) OR (user_id IS NOT NULL AND user_id = ?)
                ORDER BY created_at DESC, id DESC
            """, (email, user_id)).fetchall()
            return [_row_to_lead(row) for row in rows]

    def update_status(self, lead_id: int, status: str, updated_at: str) -> bool:
        with self._conn() as conn:
            cur = conn.execute(
                "UPDATE leads SET status = ?, updated_at = ? WHERE id = ?",
                (status, updated_at, lead_id),
            )
            conn.commit()
            return cur.rowcount > 0

    def count_by_status(self) -> Dict[str, int]:
        with self._conn() as conn:
            rows = conn.execute("SELECT status, COUNT(*) FROM leads GROUP BY status").fetchall()
        counts = {status: 0 for status in LEAD_STATUSES}
        counts.update({status: count for status, count in rows})
        return counts
