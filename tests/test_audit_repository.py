import json

from infrastructure.repositories.sqlite_audit_repository import AuditAction, SQLiteAuditRepository


def _repo(tmp_path):
    repo = SQLiteAuditRepository(str(tmp_path / "audit.db"))
    repo.init_db()
    return repo


def test_log_and_read_back(tmp_path):
    repo = _repo(tmp_path)
    repo.log_action(
        AuditAction.LEAD_STATUS_CHANGE,
        target_type="lead",
        target_id=7,
        actor_user_id="a-1",
        actor_role="admin",
        metadata={"old_status": "new", "new_status": "won"},
    )

    rows = repo.get_logs()
    assert len(rows) == 1
    _id, _ts, actor, role, action, target_type, target_id, meta_json, result = rows[0]
    assert (actor, role, action, target_type, target_id, result) == (
        "a-1", "admin", "LEAD_STATUS_CHANGE", "lead", "7", "success"
    )
    assert json.loads(meta_json) == {"old_status": "new", "new_status": "won"}


def test_metadata_is_whitelisted_and_secrets_dropped(tmp_path):
    repo = _repo(tmp_path)
    repo.log_action(
        AuditAction.LOGIN_FAIL,
        target_type="auth",
        metadata={"reason": "bad token value", "email": "jane@example.com", "role": "user"},
        result="deny",
    )
    meta = json.loads(repo.get_logs()[0][7])
    assert meta == {"role": "user"}


def test_anonymous_actor_and_filter(tmp_path):
    repo = _repo(tmp_path)
    repo.log_action(AuditAction.SIGNUP, target_type="auth")
    repo.log_action(AuditAction.RBAC_DENIED, target_type="page", target_id="admin", result="deny")

    assert len(repo.get_logs(action_filter="All")) == 2
    denied = repo.get_logs(action_filter="RBAC_DENIED")
    assert len(denied) == 1
    assert denied[0][2] == "ANONYMOUS"


def test_get_logs_survives_missing_table(tmp_path):
    repo = SQLiteAuditRepository(str(tmp_path / "fresh.db"))
    assert repo.get_logs() == []
