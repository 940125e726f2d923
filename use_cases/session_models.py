"""Session DTOs shared across application layers."""

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

Role = Literal["user", "client", "admin", "super_admin"]

ADMIN_ROLES = frozenset({"admin", "super_admin"})
DEFAULT_ROLE = "user"
HOME_PAGE = "home"


@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: str
    role: str


@dataclass
class SiteState:
    """Everything one browser session knows about who is here and what they see."""

    current_page: str = HOME_PAGE
    selected_plan: Optional[str] = None
    user: Optional[User] = None
    access_token: Optional[str] = None
    loading: bool = True


def user_from_provider(user_data: Mapping[str, Any]) -> User:
    """Build a local user record from the auth provider's user payload."""
    metadata = user_data.get("user_metadata") or {}
    # Roles are granted server-side; user_metadata is writable by the user through the anon key.
    app_metadata = user_data.get("app_metadata") or {}
    email = user_data.get("email") or ""
    return User(
        id=str(user_data["id"]),
        email=email,
        name=metadata.get("name") or email or "User",
        role=app_metadata.get("role") or DEFAULT_ROLE,
    )


def is_admin(user: Optional[User]) -> bool:
    return user is not None and user.role in ADMIN_ROLES
