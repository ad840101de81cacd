from typing import Dict, Optional

ROLE_HIERARCHY: Dict[str, int] = {
    "user": 0,
    "moderator": 1,
    "admin": 2,
    "super_admin": 3,
}

DEFAULT_ROLE = "user"


def normalize_role(role: Optional[str]) -> str:
    if not role:
        return DEFAULT_ROLE
    role = role.strip().lower()
    return role if role in ROLE_HIERARCHY else DEFAULT_ROLE


def role_level(role: Optional[str]) -> int:
    return ROLE_HIERARCHY[normalize_role(role)]


def has_role(role: Optional[str], minimum: str) -> bool:
    return role_level(role) >= role_level(minimum)


def home_route(role: Optional[str]) -> str:
    """Dashboard a user lands on after sign-in."""
    role = normalize_role(role)
    if role == "super_admin":
        return "/dashboard/super-admin"
    if role in ("admin", "moderator"):
        return "/dashboard/admin"
    return "/dashboard"
