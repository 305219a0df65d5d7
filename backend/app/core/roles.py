from typing import Dict, Optional

ADMIN = "admin"
BRANCH_ADMIN = "branch_admin"
NIGHT_MANAGER = "night_manager"
EMPLOYEE = "employee"

USER_ADMIN_ROLES = frozenset({ADMIN, BRANCH_ADMIN})

# Legacy role names still stored in the users table, keyed to their current name.
ROLE_ALIASES: Dict[str, str] = {
    "rider_incharge": NIGHT_MANAGER,
}


def normalize_role(role: Optional[str]) -> Optional[str]:
    if role is None:
        return None
    return ROLE_ALIASES.get(role, role)
