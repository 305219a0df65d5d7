from fastapi import HTTPException, status

from app.core.roles import BRANCH_ADMIN, USER_ADMIN_ROLES
from app.schemas.users import CallerProfile


def require_user_admin(caller: CallerProfile) -> CallerProfile:
    if caller.role not in USER_ADMIN_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin or branch admin access required",
        )

    # Bad profile data rather than a permission problem.
    if caller.role == BRANCH_ADMIN and not caller.branch_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Branch admin must belong to a branch",
        )

    return caller
