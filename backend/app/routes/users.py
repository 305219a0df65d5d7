import logging
from typing import Any, Dict, List

import httpx
from fastapi import APIRouter, Depends, HTTPException, status

from app.core.branches import attach_branch_names, fetch_branch_names
from app.core.guards import require_user_admin
from app.core.identity import resolve_caller
from app.core.roles import ADMIN, BRANCH_ADMIN, normalize_role
from app.core.security import get_bearer_token
from app.core.supabase import SupabaseClient, get_supabase_client
from app.schemas.users import CallerProfile, UsersResponse

router = APIRouter(prefix="/auth/supabase", tags=["users"])
logger = logging.getLogger(__name__)

USER_COLUMNS = "id,username,email,full_name,role,receives_transportation,created_at,branch_id"


async def fetch_users(client: SupabaseClient, caller: CallerProfile) -> List[Dict[str, Any]]:
    filters = {}
    if caller.role == BRANCH_ADMIN:
        # Branch admins only see their own branch, never global admins.
        filters["branch_id"] = f"eq.{caller.branch_id}"
        filters["role"] = f"neq.{ADMIN}"

    response = await client.select(
        "users",
        USER_COLUMNS,
        filters=filters,
        order="created_at.desc",
    )
    if not response.is_success:
        logger.error(f"Failed to fetch users: HTTP {response.status_code}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch users: {response.text}",
        )
    return response.json() or []


@router.get("/users", response_model=UsersResponse)
async def list_users(
    client: SupabaseClient = Depends(get_supabase_client),
    token: str = Depends(get_bearer_token),
):
    """
    List application users for an admin or branch admin.

    Roles are normalized for display and each row carries ``branch_name``.
    """
    try:
        caller = require_user_admin(await resolve_caller(client, token))
        users = await fetch_users(client, caller)
        branch_names = await fetch_branch_names(client)
    except httpx.HTTPError as exc:
        logger.error(f"Supabase request failed: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )

    results = []
    for row in attach_branch_names(users, branch_names):
        row["role"] = normalize_role(row.get("role"))
        results.append(row)

    return {"users": results}
