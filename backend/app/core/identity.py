import logging

from fastapi import HTTPException, status

from app.core.supabase import SupabaseClient
from app.schemas.users import CallerProfile

logger = logging.getLogger(__name__)


async def resolve_caller(client: SupabaseClient, token: str) -> CallerProfile:
    """
    Resolve the bearer token to the caller's row in ``public.users``.

    The session is validated by Supabase Auth; the profile is then read with
    the service role key, keyed by ``auth_user_id``.
    """
    auth_response = await client.get_auth_user(token)
    if not auth_response.is_success:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired Supabase session token",
        )

    auth_user = auth_response.json()
    auth_user_id = auth_user.get("id") if isinstance(auth_user, dict) else None
    if not auth_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Supabase user payload",
        )

    profile_response = await client.select(
        "users",
        "id,role,branch_id",
        filters={"auth_user_id": f"eq.{auth_user_id}"},
        limit=1,
    )
    if not profile_response.is_success:
        logger.error(
            f"Profile lookup failed for auth user {auth_user_id}: "
            f"HTTP {profile_response.status_code}"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to resolve caller profile",
        )

    rows = profile_response.json()
    if not isinstance(rows, list) or not rows:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User profile not found",
        )

    return CallerProfile(**rows[0])
