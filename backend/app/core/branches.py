import logging
from typing import Any, Dict, Iterable, List

import httpx

from app.core.supabase import SupabaseClient

logger = logging.getLogger(__name__)


async def fetch_branch_names(client: SupabaseClient) -> Dict[str, str]:
    """
    Build a ``{branch_id: name}`` lookup from the full branch list.

    Branch names are cosmetic: any failure yields an empty lookup instead of
    failing the request.
    """
    try:
        response = await client.select("branches", "id,name")
    except httpx.HTTPError as exc:
        logger.warning(f"Branch listing unavailable: {exc}")
        return {}

    if not response.is_success:
        logger.warning(f"Branch listing unavailable: HTTP {response.status_code}")
        return {}

    try:
        branches = response.json() or []
    except ValueError:
        logger.warning("Branch listing returned invalid JSON")
        return {}

    if not isinstance(branches, list):
        logger.warning(f"Branch listing returned {type(branches).__name__}, expected a list")
        return {}

    return {
        str(branch["id"]): branch.get("name")
        for branch in branches
        if isinstance(branch, dict) and branch.get("id") is not None
    }


def attach_branch_names(
    rows: Iterable[Dict[str, Any]],
    branch_names: Dict[str, str],
) -> List[Dict[str, Any]]:
    results = []
    for row in rows:
        branch_id = row.get("branch_id")
        branch_name = branch_names.get(str(branch_id)) if branch_id else None
        results.append({**row, "branch_name": branch_name or None})
    return results
