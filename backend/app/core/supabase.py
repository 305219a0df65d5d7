from dataclasses import dataclass
from typing import AsyncIterator, Dict, Optional

import httpx
from fastapi import Depends, HTTPException, status

from app.core.config import Settings, get_settings


@dataclass(frozen=True)
class SupabaseConfig:
    url: str
    anon_key: str
    service_role_key: str


def require_supabase_config(settings: Settings = Depends(get_settings)) -> SupabaseConfig:
    url = settings.supabase_url
    anon_key = settings.supabase_anon_key
    service_role_key = settings.supabase_service_role_key
    if not url or not anon_key or not service_role_key:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Supabase env is not fully configured",
        )
    return SupabaseConfig(
        url=url.rstrip("/"),
        anon_key=anon_key,
        service_role_key=service_role_key,
    )


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.SUPABASE_TIMEOUT_SECONDS) as client:
        yield client


class SupabaseClient:
    """
    Read-only access to the Supabase auth and PostgREST endpoints.

    Session introspection uses the anon key with the caller's token; table
    reads use the service role key so row level security does not apply.
    """

    def __init__(self, config: SupabaseConfig, http: httpx.AsyncClient):
        self.config = config
        self.http = http

    def _service_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.service_role_key}",
            "apikey": self.config.service_role_key,
            "Accept": "application/json",
        }

    async def get_auth_user(self, token: str) -> httpx.Response:
        return await self.http.get(
            f"{self.config.url}/auth/v1/user",
            headers={
                "Authorization": f"Bearer {token}",
                "apikey": self.config.anon_key,
                "Accept": "application/json",
            },
        )

    async def select(
        self,
        table: str,
        columns: str,
        filters: Optional[Dict[str, str]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> httpx.Response:
        """
        PostgREST read. ``filters`` maps column names to operator expressions
        such as ``eq.5`` or ``neq.admin``; ``order`` uses ``<column>.desc``.
        """
        params: Dict[str, str] = {"select": columns}
        if filters:
            params.update(filters)
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        return await self.http.get(
            f"{self.config.url}/rest/v1/{table}",
            params=params,
            headers=self._service_headers(),
        )


def get_supabase_client(
    config: SupabaseConfig = Depends(require_supabase_config),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> SupabaseClient:
    return SupabaseClient(config, http)
