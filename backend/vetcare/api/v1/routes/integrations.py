"""Module: integrations."""

import httpx
from fastapi import APIRouter, Depends, HTTPException

from vetcare.api.v1.routes.deps import require_admin
from vetcare.core.config import settings
from vetcare.db.models.user import User

router = APIRouter()


# Endpoint: reachability check for the messaging gateway.
@router.get("/messaging/ping")
async def messaging_ping(_: User = Depends(require_admin)):
    try:
        async with httpx.AsyncClient(timeout=5) as client:
            r = await client.get(f"{settings.messaging_base_url}/ping")
            r.raise_for_status()
    except httpx.HTTPError as exc:
        raise HTTPException(status_code=502, detail=f"Messaging gateway unavailable: {exc}")
    return {"upstream": "messaging", "response": r.json()}
