import asyncio
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from core.github_oauth import exchange_code_for_token, get_authorization_url

router = APIRouter()


class OAuthCallback(BaseModel):
    code: Optional[str] = None
    redirect_uri: Optional[str] = None


@router.get("/github/login")
async def github_login(redirect_uri: Optional[str] = None):
    """Returns the GitHub authorize URL the browser should be sent to."""
    return get_authorization_url(redirect_uri)


@router.post("/github/callback")
async def github_callback(payload: OAuthCallback):
    """Exchanges the code GitHub handed back for an access token."""
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, exchange_code_for_token, payload.code, payload.redirect_uri)
