from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from core.errors import UpstreamAuthError

# The browser sends the GitHub access token obtained from /api/auth/github/callback
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/github/callback", auto_error=False)


async def get_github_token(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    """Resolves the caller's GitHub token or rejects the request with 401."""
    if not token:
        raise UpstreamAuthError()
    return token
