"""
GitHub OAuth web flow: build the authorize URL, exchange a code for a token.
"""
import logging
import secrets
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import requests

from core.config import get_settings
from core.errors import ConfigurationError, GitHubApiError, UpstreamFetchError, ValidationError

logger = logging.getLogger(__name__)

GITHUB_OAUTH_BASE = "https://github.com/login/oauth"
OAUTH_SCOPES = "read:user user:email"


def _client_credentials():
    settings = get_settings()
    if not settings.github_client_id or not settings.github_client_secret:
        logger.error("GitHub OAuth client credentials are not configured")
        raise ConfigurationError("GitHub sign-in is not configured")
    return settings.github_client_id, settings.github_client_secret


def get_authorization_url(redirect_uri: Optional[str] = None, state: Optional[str] = None) -> Dict[str, str]:
    client_id, _ = _client_credentials()
    state = state or secrets.token_urlsafe(16)
    params = {"client_id": client_id, "scope": OAUTH_SCOPES, "state": state}
    if redirect_uri:
        params["redirect_uri"] = redirect_uri
    return {"auth_url": f"{GITHUB_OAUTH_BASE}/authorize?{urlencode(params)}", "state": state}


def exchange_code_for_token(code: str, redirect_uri: Optional[str] = None) -> Dict[str, Any]:
    """Trade the callback `code` for an access token."""
    if not code:
        raise ValidationError("Authorization code is required")
    client_id, client_secret = _client_credentials()

    data = {"client_id": client_id, "client_secret": client_secret, "code": code}
    if redirect_uri:
        data["redirect_uri"] = redirect_uri

    try:
        response = requests.post(
            f"{GITHUB_OAUTH_BASE}/access_token",
            data=data,
            headers={"Accept": "application/json"},
            timeout=get_settings().github_timeout,
        )
    except requests.exceptions.RequestException as e:
        logger.error("GitHub token exchange unreachable: %s", e)
        raise UpstreamFetchError("Failed to sign in with GitHub") from e

    if not response.ok:
        logger.error("GitHub token exchange returned %s", response.status_code)
        raise UpstreamFetchError("Failed to sign in with GitHub", response.status_code)

    body = response.json()
    # GitHub reports a bad or expired code as 200 with an "error" field
    if body.get("error") or not body.get("access_token"):
        logger.warning("GitHub rejected OAuth code: %s", body.get("error_description") or body.get("error"))
        raise GitHubApiError("Invalid or expired authorization code", 400)

    return {
        "access_token": body["access_token"],
        "token_type": body.get("token_type", "bearer"),
        "scope": body.get("scope", ""),
    }
