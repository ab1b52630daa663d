"""
GitHub REST API gateway.

Two operations, both taking the caller's access token explicitly:

    fetch_profile_and_repositories(token) -> (Identity, [RepositorySummary])
    fetch_readme(token, owner, repo)      -> ReadmeResult

Nothing is cached; every call goes to GitHub. Network errors and 5xx answers
are retried with exponential backoff, 4xx answers never are.
"""
import base64
import binascii
import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import backoff
import requests

from core.config import get_settings
from core.errors import UpstreamAuthError, UpstreamFetchError, ValidationError
from core.models import Identity, ReadmeResult, RepositorySummary

logger = logging.getLogger(__name__)

USER_AGENT = "GitHub-Portfolio-App"
API_VERSION = "2022-11-28"
REPOS_PER_PAGE = 100


class _ServerError(Exception):
    """A 5xx answer. Only raised inside the retry loop."""

    def __init__(self, response: requests.Response):
        super().__init__(f"GitHub answered {response.status_code}")
        self.response = response


def _headers(token: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": API_VERSION,
        "User-Agent": USER_AGENT,
    }


def _max_tries() -> int:
    return get_settings().github_max_tries


def _log_backoff(details):
    logger.warning(
        "GitHub request failed (%s), retry %d in %.1fs",
        details.get("exception"), details["tries"], details["wait"],
    )


@backoff.on_exception(
    backoff.expo,
    (requests.exceptions.ConnectionError, requests.exceptions.Timeout, _ServerError),
    max_tries=_max_tries,
    on_backoff=_log_backoff,
)
def _send(url: str, token: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
    response = requests.get(
        url,
        headers=_headers(token),
        params=params,
        timeout=get_settings().github_timeout,
    )
    if response.status_code >= 500:
        raise _ServerError(response)
    return response


def _get(path: str, token: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
    """GET an API path. Transport failures become UpstreamFetchError."""
    url = f"{get_settings().github_api_base}{path}"
    try:
        return _send(url, token, params)
    except _ServerError as e:
        logger.error("GitHub %s gave up after retries: %s", path, e)
        raise UpstreamFetchError("Failed to fetch GitHub data", e.response.status_code) from e
    except requests.exceptions.RequestException as e:
        logger.error("GitHub %s unreachable: %s", path, e)
        raise UpstreamFetchError("Failed to fetch GitHub data") from e


def _require_token(token: str):
    if not token:
        raise UpstreamAuthError()


def fetch_profile_and_repositories(token: str) -> Tuple[Identity, List[RepositorySummary]]:
    """
    Returns the signed-in user's profile and their public repositories.

    The repository call needs the login resolved by the profile call, so the
    two requests run one after the other.
    """
    _require_token(token)

    user_response = _get("/user", token)
    if not user_response.ok:
        logger.error("GitHub /user returned %s: %s", user_response.status_code, user_response.text[:200])
        raise UpstreamFetchError("Failed to fetch user data", user_response.status_code)
    user_data = user_response.json()
    identity = Identity.model_validate(user_data)

    repos_response = _get(
        f"/users/{quote(identity.login, safe='')}/repos",
        token,
        params={"type": "public", "sort": "updated", "per_page": REPOS_PER_PAGE},
    )
    if not repos_response.ok:
        logger.error(
            "GitHub repos for %s returned %s: %s",
            identity.login, repos_response.status_code, repos_response.text[:200],
        )
        raise UpstreamFetchError("Failed to fetch repositories", repos_response.status_code)

    repositories = [RepositorySummary.model_validate(item) for item in repos_response.json()]
    logger.info("Fetched %d repositories for %s", len(repositories), identity.login)
    return identity, repositories


def decode_readme_content(encoded: str) -> str:
    """Decode GitHub's base64 (newline-wrapped) README body to text."""
    try:
        raw = base64.b64decode(encoded)
    except (binascii.Error, ValueError) as e:
        raise UpstreamFetchError("Failed to decode README") from e
    return raw.decode("utf-8", errors="replace")


def fetch_readme(token: str, owner: str, repo: str) -> ReadmeResult:
    """
    Fetch and decode one repository's README.

    A 404 means the repository simply has no README and is returned as
    ReadmeResult(has_readme=False). Any other failure raises.
    """
    _require_token(token)
    if not owner or not repo:
        raise ValidationError("Owner and repo are required")

    response = _get(f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/readme", token)
    if response.status_code == 404:
        return ReadmeResult.missing()
    if not response.ok:
        logger.error("README for %s/%s returned %s", owner, repo, response.status_code)
        raise UpstreamFetchError("Failed to fetch README", response.status_code)

    data = response.json()
    encoded = data.get("content")
    if encoded is None:
        logger.error("README for %s/%s has no content field", owner, repo)
        raise UpstreamFetchError("Failed to fetch README")

    return ReadmeResult(
        has_readme=True,
        content=decode_readme_content(encoded),
        download_url=data.get("download_url"),
    )
