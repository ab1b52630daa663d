"""
Portfolio aggregation: one profile + repository list, N README lookups,
merged into a single PortfolioPayload.
"""
import asyncio
import logging
from typing import Callable, List, Optional

from core import github_client
from core.models import (
    Identity,
    PortfolioPayload,
    PortfolioRepository,
    ReadmeResult,
    RepositorySummary,
)

logger = logging.getLogger(__name__)

ReadmeFetcher = Callable[[str, str, str], ReadmeResult]


async def _fetch_readme_soft(fetch_readme: ReadmeFetcher, token: str, repo: RepositorySummary, owner: str) -> ReadmeResult:
    """Fetch one README; any failure becomes the absence marker."""
    loop = asyncio.get_event_loop()
    try:
        return await loop.run_in_executor(None, fetch_readme, token, owner, repo.name)
    except Exception as e:
        logger.warning("README fetch failed for %s/%s, treating as missing: %s", owner, repo.name, e)
        return ReadmeResult.missing()


async def aggregate_portfolio(
    token: str,
    user: Identity,
    repositories: List[RepositorySummary],
    fetch_readme: Optional[ReadmeFetcher] = None,
) -> PortfolioPayload:
    """
    Fetch every repository's README concurrently and merge the results.

    Results are collected positionally, so the payload keeps the order of
    `repositories` no matter which fetch finishes first. One bad repository
    never fails the whole aggregation.
    """
    fetch_readme = fetch_readme or github_client.fetch_readme

    tasks = [
        _fetch_readme_soft(fetch_readme, token, repo, repo.owner_login or user.login)
        for repo in repositories
    ]
    readmes = await asyncio.gather(*tasks)

    entries = [PortfolioRepository.from_parts(repo, readme) for repo, readme in zip(repositories, readmes)]
    logger.info(
        "Aggregated %d repositories for %s (%d with README)",
        len(entries), user.login, sum(1 for e in entries if e.has_readme),
    )
    return PortfolioPayload(user=user, repositories=entries)


async def build_portfolio(token: str) -> PortfolioPayload:
    """Run the whole pipeline server-side: profile + repos, then READMEs."""
    loop = asyncio.get_event_loop()
    user, repositories = await loop.run_in_executor(None, github_client.fetch_profile_and_repositories, token)
    return await aggregate_portfolio(token, user, repositories)
