import asyncio
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from core import github_client
from core.aggregator import build_portfolio
from dependencies import get_github_token

router = APIRouter()


class ReadmeRequest(BaseModel):
    # Both optional so a missing field is reported as 400 by fetch_readme
    owner: Optional[str] = None
    repo: Optional[str] = None


@router.get("/user")
async def get_user_and_repositories(token: str = Depends(get_github_token)):
    """Profile of the signed-in user plus their public repositories."""
    loop = asyncio.get_event_loop()
    user, repositories = await loop.run_in_executor(None, github_client.fetch_profile_and_repositories, token)
    return {
        "user": user.model_dump(),
        "repositories": [repo.model_dump() for repo in repositories],
    }


@router.post("/readme")
async def get_readme(payload: ReadmeRequest, token: str = Depends(get_github_token)):
    loop = asyncio.get_event_loop()
    result = await loop.run_in_executor(None, github_client.fetch_readme, token, payload.owner, payload.repo)
    return result.to_response()


@router.get("/portfolio-data")
async def get_portfolio_data(token: str = Depends(get_github_token)):
    """
    Runs the whole aggregation server-side and returns the payload the
    generation endpoints expect as `portfolioData`.
    """
    payload = await build_portfolio(token)
    return {"portfolioData": payload.to_response()}
