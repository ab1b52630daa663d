import asyncio
from typing import Any, Dict, Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from core.generation import GeminiBackend, GenerationBackend, OpenAIBackend, parse_portfolio_data

router = APIRouter()

gemini_backend = GeminiBackend()
openai_backend = OpenAIBackend()


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    portfolio_data: Optional[Dict[str, Any]] = Field(None, alias="portfolioData")


async def _generate(backend: GenerationBackend, request: GenerateRequest) -> Dict[str, Any]:
    payload = parse_portfolio_data(request.portfolio_data)
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, backend.generate, payload)


@router.post("/generate-portfolio")
async def generate_portfolio(request: GenerateRequest):
    """Markdown portfolio written by Gemini."""
    return await _generate(gemini_backend, request)


@router.post("/generate-portfolio-gpt")
async def generate_portfolio_gpt(request: GenerateRequest):
    """Markdown portfolio written by GPT-4o."""
    return await _generate(openai_backend, request)
