"""
Generation backends.

A backend turns a PortfolioPayload into a prompt and sends it to its hosted
LLM. Both backends share payload parsing and the response shape; each one
supplies only its template and its API call.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from core import prompts
from core.errors import AppError, GenerationError, ValidationError
from core.gemini_handler import GeminiHandler, gemini_client
from core.models import PortfolioPayload
from core.openai_handler import OpenAIHandler, openai_client

logger = logging.getLogger(__name__)


def parse_portfolio_data(portfolio_data: Optional[Dict[str, Any]]) -> PortfolioPayload:
    """Validate the client-supplied portfolioData before any outbound call."""
    if not portfolio_data:
        raise ValidationError("Portfolio data is required")
    try:
        return PortfolioPayload.model_validate(portfolio_data)
    except PydanticValidationError as e:
        logger.warning("Rejected malformed portfolioData: %s", e.errors())
        raise ValidationError("Portfolio data is invalid") from e


class GenerationBackend(ABC):
    name: str = ""
    error_message: str = "Failed to generate portfolio"

    @abstractmethod
    def render_prompt(self, payload: PortfolioPayload) -> str:
        ...

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Call the hosted API and return the completion text ("" if none)."""

    def build_response(self, payload: PortfolioPayload, text: str) -> Dict[str, Any]:
        return {
            "success": True,
            "portfolio": text,
            "user": payload.user.model_dump(),
            "projectCount": len(payload.repositories),
        }

    def generate(self, payload: PortfolioPayload) -> Dict[str, Any]:
        try:
            prompt = self.render_prompt(payload)
            logger.info(
                "Generating portfolio for %s with %s (%d repositories, prompt %d chars)",
                payload.user.login, self.name, len(payload.repositories), len(prompt),
            )
            text = self.complete(prompt)
        except GenerationError:
            raise
        except AppError as e:
            logger.error("%s generation failed: %s", self.name, e.message)
            raise GenerationError(self.error_message) from e
        except Exception as e:
            logger.exception("%s generation failed unexpectedly", self.name)
            raise GenerationError(self.error_message) from e
        return self.build_response(payload, text)


class GeminiBackend(GenerationBackend):
    name = "gemini"

    def __init__(self, handler: Optional[GeminiHandler] = None):
        self.handler = handler or gemini_client

    def render_prompt(self, payload: PortfolioPayload) -> str:
        return prompts.render_gemini_prompt(payload)

    def complete(self, prompt: str) -> str:
        return self.handler.call_gemini(prompt)


class OpenAIBackend(GenerationBackend):
    name = "gpt-4o"
    model_label = "GPT-4o"
    error_message = "Failed to generate portfolio with GPT"

    def __init__(self, handler: Optional[OpenAIHandler] = None):
        self.handler = handler or openai_client

    def render_prompt(self, payload: PortfolioPayload) -> str:
        return prompts.render_gpt_prompt(payload)

    def complete(self, prompt: str) -> str:
        return self.handler.call_openai(prompts.GPT_SYSTEM_PROMPT, prompt)

    def build_response(self, payload: PortfolioPayload, text: str) -> Dict[str, Any]:
        body = super().build_response(payload, text)
        body["aiModel"] = self.model_label
        return body
