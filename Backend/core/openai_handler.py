import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from core.config import get_settings
from core.errors import GenerationError

logger = logging.getLogger(__name__)


class OpenAIHandler:
    """Chat-completions wrapper used by the GPT-4o backend."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None,
                 max_tokens: int = 2000, temperature: float = 0.7):
        self._api_key = api_key
        self._model_name = model_name
        self.max_tokens = max_tokens
        self.temperature = temperature

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key or get_settings().openai_api_key

    @property
    def model_name(self) -> str:
        return self._model_name or get_settings().openai_model

    def call_openai(self, system_prompt: str, prompt: str) -> str:
        """Returns the first choice's content, or "" when there is none."""
        if not self.api_key:
            logger.error("OPENAI_API_KEY is not configured")
            raise GenerationError("Failed to generate portfolio with GPT")

        try:
            client = OpenAI(api_key=self.api_key, timeout=get_settings().generation_timeout, max_retries=0)
            completion = client.chat.completions.create(
                model=self.model_name,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except OpenAIError as e:
            logger.error("OpenAI API error (%s): %s", type(e).__name__, e)
            raise GenerationError("Failed to generate portfolio with GPT") from e

        try:
            if not completion.choices:
                return ""
            return completion.choices[0].message.content or ""
        except (AttributeError, TypeError) as e:
            logger.error("Malformed OpenAI response: %s", e)
            raise GenerationError("Failed to generate portfolio with GPT") from e


openai_client = OpenAIHandler()
