import logging
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from core.config import get_settings
from core.errors import GenerationError

logger = logging.getLogger(__name__)


class GeminiHandler:
    """Thin wrapper over the Gemini SDK: one prompt in, one completion text out."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self._api_key = api_key
        self._model_name = model_name

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key or get_settings().gemini_api_key

    @property
    def model_name(self) -> str:
        return self._model_name or get_settings().gemini_model

    def call_gemini(self, prompt: str) -> str:
        """
        Sends `prompt` and returns the first candidate's text verbatim.

        Returns an empty string when Gemini produces no candidate. Every SDK
        failure is raised as GenerationError; nothing is retried.
        """
        if not self.api_key:
            logger.error("GEMINI_API_KEY is not configured")
            raise GenerationError("Failed to generate portfolio")

        try:
            genai.configure(api_key=self.api_key)
            model = genai.GenerativeModel(self.model_name)
            response = model.generate_content(
                prompt,
                request_options={"timeout": get_settings().generation_timeout},
            )
        except google_exceptions.GoogleAPIError as e:
            logger.error("Gemini API error (%s): %s", type(e).__name__, e)
            raise GenerationError("Failed to generate portfolio") from e
        except Exception as e:
            logger.error("Unexpected Gemini failure: %s", e)
            raise GenerationError("Failed to generate portfolio") from e

        if not getattr(response, "candidates", None):
            logger.warning("Gemini returned no candidates")
            return ""

        try:
            return response.text or ""
        except ValueError as e:
            # .text raises when the candidate carries no text parts
            logger.error("Gemini response had no usable text: %s", e)
            raise GenerationError("Failed to generate portfolio") from e


gemini_client = GeminiHandler()
