"""Gemini LLM integration for the content generation chains"""

import logging
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import types
from langchain_core.callbacks.manager import AsyncCallbackManagerForLLMRun, CallbackManagerForLLMRun
from langchain_core.language_models.llms import LLM

from .config import GEMINI_API_KEY, GEMINI_MODEL, PROJECT_ID, LOCATION, load_service_account_credentials
from .errors import ContentGenerationError
from ..schemas import get_schema

logger = logging.getLogger(__name__)


def get_gemini_client() -> genai.Client:
    """Create a Gemini client, API key first, Vertex AI service account otherwise"""
    if GEMINI_API_KEY:
        return genai.Client(api_key=GEMINI_API_KEY)
    return genai.Client(
        vertexai=True,
        project=PROJECT_ID,
        location=LOCATION,
        credentials=load_service_account_credentials()
    )


class GeminiLLM(LLM):
    """Gemini text completion exposed as a LangChain LLM"""

    model_name: str = GEMINI_MODEL
    gemini_configs: Dict[str, Any] = {
        'max_output_tokens': 8192,
        'temperature': 1,
    }
    system_instruction: Optional[str] = None
    response_schema: Optional[str] = None  # name in the schemas registry

    def setup_gemini(self) -> genai.Client:
        return get_gemini_client()

    def _build_config(self) -> types.GenerateContentConfig:
        config_dict = dict(self.gemini_configs)
        if self.system_instruction:
            config_dict['system_instruction'] = self.system_instruction
        if self.response_schema:
            # Structured JSON output
            config_dict['response_mime_type'] = 'application/json'
            config_dict['response_schema'] = get_schema(self.response_schema)
        return types.GenerateContentConfig(**config_dict)

    def _extract_text(self, response) -> str:
        text = getattr(response, 'text', None) or ""
        if not text.strip():
            raise ContentGenerationError(f"{self.model_name} returned an empty response")
        return text.strip()

    def _call(
        self,
        prompt: str,
        stop: Optional[List[str]] = None,
        run_manager: Optional[CallbackManagerForLLMRun] = None,
        **kwargs: Any,
    ) -> str:
        client = self.setup_gemini()
        logger.info(f"[Gemini] Calling {self.model_name} (schema={self.response_schema}, prompt={len(prompt)} chars)")
        response = client.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=self._build_config()
        )
        return self._extract_text(response)

    async def _acall(
        self,
        prompt: str,
        stop: Optional[List[str]] = None,
        run_manager: Optional[AsyncCallbackManagerForLLMRun] = None,
        **kwargs: Any,
    ) -> str:
        client = self.setup_gemini()
        logger.info(f"[Gemini] Calling {self.model_name} async (schema={self.response_schema}, prompt={len(prompt)} chars)")
        response = await client.aio.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=self._build_config()
        )
        return self._extract_text(response)

    @property
    def _llm_type(self):
        return "gemini"


def get_llm(**kwargs):
    """Get Gemini LLM instance

    Args:
        **kwargs: Configuration parameters passed to GeminiLLM

    Returns:
        GeminiLLM instance
    """
    # Remove any model parameter (always use Gemini)
    kwargs.pop('model', None)
    return GeminiLLM(**kwargs)
