"""OpenAI chat completions provider."""

from __future__ import annotations

import logging
from typing import Any

from openai import OpenAI

from pr_summarizer.core.errors import ProviderResponseFormatError
from pr_summarizer.providers.base import SummaryProvider

DEFAULT_OPENAI_MODEL = "gpt-4"


class OpenAIProvider(SummaryProvider):
    """Provider backed by ``chat.completions``."""

    _logger = logging.getLogger(__name__)

    def __init__(self, *, api_key: str, model: str | None = None, client: Any = None) -> None:
        self._model = model or DEFAULT_OPENAI_MODEL
        self._client = client or OpenAI(api_key=api_key, max_retries=0)

    @property
    def model(self) -> str:
        return self._model

    def generate(self, prompt: str) -> str:
        """Returns the first choice's message content."""

        self._logger.info("Requesting summary from OpenAI: model=%s", self._model)
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
        )
        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: Any) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            raise ProviderResponseFormatError(provider="OpenAI", detail="no choices returned")
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content.strip():
            raise ProviderResponseFormatError(
                provider="OpenAI", detail="first choice has no message content"
            )
        return content
