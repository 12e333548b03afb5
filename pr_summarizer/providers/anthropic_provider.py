"""Anthropic messages provider."""

from __future__ import annotations

import logging
from typing import Any

from anthropic import Anthropic

from pr_summarizer.core.errors import ProviderResponseFormatError
from pr_summarizer.providers.base import SummaryProvider

DEFAULT_ANTHROPIC_MODEL = "claude-3-sonnet-20240229"

SYSTEM_PROMPT = (
    "You are a helpful assistant that creates clear and concise pull request descriptions."
)
MAX_TOKENS = 1000


class AnthropicProvider(SummaryProvider):
    """Provider backed by ``messages.create``."""

    _logger = logging.getLogger(__name__)

    def __init__(self, *, api_key: str, model: str | None = None, client: Any = None) -> None:
        self._model = model or DEFAULT_ANTHROPIC_MODEL
        self._client = client or Anthropic(api_key=api_key, max_retries=0)

    @property
    def model(self) -> str:
        return self._model

    def generate(self, prompt: str) -> str:
        """Returns the text of all returned content blocks, concatenated in order."""

        self._logger.info("Requesting summary from Anthropic: model=%s", self._model)
        response = self._client.messages.create(
            model=self._model,
            system=SYSTEM_PROMPT,
            max_tokens=MAX_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )
        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: Any) -> str:
        blocks = getattr(response, "content", None)
        if not blocks:
            raise ProviderResponseFormatError(provider="Anthropic", detail="no content blocks")
        # Non-text blocks (e.g. tool use) carry no ``text`` and are skipped.
        texts: list[str] = []
        for block in blocks:
            block_text = getattr(block, "text", None)
            if getattr(block, "type", "text") == "text" and isinstance(block_text, str):
                texts.append(block_text)
        text = "".join(texts)
        if not text.strip():
            raise ProviderResponseFormatError(
                provider="Anthropic", detail="content blocks carry no text"
            )
        return text
