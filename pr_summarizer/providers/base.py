"""Provider interface for summary generation backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProviderKind(str, Enum):
    """Supported LLM backends."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


@dataclass(frozen=True)
class ProviderConfig:
    """Resolved provider configuration.

    Attributes:
        kind: Backend to call.
        api_key: API key for that backend.
        model: Model identifier passed to the backend.
    """

    kind: ProviderKind
    api_key: str = field(repr=False)
    model: str


class SummaryProvider:
    """Abstract provider.

    Implementations perform exactly one request per ``generate`` call and never
    retry; transport errors from the underlying SDK propagate unchanged.
    """

    def generate(self, prompt: str) -> str:
        """Generates summary text for ``prompt``.

        Args:
            prompt: The generation request.

        Returns:
            Non-empty generated text.

        Raises:
            ProviderResponseFormatError: If the response carries no usable text.
        """

        raise NotImplementedError
