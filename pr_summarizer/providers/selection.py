"""Provider selection.

Rules, evaluated in order:

1. The Anthropic provider is requested and an Anthropic key is present.
2. An OpenAI key is present (whatever provider was requested).
3. Otherwise no provider is usable.
"""

from __future__ import annotations

from typing import Any

from pr_summarizer.core.errors import ProviderConfigError
from pr_summarizer.providers.anthropic_provider import DEFAULT_ANTHROPIC_MODEL, AnthropicProvider
from pr_summarizer.providers.base import ProviderConfig, ProviderKind, SummaryProvider
from pr_summarizer.providers.openai_provider import DEFAULT_OPENAI_MODEL, OpenAIProvider


def resolve_provider_config(
    *,
    provider_kind: str | None,
    openai_api_key: str | None,
    anthropic_api_key: str | None,
    model: str | None = None,
) -> ProviderConfig:
    """Selects the provider to use.

    Args:
        provider_kind: Requested provider name ('openai' or 'anthropic').
        openai_api_key: OpenAI API key, if any.
        anthropic_api_key: Anthropic API key, if any.
        model: Model identifier; the selected provider's default when unset.

    Returns:
        The resolved configuration.

    Raises:
        ProviderConfigError: If neither rule yields a usable key.
    """

    requested = (provider_kind or "").strip().lower()
    anthropic_key = (anthropic_api_key or "").strip()
    openai_key = (openai_api_key or "").strip()
    model_name = (model or "").strip() or None

    if requested == ProviderKind.ANTHROPIC.value and anthropic_key:
        return ProviderConfig(
            kind=ProviderKind.ANTHROPIC,
            api_key=anthropic_key,
            model=model_name or DEFAULT_ANTHROPIC_MODEL,
        )
    if openai_key:
        return ProviderConfig(
            kind=ProviderKind.OPENAI,
            api_key=openai_key,
            model=model_name or DEFAULT_OPENAI_MODEL,
        )
    raise ProviderConfigError(
        "No usable provider configuration: either an OpenAI or an Anthropic API key "
        "must be provided (an Anthropic key is only used with model-provider 'anthropic')."
    )


def create_provider(config: ProviderConfig, *, client: Any = None) -> SummaryProvider:
    """Instantiates the provider for ``config``.

    Args:
        config: Resolved configuration.
        client: Optional pre-built SDK client (used by tests).
    """

    if config.kind is ProviderKind.ANTHROPIC:
        return AnthropicProvider(api_key=config.api_key, model=config.model, client=client)
    return OpenAIProvider(api_key=config.api_key, model=config.model, client=client)
