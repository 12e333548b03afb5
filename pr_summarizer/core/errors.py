"""Error types raised by the summarizer.

Every error is raised where the failure is detected and propagates unchanged to
``pr_summarizer.action.main``, which turns it into the Actions failure signal.
"""

from __future__ import annotations


class PRSummarizerError(RuntimeError):
    """Base class for summarizer errors."""


class ConfigurationError(PRSummarizerError):
    """Raised when required settings (e.g. the GitHub token) are missing."""


class MissingContextError(PRSummarizerError):
    """Raised when the run was not triggered by a pull request event."""


class ProviderConfigError(PRSummarizerError):
    """Raised when no usable LLM provider can be selected."""


class ProviderResponseFormatError(PRSummarizerError):
    """Raised when a provider response carries no usable text."""

    def __init__(self, *, provider: str, detail: str) -> None:
        super().__init__(f"Unexpected response format from {provider} API: {detail}")
        self.provider = provider
        self.detail = detail
