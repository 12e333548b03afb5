"""GitHub Action entry point.

Reads inputs from the environment, runs the summary loop once and converts any
failure into the Actions failure signal (an ``::error::`` annotation and a
non-zero exit code).
"""

from __future__ import annotations

import logging

from pr_summarizer.core.config import AppSettings
from pr_summarizer.core.errors import ConfigurationError
from pr_summarizer.core.logging import setup_logging
from pr_summarizer.domain.summary_loop import ProviderSettings, RunResult, SummaryLoop
from pr_summarizer.integrations.github.event_context import EventContext
from pr_summarizer.integrations.github.github_client import GitHubClient, GitHubClientConfig

logger = logging.getLogger(__name__)


def run(*, settings: AppSettings, github_client: GitHubClient | None = None) -> RunResult:
    """Runs the summarizer with ``settings``.

    Args:
        settings: Loaded settings.
        github_client: Optional pre-built client (used by tests).
    """

    context = EventContext.load(
        event_path=settings.github_event_path,
        event_name=settings.github_event_name,
        repository=settings.github_repository,
    )
    # Reject non-PR events before requiring a token or building a client.
    context.pull_request_ref()

    owns_client = github_client is None
    if github_client is None:
        if not settings.github_token:
            raise ConfigurationError("Input required and not supplied: github-token")
        github_client = GitHubClient(
            config=GitHubClientConfig(
                api_base_url=settings.github_api_url,
                token=settings.github_token,
            )
        )
    try:
        loop = SummaryLoop(
            github_client=github_client,
            provider_settings=ProviderSettings(
                provider_kind=settings.llm_provider,
                openai_api_key=settings.openai_api_key,
                anthropic_api_key=settings.anthropic_api_key,
                model=settings.llm_model,
            ),
        )
        return loop.run(context=context)
    finally:
        if owns_client:
            github_client.close()


def main() -> int:
    """Console entry point; returns the process exit code."""

    setup_logging()
    try:
        settings = AppSettings()
        logging.getLogger().setLevel(settings.log_level)
        result = run(settings=settings)
    except Exception as exc:  # noqa: BLE001
        logger.error("%s", str(exc) or "An unexpected error occurred")
        return 1
    if result.success:
        logger.info(result.message)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
