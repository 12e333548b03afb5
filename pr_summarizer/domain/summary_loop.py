"""Summary loop orchestrating a single run.

This module is intentionally synchronous (blocking): every network call
completes before the next stage starts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from pr_summarizer.domain.changes import ChangeCollector
from pr_summarizer.domain.committer import DescriptionCommitter
from pr_summarizer.integrations.github.event_context import EventContext
from pr_summarizer.integrations.github.github_client import GitHubClient
from pr_summarizer.providers.base import ProviderConfig, SummaryProvider
from pr_summarizer.providers.selection import create_provider, resolve_provider_config
from pr_summarizer.rendering.description import has_marked_section, merge_description
from pr_summarizer.rendering.prompt import PromptBuilder


@dataclass(frozen=True)
class ProviderSettings:
    """Caller-supplied provider inputs, before selection."""

    provider_kind: str | None
    openai_api_key: str | None
    anthropic_api_key: str | None
    model: str | None = None


@dataclass(frozen=True)
class RunResult:
    """Result of a single run."""

    success: bool
    message: str
    action: Literal["updated", "appended"]


class SummaryLoop:
    """Coordinates collecting changes, generating a summary and updating the PR."""

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        *,
        github_client: GitHubClient,
        provider_settings: ProviderSettings,
        prompt_builder: PromptBuilder | None = None,
        provider_factory: Callable[[ProviderConfig], SummaryProvider] = create_provider,
    ) -> None:
        self._github_client = github_client
        self._provider_settings = provider_settings
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._provider_factory = provider_factory
        self._collector = ChangeCollector(github_client=github_client)
        self._committer = DescriptionCommitter(github_client=github_client)

    def run(self, *, context: EventContext) -> RunResult:
        """Runs the summarizer for the PR that triggered ``context``.

        Raises:
            MissingContextError: If ``context`` is not a pull request event.
            ProviderConfigError: If no provider is usable.
            ProviderResponseFormatError: If the provider returned no text.
            GitHubApiError: If fetching the files or the PR fails.
        """

        # Both checks run before any network call.
        ref = context.pull_request_ref()
        provider_config = resolve_provider_config(
            provider_kind=self._provider_settings.provider_kind,
            openai_api_key=self._provider_settings.openai_api_key,
            anthropic_api_key=self._provider_settings.anthropic_api_key,
            model=self._provider_settings.model,
        )
        self._logger.info(
            "Summarizing %s#%s with provider=%s model=%s",
            ref.repo,
            ref.number,
            provider_config.kind.value,
            provider_config.model,
        )

        changes = self._collector.fetch(ref)
        prompt = self._prompt_builder.build(changes)
        provider = self._provider_factory(provider_config)
        summary = provider.generate(prompt)

        pull_request = self._github_client.get_pull_request(repo=ref.repo, pr_number=ref.number)
        existing_body = pull_request.body or ""
        self._logger.info("Existing PR description: %s", "present" if existing_body else "empty")
        has_section = has_marked_section(existing_body)
        self._logger.info("Existing AI section: %s", "found" if has_section else "not found")

        action: Literal["updated", "appended"] = "updated" if has_section else "appended"
        updated_body = merge_description(existing_body, summary)
        self._logger.info(
            "Attempting to %s PR description...", "update" if has_section else "append"
        )
        result = self._committer.commit(ref, updated_body)
        if not result.success:
            return RunResult(
                success=False,
                message=f"GitHub API update returned unexpected status: {result.status_code}",
                action=action,
            )
        self._logger.info("PR description %s with new AI-generated content", action)
        return RunResult(success=True, message="Successfully updated PR description", action=action)
