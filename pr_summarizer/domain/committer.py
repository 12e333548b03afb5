"""Writes the merged description back to the PR."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pr_summarizer.integrations.github.event_context import PullRequestRef
from pr_summarizer.integrations.github.github_client import GitHubClient


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a description update.

    Attributes:
        success: True only when GitHub answered 200.
        status_code: HTTP status reported by GitHub.
        body_length: Length of the body GitHub reports after the update.
    """

    success: bool
    status_code: int
    body_length: int


class DescriptionCommitter:
    """Persists a PR body and reports how GitHub acknowledged it."""

    _logger = logging.getLogger(__name__)

    def __init__(self, *, github_client: GitHubClient) -> None:
        self._github_client = github_client

    def commit(self, ref: PullRequestRef, body: str) -> CommitResult:
        """Updates the PR body once.

        Any status other than 200, including 4xx and 5xx, is logged as a
        warning and reported through ``CommitResult.success``; the update is not
        retried since it may have been applied anyway.
        """

        update = self._github_client.update_pull_request_body(
            repo=ref.repo, pr_number=ref.number, body=body
        )
        body_length = len(update.body or "")
        success = update.status_code == 200
        if success:
            self._logger.info("GitHub API update successful (Status: %s)", update.status_code)
            self._logger.info("Updated PR description length: %s characters", body_length)
        elif update.message:
            self._logger.warning(
                "GitHub API update returned unexpected status: %s (%s)",
                update.status_code,
                update.message,
            )
        else:
            self._logger.warning(
                "GitHub API update returned unexpected status: %s", update.status_code
            )
        return CommitResult(
            success=success, status_code=update.status_code, body_length=body_length
        )
