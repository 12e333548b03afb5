"""Change set of a pull request."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from pr_summarizer.integrations.github.event_context import PullRequestRef
from pr_summarizer.integrations.github.github_client import GitHubClient, PullRequestFile


class FileChange(BaseModel):
    """One changed file, as reported by GitHub.

    Attributes:
        filename: Path of the file in the head revision.
        status: GitHub change status (added, modified, removed, renamed, ...).
        additions: Number of added lines.
        deletions: Number of removed lines.
        patch: Unified diff hunk text; absent for binary or oversized diffs.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    status: str
    additions: int = Field(..., ge=0)
    deletions: int = Field(..., ge=0)
    patch: str | None = None

    @classmethod
    def from_pull_request_file(cls, record: PullRequestFile) -> FileChange:
        return cls(
            filename=record.filename,
            status=record.status,
            additions=record.additions,
            deletions=record.deletions,
            patch=record.patch,
        )


ChangeSet = list[FileChange]


class ChangeCollector:
    """Fetches the change set of a pull request from GitHub."""

    _logger = logging.getLogger(__name__)

    def __init__(self, *, github_client: GitHubClient) -> None:
        self._github_client = github_client

    def fetch(self, ref: PullRequestRef) -> ChangeSet:
        """Returns one ``FileChange`` per changed file, in GitHub's order."""

        files = self._github_client.list_pull_request_files(repo=ref.repo, pr_number=ref.number)
        changes = [FileChange.from_pull_request_file(f) for f in files]
        self._logger.info("Fetched %s changed file(s) for %s#%s", len(changes), ref.repo, ref.number)
        return changes
