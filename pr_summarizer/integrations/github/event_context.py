"""GitHub Actions event context.

The runner writes the webhook payload that triggered the workflow to the file
named by ``GITHUB_EVENT_PATH``. Only pull request events carry a
``pull_request`` object; every other trigger is rejected before any network
call is made.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from pr_summarizer.core.errors import MissingContextError


@dataclass(frozen=True)
class PullRequestRef:
    """Identifies a pull request.

    Attributes:
        repo: Repository in 'owner/repo' format.
        number: Pull request number.
    """

    repo: str
    number: int


class EventContext(BaseModel):
    """Subset of the Actions runtime context used by the summarizer."""

    event_name: str | None = None
    repository: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def load(
        cls,
        *,
        event_path: str | None,
        event_name: str | None = None,
        repository: str | None = None,
    ) -> EventContext:
        """Loads the context from the runner's event payload file.

        A missing path or file yields an empty payload, mirroring how the
        Actions toolkit behaves outside a workflow run.
        """

        payload: dict[str, Any] = {}
        if event_path and Path(event_path).is_file():
            raw = json.loads(Path(event_path).read_text(encoding="utf-8"))
            if isinstance(raw, dict):
                payload = raw
        return cls(event_name=event_name, repository=repository, payload=payload)

    def pull_request_ref(self) -> PullRequestRef:
        """Returns the triggering pull request.

        Raises:
            MissingContextError: If the event is not a pull request event.
        """

        pull_request = self.payload.get("pull_request")
        if not isinstance(pull_request, dict) or not isinstance(pull_request.get("number"), int):
            raise MissingContextError("This action can only be run on pull request events")

        repo = self.repository
        repository = self.payload.get("repository")
        if isinstance(repository, dict) and isinstance(repository.get("full_name"), str):
            repo = repository["full_name"]
        if not repo:
            raise MissingContextError("Unable to determine the repository of the pull request")
        return PullRequestRef(repo=repo, number=pull_request["number"])
