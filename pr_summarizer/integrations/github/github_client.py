"""GitHub REST API wrapper.

This module uses GitHub REST v3 endpoints. Authentication is performed via
``Authorization: Bearer <token>`` header.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import httpx
from pydantic import BaseModel, Field


class GitHubApiError(RuntimeError):
    """Raised when GitHub API returns a non-success response."""

    def __init__(self, *, status_code: int, message: str) -> None:
        super().__init__(f"GitHub API error: status={status_code}, message={message}")
        self.status_code = status_code
        self.message = message


class PullRequestFile(BaseModel):
    """Subset of the per-file records returned by ``pulls/{n}/files``."""

    filename: str
    status: str
    additions: int = Field(..., ge=0)
    deletions: int = Field(..., ge=0)
    # Omitted by GitHub for binary files and very large diffs.
    patch: str | None = None


class PullRequest(BaseModel):
    """Subset of PR fields used by the summarizer."""

    number: int = Field(..., ge=1)
    body: str | None = None


class PullRequestUpdate(BaseModel):
    """Outcome of a PR body update as reported by GitHub."""

    status_code: int
    body: str | None = None
    # Response text for non-2xx statuses.
    message: str | None = None


@dataclass(frozen=True)
class GitHubClientConfig:
    """GitHub client configuration."""

    api_base_url: str
    token: str


class GitHubClient:
    """Thin wrapper around GitHub REST API."""

    def __init__(
        self,
        *,
        config: GitHubClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = httpx.Client(
            base_url=self._config.api_base_url,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {self._config.token}",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "pr-summarizer",
            },
            timeout=httpx.Timeout(30.0),
            transport=transport,
        )

    def close(self) -> None:
        """Closes underlying HTTP client."""

        self._client.close()

    def list_pull_request_files(self, *, repo: str, pr_number: int) -> list[PullRequestFile]:
        """Lists the files changed by a PR, in the order GitHub returns them."""

        return [
            PullRequestFile.model_validate(item)
            for item in self._paginate(
                f"/repos/{repo}/pulls/{pr_number}/files",
                params={"per_page": "100"},
            )
        ]

    def get_pull_request(self, *, repo: str, pr_number: int) -> PullRequest:
        """Fetches a PR."""

        resp = self._client.get(f"/repos/{repo}/pulls/{pr_number}")
        self._raise_for_error(resp)
        return PullRequest.model_validate(resp.json())

    def update_pull_request_body(
        self, *, repo: str, pr_number: int, body: str
    ) -> PullRequestUpdate:
        """Updates PR body.

        Unlike the other calls, every HTTP status (including 4xx and 5xx) is
        returned to the caller instead of raising, since the update may have been
        applied anyway. Only transport errors propagate.
        """

        resp = self._client.patch(
            f"/repos/{repo}/pulls/{pr_number}",
            json={"body": body},
        )
        updated_body: str | None = None
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("body"), str):
            updated_body = payload["body"]
        return PullRequestUpdate(
            status_code=resp.status_code,
            body=updated_body,
            message=None if resp.is_success else resp.text,
        )

    def _paginate(self, path: str, *, params: dict[str, str]) -> Iterable[dict[str, object]]:
        next_url: str | None = str(self._client.base_url.join(path))
        current_params: dict[str, str] | None = dict(params)
        seen_urls: set[str] = set()
        while next_url is not None:
            if next_url in seen_urls:
                raise GitHubApiError(
                    status_code=0,
                    message=f"Pagination did not advance: {next_url}",
                )
            seen_urls.add(next_url)
            # An empty params mapping would replace the query of a next link.
            resp = self._client.get(next_url, params=current_params or None)
            self._raise_for_error(resp)
            payload = resp.json()
            if not isinstance(payload, list):
                raise GitHubApiError(
                    status_code=resp.status_code,
                    message="Unexpected payload type for pagination.",
                )
            for item in payload:
                if isinstance(item, dict):
                    yield item
            next_url = self._parse_next_link(resp.headers.get("Link"))
            # The next link already carries the query string.
            current_params = None

    @staticmethod
    def _parse_next_link(link_header: str | None) -> str | None:
        if not link_header:
            return None
        # Example: <https://api.github.com/...page=2>; rel="next", <...>; rel="last"
        parts = [p.strip() for p in link_header.split(",")]
        for part in parts:
            if 'rel="next"' in part:
                left = part.find("<")
                right = part.find(">")
                if left >= 0 and right > left:
                    return part[left + 1 : right]
        return None

    @staticmethod
    def _raise_for_error(resp: httpx.Response) -> None:
        if 200 <= resp.status_code < 300:
            return
        message = resp.text
        raise GitHubApiError(status_code=resp.status_code, message=message)
