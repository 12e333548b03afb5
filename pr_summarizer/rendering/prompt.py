"""Generation prompt rendering."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from pr_summarizer.domain.changes import FileChange


class PromptBuilder:
    """Renders the generation prompt for a change set from a Jinja2 template.

    The output depends only on the change set's content and order: the changes
    are serialized as a JSON array with a fixed key order, and files without a
    patch simply omit the ``patch`` key.
    """

    def __init__(
        self,
        *,
        template_dir: str | None = None,
        template_name: str = "summary_prompt.md",
    ) -> None:
        env = Environment(
            loader=FileSystemLoader(template_dir or get_default_template_dir()),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        self._template = env.get_template(template_name)

    def build(self, changes: Sequence[FileChange]) -> str:
        """Returns the prompt text for ``changes`` (which may be empty)."""

        return self._template.render(changes_json=serialize_changes(changes)).strip()


def serialize_changes(changes: Sequence[FileChange]) -> str:
    """Serializes changes as pretty-printed JSON, keeping non-ASCII text as is."""

    records = [change.model_dump(exclude_none=True) for change in changes]
    return json.dumps(records, indent=2, ensure_ascii=False)


def get_default_template_dir() -> str:
    """Returns the default template directory path."""

    return str(Path(__file__).parent / "templates")
