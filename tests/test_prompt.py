from __future__ import annotations

import json
from pathlib import Path

from pr_summarizer.domain.changes import FileChange
from pr_summarizer.rendering.prompt import PromptBuilder, serialize_changes


def _changes() -> list[FileChange]:
    return [
        FileChange(
            filename="src/app.py",
            status="modified",
            additions=3,
            deletions=1,
            patch="@@ -1 +1,3 @@\n-old\n+new\n+añadido",
        ),
        FileChange(filename="assets/logo.png", status="added", additions=0, deletions=0),
    ]


def test_prompt_contains_instruction_and_every_change() -> None:
    prompt = PromptBuilder().build(_changes())

    assert prompt.startswith("Please generate a clear and concise pull request description")
    assert "unordered list" in prompt
    assert "introductory paragraph" in prompt
    payload = json.loads(prompt[prompt.index("[") :])
    assert payload == [
        {
            "filename": "src/app.py",
            "status": "modified",
            "additions": 3,
            "deletions": 1,
            "patch": "@@ -1 +1,3 @@\n-old\n+new\n+añadido",
        },
        {"filename": "assets/logo.png", "status": "added", "additions": 0, "deletions": 0},
    ]


def test_prompt_is_deterministic() -> None:
    builder = PromptBuilder()
    assert builder.build(_changes()) == builder.build(_changes())


def test_prompt_for_empty_change_set() -> None:
    prompt = PromptBuilder().build([])
    assert prompt.endswith("[]")


def test_serialize_changes_keeps_key_order_and_omits_missing_patch() -> None:
    serialized = serialize_changes(_changes())
    assert serialized.index('"filename"') < serialized.index('"status"')
    assert serialized.index('"additions"') < serialized.index('"deletions"')
    assert serialized.count('"patch"') == 1
    assert "añadido" in serialized


def test_prompt_builder_uses_custom_template_dir(tmp_path: Path) -> None:
    template_dir = tmp_path / "templates"
    template_dir.mkdir(parents=True)
    (template_dir / "summary_prompt.md").write_text(
        "Summarize:\n{{ changes_json }}\n",
        encoding="utf-8",
    )

    prompt = PromptBuilder(template_dir=str(template_dir)).build([])
    assert prompt == "Summarize:\n[]"
