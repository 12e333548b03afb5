"""Merging of the generated summary into a PR description.

The summarizer owns exactly one region of the description, the *marked
section*. It starts at the ``## 🤖 AI Summary`` heading (together with the
blank line that separates it from the preceding text) and ends just before the
blank lines that precede the next top-level heading, or at end of text.
Everything outside that region belongs to the PR author and is preserved
byte for byte.

Headings are recognized line by line: a line starting with ``#`` or ``##``
followed by whitespace (or nothing) is a top-level heading, unless it is inside
a fenced code block.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

AI_SUMMARY_HEADING = "## 🤖 AI Summary"
AI_SUMMARY_MARKER = f"\n\n{AI_SUMMARY_HEADING}\n\n"

_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_TOP_LEVEL_HEADING_RE = re.compile(r"^(#{1,2})(?=[ \t]|$)")
_DEMOTED_LEVEL = 3


@dataclass(frozen=True)
class SectionSpan:
    """Half-open character range ``[start, end)`` of a marked section."""

    start: int
    end: int


@dataclass(frozen=True)
class _Heading:
    offset: int
    text: str


def merge_description(existing_body: str, summary: str) -> str:
    """Returns ``existing_body`` with the marked section set to ``summary``.

    If the body has a marked section, the first one is replaced and any further
    sections are dropped; otherwise the section is appended. Applying the merge
    repeatedly always leaves exactly one section holding the latest summary.
    """

    section = AI_SUMMARY_MARKER + normalize_summary(summary)
    spans = find_marked_sections(existing_body)
    if not spans:
        return existing_body + section

    pieces: list[str] = []
    cursor = 0
    for index, span in enumerate(spans):
        pieces.append(existing_body[cursor : span.start])
        if index == 0:
            pieces.append(section)
        cursor = span.end
    pieces.append(existing_body[cursor:])
    return "".join(pieces)


def has_marked_section(body: str) -> bool:
    """Returns True if ``body`` contains a marked section."""

    return bool(find_marked_sections(body))


def find_marked_sections(body: str) -> list[SectionSpan]:
    """Locates every marked section of ``body`` in document order."""

    headings = _top_level_headings(body)
    spans: list[SectionSpan] = []
    for index, heading in enumerate(headings):
        if heading.text.rstrip() != AI_SUMMARY_HEADING:
            continue
        start = _back_over_line_breaks(body, heading.offset, limit=2)
        if index + 1 < len(headings):
            end = _back_over_line_breaks(body, headings[index + 1].offset)
        else:
            end = len(body)
        spans.append(SectionSpan(start=start, end=end))
    return spans


def normalize_summary(summary: str) -> str:
    """Prepares generated text for use as section content.

    Surrounding whitespace is trimmed, top-level headings are demoted to level
    three and an unterminated code fence is closed. A top-level heading left in
    the summary would end the marked section early, and the next run would then
    treat the rest of the summary as author text.
    """

    lines = summary.split("\n")
    fence: str | None = None
    for index, line in enumerate(lines):
        # Match the way headings are scanned: CRLF endings are ignored.
        content = line.rstrip("\r")
        fence_match = _FENCE_RE.match(content)
        if fence is not None:
            if _closes_fence(fence_match, fence):
                fence = None
            continue
        if fence_match:
            fence = fence_match.group(1)
            continue
        heading_match = _TOP_LEVEL_HEADING_RE.match(content)
        if heading_match:
            padding = "#" * (_DEMOTED_LEVEL - len(heading_match.group(1)))
            lines[index] = padding + line
    text = "\n".join(lines).strip()
    if fence is not None:
        # An unclosed fence would hide the author's next heading.
        text = f"{text}\n{fence}"
    return text


def _top_level_headings(text: str) -> list[_Heading]:
    headings: list[_Heading] = []
    fence: str | None = None
    for offset, line in _iter_lines(text):
        fence_match = _FENCE_RE.match(line)
        if fence is not None:
            if _closes_fence(fence_match, fence):
                fence = None
            continue
        if fence_match:
            fence = fence_match.group(1)
        elif _TOP_LEVEL_HEADING_RE.match(line):
            headings.append(_Heading(offset=offset, text=line))
    return headings


def _iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yields ``(offset, line)`` pairs; lines exclude their LF or CRLF ending."""

    offset = 0
    for raw in text.split("\n"):
        yield offset, raw.rstrip("\r")
        offset += len(raw) + 1


def _closes_fence(match: re.Match[str] | None, fence: str) -> bool:
    if match is None:
        return False
    marker = match.group(1)
    return marker[0] == fence[0] and len(marker) >= len(fence)


def _back_over_line_breaks(text: str, position: int, limit: int | None = None) -> int:
    """Moves ``position`` back over consecutive LF/CRLF line breaks.

    At most ``limit`` breaks are consumed when a limit is given.
    """

    consumed = 0
    while position > 0 and text[position - 1] == "\n":
        if limit is not None and consumed >= limit:
            break
        position -= 1
        if position > 0 and text[position - 1] == "\r":
            position -= 1
        consumed += 1
    return position
