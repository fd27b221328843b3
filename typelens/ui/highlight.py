"""Rich-text rendering of a character diff (no Qt dependency)."""

from __future__ import annotations

import html
from typing import Iterable, List

from typelens.core.alignment import CharacterDiff, DiffKind
from typelens.ui.colors import HighlightColors

# middle dot stands in for a space that would otherwise be invisible
VISIBLE_SPACE = "·"


def render_char(diff: CharacterDiff) -> str:
    char = diff.char
    if char == " " and diff.kind is not DiffKind.CORRECT:
        char = VISIBLE_SPACE
    text = html.escape(char)
    if char == "\n":
        text = "<br>"
    fg, bg = HighlightColors.for_kind(diff.kind)
    return f'<span class="{diff.kind.value}" style="color:{fg}; background-color:{bg};">{text}</span>'


def diff_to_html(diffs: Iterable[CharacterDiff]) -> str:
    """Wrap each diff entry in a coloured span, merged into one block."""
    parts: List[str] = [render_char(d) for d in diffs]
    return '<div style="font-family: monospace; white-space: pre-wrap;">' + "".join(parts) + "</div>"
