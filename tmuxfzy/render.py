"""Frame rendering for the directory picker.

Builds a full ANSI frame from a ``RenderContext`` and writes it in one
``os.write`` call. Only rows inside the selection's visible window get
per-character highlight formatting.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .ansi import clip_ansi_line, display_width
from .selection import MatchResult, SelectionList
from .ui_theme import UITheme

PROMPT = "> "
CURSOR_GLYPH = "█"
SELECTED_MARKER = "▪ "
UNSELECTED_MARKER = "  "
ACTIVE_SESSION_BADGE = "● "
HEADER_ROWS = 2


@dataclass
class RenderContext:
    selection: SelectionList
    theme: UITheme
    width: int
    height: int
    list_start: int = 0
    cursor_visible: bool = True
    active_sessions: frozenset[str] = field(default_factory=frozenset)
    session_names: dict[str, str] = field(default_factory=dict)
    confirm_prompt: str = ""
    stdout_fd: int = 1


def list_rows(height: int, *, confirm_prompt: bool = False) -> int:
    """Return how many result rows fit below the header (and prompt)."""
    reserved = HEADER_ROWS + (1 if confirm_prompt else 0)
    return max(1, height - reserved)


def scroll_list_start(list_start: int, cursor: int | None, rows: int, total: int) -> int:
    """Return a list offset that keeps ``cursor`` inside ``rows`` visible rows."""
    if cursor is None or total <= 0:
        return 0
    rows = max(1, rows)
    if cursor < list_start:
        list_start = cursor
    elif cursor >= list_start + rows:
        list_start = cursor - rows + 1
    return max(0, min(list_start, max(0, total - rows)))


def highlight_label(label: str, indices: tuple[int, ...], base: str, hit: str, reset: str) -> str:
    """Color ``label`` with ``hit`` at ``indices`` and ``base`` elsewhere."""
    if not indices or not hit:
        return f"{base}{label}{reset}" if base else label
    marked = set(indices)
    out: list[str] = [base]
    for idx, ch in enumerate(label):
        if idx in marked:
            out.append(f"{hit}{ch}{reset}{base}")
        else:
            out.append(ch)
    out.append(reset)
    return "".join(out)


def format_result_row(
    result: MatchResult,
    *,
    theme: UITheme,
    is_cursor: bool,
    is_active: bool,
    highlight: bool,
) -> str:
    marker = SELECTED_MARKER if is_cursor else UNSELECTED_MARKER
    base = f"{theme.active}{theme.bold}" if is_cursor else theme.fg
    badge = ""
    if is_active:
        badge = f"{theme.selection}{ACTIVE_SESSION_BADGE}{theme.reset}"
    label = result.entry.label
    if highlight:
        text = highlight_label(label, result.matched_indices, base, theme.selection, theme.reset)
    else:
        text = f"{base}{label}{theme.reset}" if base else label
    return f"{theme.active}{marker}{theme.reset}{badge}{text}"


def build_input_row(context: RenderContext) -> str:
    theme = context.theme
    selection = context.selection
    counter = f"{len(selection)}/{selection.total}"
    cursor = CURSOR_GLYPH if context.cursor_visible else " "
    left = f"{theme.active}{PROMPT}{theme.reset}{theme.fg}{selection.query}{theme.reset}{cursor}"
    gap = context.width - display_width(left) - len(counter)
    if gap < 1:
        return clip_ansi_line(left, context.width)
    return f"{left}{' ' * gap}{theme.inactive}{counter}{theme.reset}"


def build_title_row(context: RenderContext) -> str:
    theme = context.theme
    title = " Results "
    rule_width = max(0, context.width - len(title) - 1)
    return f"{theme.border}─{theme.bold}{title}{theme.reset}{theme.border}{'─' * rule_width}{theme.reset}"


def build_frame_lines(context: RenderContext) -> list[str]:
    """Compose every screen row for the current state."""
    selection = context.selection
    rows = list_rows(context.height, confirm_prompt=bool(context.confirm_prompt))
    window = selection.visible_window(rows)
    lines = [build_input_row(context), build_title_row(context)]
    for row in range(rows):
        idx = context.list_start + row
        if idx >= len(selection):
            lines.append("")
            continue
        result = selection.ranked[idx]
        session_name = context.session_names.get(result.entry.label, "")
        lines.append(
            format_result_row(
                result,
                theme=context.theme,
                is_cursor=idx == selection.cursor,
                is_active=bool(session_name) and session_name in context.active_sessions,
                highlight=idx in window,
            )
        )
    if context.confirm_prompt:
        theme = context.theme
        lines.append(f"{theme.active}{theme.bold}{context.confirm_prompt}{theme.reset}")
    return [clip_ansi_line(line, context.width) for line in lines]


def render_frame(context: RenderContext) -> None:
    out: list[str] = ["\033[H\033[J"]
    lines = build_frame_lines(context)
    for row, line in enumerate(lines):
        out.append(line)
        if "\033" in line:
            out.append("\033[0m")
        if row < len(lines) - 1:
            out.append("\r\n")
    os.write(context.stdout_fd, "".join(out).encode("utf-8", errors="replace"))
