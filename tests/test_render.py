"""Tests for picker frame composition."""

from __future__ import annotations

import unittest
from dataclasses import replace
from pathlib import Path
from unittest import mock

from tmuxfzy.catalog import CatalogEntry
from tmuxfzy.render import (
    ACTIVE_SESSION_BADGE,
    SELECTED_MARKER,
    UNSELECTED_MARKER,
    RenderContext,
    build_frame_lines,
    build_input_row,
    render_frame,
    scroll_list_start,
)
from tmuxfzy.selection import SelectionList
from tmuxfzy.ui_theme import PLAIN_THEME

# Visible stand-ins for escapes so highlight placement is easy to assert.
MARKED_THEME = replace(PLAIN_THEME, name="marked", selection="<", reset=">")


def _selection(*labels: str) -> SelectionList:
    return SelectionList([CatalogEntry(label=label, full_path=Path("/home/a") / label) for label in labels])


class InputRowTests(unittest.TestCase):
    def test_counter_is_right_aligned(self) -> None:
        context = RenderContext(selection=_selection("a", "b", "c"), theme=PLAIN_THEME, width=20, height=10)

        row = build_input_row(context)

        self.assertEqual(row, "> █" + " " * 14 + "3/3")

    def test_counter_tracks_matches_and_query(self) -> None:
        selection = _selection("alpha", "beta", "gamma")
        selection.apply_query("ta")
        context = RenderContext(selection=selection, theme=PLAIN_THEME, width=20, height=10, cursor_visible=False)

        row = build_input_row(context)

        self.assertTrue(row.startswith("> ta "))
        self.assertTrue(row.endswith("1/3"))


class FrameLineTests(unittest.TestCase):
    def test_frame_marks_cursor_row(self) -> None:
        selection = _selection("alpha", "beta")
        selection.move_cursor(1)
        context = RenderContext(selection=selection, theme=PLAIN_THEME, width=40, height=6)

        lines = build_frame_lines(context)

        self.assertEqual(len(lines), 6)
        self.assertIn("Results", lines[1])
        self.assertEqual(lines[2], UNSELECTED_MARKER + "alpha")
        self.assertEqual(lines[3], SELECTED_MARKER + "beta")
        self.assertEqual(lines[4:], ["", ""])

    def test_running_session_gets_badge(self) -> None:
        context = RenderContext(
            selection=_selection("proj1", "proj2"),
            theme=PLAIN_THEME,
            width=40,
            height=5,
            session_names={"proj1": "proj1", "proj2": "proj2"},
            active_sessions=frozenset({"proj2"}),
        )

        lines = build_frame_lines(context)

        self.assertNotIn(ACTIVE_SESSION_BADGE, lines[2])
        self.assertEqual(lines[3], UNSELECTED_MARKER + ACTIVE_SESSION_BADGE + "proj2")

    def test_only_rows_in_visible_window_are_highlighted(self) -> None:
        selection = _selection(*[f"dir{idx:02d}" for idx in range(30)])
        selection.apply_query("d")
        near = RenderContext(selection=selection, theme=MARKED_THEME, width=40, height=7)
        far = replace(near, list_start=20)

        near_lines = build_frame_lines(near)
        far_lines = build_frame_lines(far)

        self.assertTrue(all("<d>" in line for line in near_lines[2:]))
        self.assertTrue(all("<d>" not in line for line in far_lines[2:]))
        self.assertTrue(all("dir2" in line for line in far_lines[2:]))

    def test_confirm_prompt_takes_last_row(self) -> None:
        context = RenderContext(
            selection=_selection(*[f"d{idx}" for idx in range(20)]),
            theme=PLAIN_THEME,
            width=40,
            height=10,
            confirm_prompt="Kill session 'd0'? [y/N]",
        )

        lines = build_frame_lines(context)

        self.assertEqual(len(lines), 10)
        self.assertEqual(lines[-1], "Kill session 'd0'? [y/N]")

    def test_lines_are_clipped_to_width(self) -> None:
        context = RenderContext(selection=_selection("a" * 50), theme=PLAIN_THEME, width=12, height=4)

        lines = build_frame_lines(context)

        self.assertEqual(lines[2], SELECTED_MARKER + "a" * 10)

    def test_render_frame_writes_one_payload_to_context_fd(self) -> None:
        context = RenderContext(selection=_selection("alpha"), theme=PLAIN_THEME, width=20, height=4, stdout_fd=7)

        with mock.patch("tmuxfzy.render.os.write") as write_mock:
            render_frame(context)

        write_mock.assert_called_once()
        fd, payload = write_mock.call_args.args
        self.assertEqual(fd, 7)
        self.assertTrue(payload.startswith(b"\x1b[H\x1b[J"))
        self.assertIn("▪ alpha".encode("utf-8"), payload)


class ScrollTests(unittest.TestCase):
    def test_scroll_keeps_cursor_visible(self) -> None:
        self.assertEqual(scroll_list_start(0, 7, 5, 30), 3)
        self.assertEqual(scroll_list_start(10, 2, 5, 30), 2)
        self.assertEqual(scroll_list_start(4, 6, 5, 30), 4)

    def test_scroll_clamps_to_list_end(self) -> None:
        self.assertEqual(scroll_list_start(28, 29, 5, 30), 25)

    def test_scroll_without_cursor_is_zero(self) -> None:
        self.assertEqual(scroll_list_start(8, None, 5, 30), 0)


if __name__ == "__main__":
    unittest.main()
