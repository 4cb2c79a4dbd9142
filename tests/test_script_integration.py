"""Integration tests for actor scripts -- end-to-end parse -> layout -> render."""
from __future__ import annotations

import re

import pytest

from pretty_lifelines import render_script, ScriptError


CALL_AND_RETURN = (
    "label A Client\n"
    "label B Server\n"
    "start A\n"
    "start B\n"
    "\n"
    "call A m1 GET /\n"
    "\n"
    "receive B m1\n"
    "\n"
    "return B m2 200 OK\n"
    "\n"
    "receive A m2\n"
    "\n"
    "stop A\n"
    "stop B"
)


class TestScriptDiagrams:
    def test_renders_valid_svg_sized_to_the_canvas(self):
        svg = render_script(CALL_AND_RETURN)
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        # 2 actors, max time 6
        assert 'width="400" height="250"' in svg

    def test_renders_both_arrow_markers(self):
        svg = render_script(CALL_AND_RETURN)
        assert '<marker id="arrow-open"' in svg
        assert '<marker id="arrow-filled"' in svg

    def test_renders_actor_labels(self):
        svg = render_script(CALL_AND_RETURN)
        assert ">Client</text>" in svg
        assert ">Server</text>" in svg

    def test_renders_one_rect_per_header_and_activity(self):
        svg = render_script(CALL_AND_RETURN)
        # 2 headers + A's activity + B's outer and call-serving activities
        assert len(re.findall(r"<rect ", svg)) == 5

    def test_renders_lifelines_and_message_lines(self):
        svg = render_script(CALL_AND_RETURN)
        assert len(re.findall(r"<line ", svg)) == 4
        # 2 dashed lifelines + the dashed return arrow
        assert len(re.findall(r'stroke-dasharray="5,5"', svg)) == 3

    def test_call_uses_filled_marker_and_return_uses_open_marker(self):
        svg = render_script(CALL_AND_RETURN)
        assert svg.count('marker-end="url(#arrow-filled)"') == 1
        assert svg.count('marker-end="url(#arrow-open)"') == 1
        assert ">GET /</text>" in svg
        assert ">200 OK</text>" in svg

    def test_escapes_labels(self):
        svg = render_script(
            "label A <Alice & Bob>\n"
            "start A\n"
            "start B\n"
            "send A m1 \"quoted\"\n"
            "receive B m1\n"
            "stop A\n"
            "stop B"
        )
        assert "&lt;Alice &amp; Bob&gt;" in svg
        assert "&quot;quoted&quot;" in svg

    def test_rendering_is_deterministic(self):
        assert render_script(CALL_AND_RETURN) == render_script(CALL_AND_RETURN)

    def test_malformed_script_raises_instead_of_rendering(self):
        with pytest.raises(ScriptError, match="cannot send message m1 multiple times"):
            render_script("start A\nsend A m1 hi\nsend A m1 bye")

    def test_handles_windows_line_endings(self):
        svg = render_script("start A\r\n\r\nstop A\r\n")
        assert 'height="150"' in svg

    def test_unicode_line_separator_stays_inside_the_label(self):
        svg = render_script("start A\nlabel A foo\u2028bar\nstop A\n")
        assert ">foo bar</text>" in svg
