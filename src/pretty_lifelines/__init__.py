"""pretty-lifelines -- Render actor scripts to sequence diagram SVG."""

from __future__ import annotations

from .errors import ScriptError, ErrorKind
from .script import (
    SequenceScript,
    Actor,
    Activity,
    Message,
    PositionedScript,
    ScriptInterpreter,
    parse_script,
    script_lines,
    layout_script,
    render_script_svg,
)

__all__ = [
    "render_script",
    "parse_script",
    "script_lines",
    "layout_script",
    "render_script_svg",
    "ScriptInterpreter",
    "ScriptError",
    "ErrorKind",
    "SequenceScript",
    "Actor",
    "Activity",
    "Message",
    "PositionedScript",
]


def render_script(text: str) -> str:
    """Render actor script text to an SVG string.

    Raises ScriptError if the script is malformed; no SVG is produced then.
    """
    script = parse_script(script_lines(text))
    positioned = layout_script(script)
    return render_script_svg(positioned)
