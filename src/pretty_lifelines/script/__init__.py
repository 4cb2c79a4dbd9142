from __future__ import annotations

from .types import (
    SequenceScript,
    Actor,
    Activity,
    Message,
    PositionedScript,
    PositionedActor,
    Lifeline,
    PositionedActivity,
    PositionedMessage,
)
from .parser import ScriptInterpreter, parse_script, script_lines
from .layout import layout_script
from .renderer import render_script_svg

__all__ = [
    "SequenceScript",
    "Actor",
    "Activity",
    "Message",
    "PositionedScript",
    "PositionedActor",
    "Lifeline",
    "PositionedActivity",
    "PositionedMessage",
    "ScriptInterpreter",
    "parse_script",
    "script_lines",
    "layout_script",
    "render_script_svg",
]
