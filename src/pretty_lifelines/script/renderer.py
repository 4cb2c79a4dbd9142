from __future__ import annotations

from .types import (
    PositionedScript,
    PositionedActor,
    Lifeline,
    PositionedActivity,
    PositionedMessage,
)
from ..styles import STROKE, FILL, DASH_ARRAY, ARROW_HEAD

# ============================================================================
# Script diagram SVG renderer
#
# Renders a positioned script to an SVG string. Pure formatting: every
# coordinate and style decision was already made by the layout engine.
#
# Render order (back to front):
#   1. Actor headers and lifelines
#   2. Activity boxes
#   3. Messages (arrows with labels)
# ============================================================================

MARKER_IDS = {
    "open": "arrow-open",
    "filled": "arrow-filled",
}


def render_script_svg(diagram: PositionedScript) -> str:
    """Render a positioned script as an SVG string."""
    parts: list[str] = []

    parts.append(
        f'<svg version="1.1" baseProfile="full" xmlns="http://www.w3.org/2000/svg" '
        f'width="{diagram.width}" height="{diagram.height}">'
    )
    parts.append("<defs>")
    parts.append(_arrow_marker_defs())
    parts.append("</defs>")

    # 1. Actor headers and lifelines
    for actor, lifeline in zip(diagram.actors, diagram.lifelines):
        parts.append(_render_actor(actor))
        parts.append(_render_lifeline(lifeline))

    # 2. Activity boxes (drawn over the lifelines)
    for activity in diagram.activities:
        parts.append(_render_activity(activity))

    # 3. Messages
    for message in diagram.messages:
        parts.append(_render_message(message))

    parts.append("</svg>")
    return "\n".join(parts)


# ============================================================================
# Arrow marker definitions
# ============================================================================


def _arrow_marker_defs() -> str:
    size = ARROW_HEAD["size"]
    return (
        f'  <marker id="{MARKER_IDS["open"]}" viewBox="0 0 10 10" refX="1" refY="5" '
        f'markerWidth="{size}" markerHeight="{size}" orient="auto">\n'
        f'    <path d="M 0 0 L 10 5 L 0 5 L 10 5 L 0 10" fill="none" stroke="{STROKE}" />\n'
        f"  </marker>\n"
        # Filled arrow head for synchronous calls
        f'  <marker id="{MARKER_IDS["filled"]}" viewBox="0 0 10 10" refX="1" refY="5" '
        f'markerWidth="{size}" markerHeight="{size}" orient="auto">\n'
        f'    <path d="M 0 0 L 10 5 L 0 10 z" fill="{STROKE}" />\n'
        f"  </marker>"
    )


# ============================================================================
# Component renderers
# ============================================================================


def _render_actor(actor: PositionedActor) -> str:
    """Render the actor header (box with centered label)."""
    return (
        f'<rect x="{actor.box_x}" y="{actor.box_y}" width="{actor.box_width}" '
        f'height="{actor.box_height}" stroke="{STROKE}" fill="{FILL}" />\n'
        f'<text x="{actor.x}" y="{actor.label_y}" font-size="{actor.font_size}" '
        f'text-anchor="middle">{_escape_xml(actor.label)}</text>'
    )


def _render_lifeline(lifeline: Lifeline) -> str:
    return (
        f'<line x1="{lifeline.x}" x2="{lifeline.x}" '
        f'y1="{lifeline.top_y}" y2="{lifeline.bottom_y}" '
        f'stroke="{STROKE}" stroke-dasharray="{DASH_ARRAY}" />'
    )


def _render_activity(activity: PositionedActivity) -> str:
    return (
        f'<rect x="{activity.x}" y="{activity.y}" width="{activity.width}" '
        f'height="{activity.height}" stroke="{STROKE}" fill="{FILL}" />'
    )


def _render_message(msg: PositionedMessage) -> str:
    """Render a message arrow with its label."""
    dash_array = f' stroke-dasharray="{DASH_ARRAY}"' if msg.line_style == "dashed" else ""
    marker_id = MARKER_IDS[msg.arrow_head]
    return (
        f'<line x1="{msg.x1}" x2="{msg.x2}" y1="{msg.y1}" y2="{msg.y2}" '
        f'stroke="{STROKE}" marker-end="url(#{marker_id})"{dash_array} />\n'
        f'<text x="{msg.label_x}" y="{msg.label_y}" font-size="{msg.font_size}" '
        f'text-anchor="middle">{_escape_xml(msg.label)}</text>'
    )


# ============================================================================
# Utilities
# ============================================================================


def _escape_xml(text: str) -> str:
    """Escape special XML characters in text content."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
