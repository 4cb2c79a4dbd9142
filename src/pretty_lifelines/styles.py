from __future__ import annotations

# ============================================================================
# Fixed drawing constants -- diagrams are black strokes on white boxes.
# ============================================================================

STROKE = "black"
FILL = "white"

# Dash pattern shared by lifelines and return arrows
DASH_ARRAY = "5,5"

# Fixed font sizes (px)
FONT_SIZES = {
    # Header labels scale with the header box (0.7 x its height)
    "actor_label": 14,
    "message_label": 12,
}

# Distance between a message line and its label baseline
MESSAGE_BASELINE_OFFSET = 3

ARROW_HEAD = {
    # Marker size in user units
    "size": 10,
}
