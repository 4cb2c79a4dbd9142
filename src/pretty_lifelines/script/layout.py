from __future__ import annotations

import logging

from .types import (
    SequenceScript,
    Actor,
    Message,
    PositionedScript,
    PositionedActor,
    Lifeline,
    PositionedActivity,
    PositionedMessage,
)
from ..styles import FONT_SIZES, MESSAGE_BASELINE_OFFSET, ARROW_HEAD

# ============================================================================
# Script layout engine
#
# Fixed-grid timeline layout: every actor owns a slot of constant width,
# every logical tick is a constant vertical step.
#
# Layout strategy:
#   1. Place actors left to right in display order (first seen, first placed)
#   2. Run each lifeline from the header down to one step past the last tick
#   3. Stack nested activities sideways by layer
#   4. Draw messages between sender and receiver layer positions
#
# Pure function of the model: nothing is mutated, no counters are kept.
# ============================================================================

logger = logging.getLogger(__name__)

# Layout constants specific to lifeline diagrams
LANE = {
    # Vertical space above the first tick (actor headers sit in it)
    "header_height": 50,
    # Vertical step per logical tick
    "step": 25,
    # Horizontal slot per actor
    "slot_width": 200,
    # Actor header box
    "label_width": 100,
    "label_height": 20,
    # Activity box width; nested layers shift by half of it
    "activity_width": 20,
    "activity_offset": 10,
}


def layout_script(script: SequenceScript) -> PositionedScript:
    """Lay out a validated script.

    Returns a fully positioned diagram ready for SVG rendering.
    """
    max_time = script.max_time
    actors = sorted(script.actors.values(), key=lambda a: a.display_order)

    positioned_actors: list[PositionedActor] = []
    lifelines: list[Lifeline] = []
    activities: list[PositionedActivity] = []

    for actor in actors:
        x = _slot_center(actor)

        # 1. Header box centered on the slot, resting on the header line
        positioned_actors.append(
            PositionedActor(
                name=actor.name,
                label=actor.label,
                x=x,
                box_x=x - LANE["label_width"] / 2,
                box_y=LANE["header_height"] - LANE["label_height"],
                box_width=LANE["label_width"],
                box_height=LANE["label_height"],
                label_y=LANE["header_height"] - 0.25 * LANE["label_height"],
                font_size=FONT_SIZES["actor_label"],
            )
        )

        # 2. Lifeline
        lifelines.append(
            Lifeline(
                actor=actor.name,
                x=x,
                top_y=LANE["header_height"],
                bottom_y=_time_y(max_time + 1),
            )
        )

        # 3. Activity boxes
        for activity in actor.activities:
            center = x + activity.layer * LANE["activity_offset"]
            top = _time_y(activity.start_time)
            activities.append(
                PositionedActivity(
                    actor=actor.name,
                    layer=activity.layer,
                    x=center - LANE["activity_width"] / 2,
                    y=top,
                    width=LANE["activity_width"],
                    height=_time_y(activity.stop_time or activity.start_time) - top,
                )
            )

    # 4. Messages
    messages = [
        _layout_message(message, script.actors[message.sender], script.actors[message.receiver])
        for message in script.messages.values()
        if message.receiver is not None
    ]

    width = len(actors) * LANE["slot_width"]
    height = LANE["header_height"] + LANE["step"] * (max_time + 2)
    logger.debug(
        "laid out %d actors, %d messages on %dx%d canvas",
        len(actors), len(messages), width, height,
    )

    return PositionedScript(
        width=width,
        height=height,
        actors=positioned_actors,
        lifelines=lifelines,
        activities=activities,
        messages=messages,
    )


def _layout_message(message: Message, sender: Actor, receiver: Actor) -> PositionedMessage:
    """Position a message arrow between its two layer endpoints."""
    x1 = _slot_center(sender) + message.sender_layer * LANE["activity_offset"]
    x2 = _slot_center(receiver) + (message.receiver_layer or 0) * LANE["activity_offset"]
    y1 = _time_y(message.sender_time)
    y2 = _time_y(message.receiver_time or message.sender_time)

    # Start and end at the activity box edges; leave room for the arrow tip
    half = LANE["activity_width"] / 2
    tip = ARROW_HEAD["size"]
    slot_left = sender.display_order * LANE["slot_width"]
    if sender.display_order < receiver.display_order:
        direction = "right"
        x1 += half
        x2 -= half + tip
        label_x = slot_left + LANE["slot_width"]
    else:
        direction = "left"
        x1 -= half
        x2 += half + tip
        label_x = slot_left

    return PositionedMessage(
        name=message.name,
        kind=message.kind,
        label=message.label,
        x1=x1,
        y1=y1,
        x2=x2,
        y2=y2,
        direction=direction,
        line_style="dashed" if message.kind == "return" else "solid",
        arrow_head="filled" if message.kind == "call" else "open",
        label_x=label_x,
        label_y=y1 - MESSAGE_BASELINE_OFFSET,
        font_size=FONT_SIZES["message_label"],
    )


def _slot_center(actor: Actor) -> float:
    return actor.display_order * LANE["slot_width"] + LANE["slot_width"] / 2


def _time_y(time: int) -> float:
    return LANE["header_height"] + LANE["step"] * time
