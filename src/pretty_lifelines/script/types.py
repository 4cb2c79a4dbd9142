from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

# ============================================================================
# Script diagram types
#
# Models the interpreted and positioned representations of an actor script.
# Actors live on vertical lifelines; time flows downward in logical ticks.
# ============================================================================

# ============================================================================
# Interpreted script -- validated model produced by the interpreter
# ============================================================================

MessageKind = Literal["send", "call", "return"]
LineStyle = Literal["solid", "dashed"]
ArrowHead = Literal["filled", "open"]
ArrowDirection = Literal["right", "left"]


@dataclass(slots=True)
class Activity:
    start_time: int
    # Nesting depth: open activities on the same actor when this one started
    layer: int
    # None while the activity is still open
    stop_time: int | None = None


@dataclass(slots=True)
class Actor:
    name: str
    label: str
    # Index of first appearance among all actors
    display_order: int
    activities: list[Activity] = field(default_factory=list)


@dataclass(slots=True)
class Message:
    name: str
    kind: MessageKind
    label: str
    sender: str
    sender_time: int
    # Sender's innermost open layer at the moment of sending
    sender_layer: int
    # Receiver fields stay None until the message is received
    receiver: str | None = None
    receiver_time: int | None = None
    receiver_layer: int | None = None

    @property
    def received(self) -> bool:
        return self.receiver is not None


@dataclass(slots=True)
class SequenceScript:
    """Validated script -- actors and messages keyed by name, in first-seen order."""
    actors: dict[str, Actor] = field(default_factory=dict)
    messages: dict[str, Message] = field(default_factory=dict)

    @property
    def max_time(self) -> int:
        """Largest stop time across all activities (0 without activities)."""
        return max(
            (
                activity.stop_time or 0
                for actor in self.actors.values()
                for activity in actor.activities
            ),
            default=0,
        )


# ============================================================================
# Positioned script -- ready for SVG rendering
# ============================================================================


@dataclass(slots=True)
class PositionedActor:
    name: str
    label: str
    # Center x of the actor's slot (lifeline position)
    x: float
    # Header box, top-left corner
    box_x: float
    box_y: float
    box_width: float
    box_height: float
    # Baseline of the centered header label
    label_y: float
    font_size: float


@dataclass(slots=True)
class Lifeline:
    """Vertical dashed line from the actor header to the bottom of the diagram."""
    actor: str
    x: float
    top_y: float
    bottom_y: float


@dataclass(slots=True)
class PositionedActivity:
    """Box on a lifeline, shifted right by its nesting layer."""
    actor: str
    layer: int
    x: float
    y: float
    width: float
    height: float


@dataclass(slots=True)
class PositionedMessage:
    name: str
    kind: MessageKind
    label: str
    x1: float
    y1: float
    x2: float
    y2: float
    direction: ArrowDirection
    line_style: LineStyle
    arrow_head: ArrowHead
    # Label anchor (text-anchor="middle")
    label_x: float
    label_y: float
    font_size: float


@dataclass(slots=True)
class PositionedScript:
    width: float
    height: float
    actors: list[PositionedActor] = field(default_factory=list)
    lifelines: list[Lifeline] = field(default_factory=list)
    activities: list[PositionedActivity] = field(default_factory=list)
    messages: list[PositionedMessage] = field(default_factory=list)
