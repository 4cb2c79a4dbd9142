from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import NoReturn

from .types import SequenceScript, Actor, Activity, Message, MessageKind
from ..errors import ScriptError, ErrorKind

# ============================================================================
# Script interpreter
#
# Interprets the actor script line by line into a validated SequenceScript.
#
# Supported syntax (one command per line, fields split on whitespace):
#   start A                  open a new activity on A
#   stop A                   close A's innermost open activity
#   label A Some text        set A's display label
#   send A m1 Some text      fire-and-forget message m1 from A
#   call A m1 Some text      synchronous call; blocks A until m1 is answered
#   return A m2 Some text    answer a call and close A's innermost activity
#   receive B m1             deliver m1 to B (a call opens an activity on B)
#
# An empty line advances the logical clock by one tick. Everything between
# two empty lines happens at the same time.
# ============================================================================

logger = logging.getLogger(__name__)

# command -> (argument count, whether extra trailing words are allowed)
_ARITY: dict[str, tuple[int, bool]] = {
    "start": (1, False),
    "stop": (1, False),
    "label": (2, True),
    "send": (3, True),
    "call": (3, True),
    "return": (3, True),
    "receive": (2, False),
}


class ScriptInterpreter:
    """Single sequential pass over a script.

    Owns the model while it is being built, together with the transient
    per-actor state that never ends up in the model: the stack of open
    activities and the call each actor is blocked on.
    """

    def __init__(self) -> None:
        self.script = SequenceScript()
        self.time = 1
        self.line_number = 0
        # actor name -> indices into Actor.activities, innermost last
        self._open: dict[str, list[int]] = {}
        # actor name -> name of the call awaiting its return
        self._blocked_by_call: dict[str, str] = {}

    def open_count(self, actor: str) -> int:
        """Number of activities currently open on the actor."""
        return len(self._open.get(actor, ()))

    def blocked_by_call(self, actor: str) -> str | None:
        """Name of the outstanding call the actor waits on, if any."""
        return self._blocked_by_call.get(actor)

    def feed(self, line: str) -> None:
        """Interpret one input line; raises ScriptError on any violation."""
        self.line_number += 1
        fields = line.split()
        if not fields:
            self.time += 1
            return

        command, args = fields[0], fields[1:]
        if command not in _ARITY:
            self._fail("syntax", f"unknown command: {command}")
        self._check_arity(command, args)
        logger.debug("t=%d line %d: %s", self.time, self.line_number, " ".join(fields))

        if command == "start":
            self._start(args[0])
        elif command == "stop":
            self._stop(args[0])
        elif command == "label":
            self._ensure_actor(args[0]).label = " ".join(args[1:])
        elif command == "receive":
            self._receive(args[0], args[1])
        else:
            self._send(command, args[0], args[1], " ".join(args[2:]))  # type: ignore[arg-type]

    def finish(self) -> SequenceScript:
        """Run the end-of-input checks and hand out the finished model."""
        for actor in self.script.actors.values():
            count = self.open_count(actor.name)
            if count > 0:
                raise ScriptError(
                    "completion", f"actor {actor.name} has {count} unfinished activities"
                )
        for name, message in self.script.messages.items():
            if not message.received:
                raise ScriptError("completion", f"message {name} was not received by anyone")

        if logger.isEnabledFor(logging.DEBUG):
            for actor in self.script.actors.values():
                logger.debug("actor %s = %r", actor.name, actor)
            for message in self.script.messages.values():
                logger.debug("message %s = %r", message.name, message)
        return self.script

    # ------------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------------

    def _start(self, name: str) -> None:
        self._open_activity(self._ensure_actor(name))

    def _stop(self, name: str) -> None:
        if self.open_count(name) == 0:
            self._fail("state", f"cannot stop actor {name}: not active")
        self._close_activity(self.script.actors[name])

    def _send(self, kind: MessageKind, sender: str, name: str, label: str) -> None:
        if name in self.script.messages:
            self._fail("state", f"cannot send message {name} multiple times")
        waiting_for = self.blocked_by_call(sender)
        if waiting_for is not None:
            self._fail(
                "state",
                f"actor {sender} cannot send message {name} "
                f"while waiting for response to {waiting_for}",
            )
        if self.open_count(sender) == 0:
            self._fail("state", f"actor {sender} cannot send message {name} while not active")

        self.script.messages[name] = Message(
            name=name,
            kind=kind,
            label=label,
            sender=sender,
            sender_time=self.time,
            sender_layer=self.open_count(sender) - 1,
        )
        if kind == "call":
            self._blocked_by_call[sender] = name
        elif kind == "return":
            # A return always ends the activity that serviced the call
            self._close_activity(self.script.actors[sender])

    def _receive(self, receiver: str, name: str) -> None:
        message = self.script.messages.get(name)
        if message is None:
            self._fail("causality", f"cannot receive message {name}: has not been sent yet")
        if message.received:
            self._fail(
                "causality",
                f"cannot receive message {name}: already received by actor {message.receiver}",
            )

        waiting_for = self.blocked_by_call(receiver)
        if waiting_for is None:
            if message.kind == "return":
                self._fail(
                    "causality",
                    f"actor {receiver} cannot receive return message {name} "
                    f"without having made a call",
                )
        else:
            if message.kind != "return":
                self._fail(
                    "causality",
                    f"actor {receiver} cannot receive message {name} "
                    f"while waiting for response to {waiting_for}",
                )
            called = self.script.messages[waiting_for].receiver
            if called != message.sender:
                expected = f"actor {called}" if called else "a receiver of the call"
                self._fail(
                    "causality",
                    f"actor {receiver} cannot receive response to message {waiting_for} "
                    f"from actor {message.sender} (expected {expected})",
                )

        # Receiving a call opens the activity that services it
        if message.kind != "call" and self.open_count(receiver) == 0:
            self._fail("state", f"actor {receiver} cannot receive message {name} while not active")

        actor = self._ensure_actor(receiver)
        if waiting_for is not None:
            del self._blocked_by_call[receiver]
        if message.kind == "call":
            self._open_activity(actor)

        message.receiver = receiver
        message.receiver_time = self.time
        message.receiver_layer = self.open_count(receiver) - 1

    # ------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------

    def _ensure_actor(self, name: str) -> Actor:
        """Look up an actor, creating it on first mention."""
        actor = self.script.actors.get(name)
        if actor is None:
            actor = Actor(name=name, label=name, display_order=len(self.script.actors))
            self.script.actors[name] = actor
        return actor

    def _open_activity(self, actor: Actor) -> None:
        stack = self._open.setdefault(actor.name, [])
        actor.activities.append(Activity(start_time=self.time, layer=len(stack)))
        stack.append(len(actor.activities) - 1)

    def _close_activity(self, actor: Actor) -> None:
        index = self._open[actor.name].pop()
        actor.activities[index].stop_time = self.time

    def _check_arity(self, command: str, args: list[str]) -> None:
        expected, variadic = _ARITY[command]
        if len(args) == expected or (variadic and len(args) > expected):
            return
        qualifier = "at least " if variadic else ""
        self._fail(
            "syntax",
            f"wrong number of arguments for '{command}': "
            f"expected {qualifier}{expected}, got {len(args)}",
        )

    def _fail(self, kind: ErrorKind, message: str) -> NoReturn:
        raise ScriptError(kind, message, self.line_number)


def script_lines(text: str) -> list[str]:
    """Split script text into lines.

    Only "\\n" ends a line; other Unicode line separators (form feed,
    U+2028, ...) stay inside the line and count as field whitespace.
    A trailing "\\r" is dropped by the field split in feed().
    """
    return text.split("\n")


def parse_script(lines: Iterable[str]) -> SequenceScript:
    """Interpret a script given as lines and return the validated model.

    Raises ScriptError on the first violation.
    """
    interpreter = ScriptInterpreter()
    for line in lines:
        interpreter.feed(line)
    return interpreter.finish()
